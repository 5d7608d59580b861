from datetime import datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, constr

from app.api.notifications.models.notification import TipoNotificacao, PrioridadeNotificacao


class CreateNotificationRequest(BaseModel):
    usuario_id: Optional[int] = Field(None, gt=0, description="Vazio = notificação global")
    titulo: constr(strip_whitespace=True, min_length=1, max_length=200)
    mensagem: constr(strip_whitespace=True, min_length=1, max_length=2000)
    tipo: TipoNotificacao
    prioridade: PrioridadeNotificacao = PrioridadeNotificacao.NORMAL
    dados: Optional[Dict[str, Any]] = None
    expira_em: Optional[datetime] = None


class NotificationResponse(BaseModel):
    id: str
    usuario_id: Optional[int] = None
    titulo: str
    mensagem: str
    tipo: TipoNotificacao
    prioridade: PrioridadeNotificacao
    lida: bool
    ativa: bool
    dados: Optional[Dict[str, Any]] = None
    expira_em: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationListResponse(BaseModel):
    notificacoes: List[NotificationResponse]
    total: int
    nao_lidas: int
    has_more: bool


class MarcarTodasLidasResponse(BaseModel):
    atualizadas: int


class LimpezaResponse(BaseModel):
    removidas: int


class NotificationStatsResponse(BaseModel):
    total: int
    nao_lidas: int
    por_tipo: Dict[str, int]
    por_prioridade: Dict[str, int]
