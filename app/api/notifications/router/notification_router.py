from typing import Optional

from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.notifications.models.notification import TipoNotificacao
from app.api.notifications.schemas.notification_schemas import (
    CreateNotificationRequest,
    NotificationResponse,
    NotificationListResponse,
    MarcarTodasLidasResponse,
    LimpezaResponse,
    NotificationStatsResponse,
)
from app.api.notifications.services.notification_service import NotificationService
from app.core.admin_dependencies import get_current_user
from app.core.authorization import require_gestor
from app.database.db_connection import get_db

router = APIRouter(
    prefix="/api/notifications",
    tags=["Notifications"],
    dependencies=[Depends(get_current_user)],
)


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


@router.get("", response_model=NotificationListResponse)
def listar_notificacoes(
    tipo: Optional[TipoNotificacao] = Query(None),
    lida: Optional[bool] = Query(None),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: NotificationService = Depends(get_notification_service),
):
    return svc.listar(current_user, tipo=tipo, lida=lida, limit=limit, offset=offset)


@router.post(
    "",
    response_model=NotificationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_gestor)],
)
def criar_notificacao(req: CreateNotificationRequest, svc: NotificationService = Depends(get_notification_service)):
    return svc.criar_manual(req)


@router.put("/marcar-todas-lidas", response_model=MarcarTodasLidasResponse)
def marcar_todas_lidas(
    current_user: UsuarioModel = Depends(get_current_user),
    svc: NotificationService = Depends(get_notification_service),
):
    return MarcarTodasLidasResponse(atualizadas=svc.marcar_todas_lidas(current_user))


@router.post("/limpeza", response_model=LimpezaResponse, dependencies=[Depends(require_gestor)])
def limpar_expiradas(svc: NotificationService = Depends(get_notification_service)):
    return LimpezaResponse(removidas=svc.limpar_expiradas())


@router.get("/estatisticas", response_model=NotificationStatsResponse, dependencies=[Depends(require_gestor)])
def estatisticas(svc: NotificationService = Depends(get_notification_service)):
    return svc.estatisticas()


@router.get("/{notification_id}", response_model=NotificationResponse)
def buscar_notificacao(
    notification_id: str = Path(...),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: NotificationService = Depends(get_notification_service),
):
    return svc.buscar(notification_id, current_user)


@router.put("/{notification_id}/lida", response_model=NotificationResponse)
def marcar_lida(
    notification_id: str = Path(...),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: NotificationService = Depends(get_notification_service),
):
    return svc.marcar_lida(notification_id, current_user)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def remover_notificacao(
    notification_id: str = Path(...),
    current_user: UsuarioModel = Depends(get_current_user),
    svc: NotificationService = Depends(get_notification_service),
):
    svc.remover(notification_id, current_user)
