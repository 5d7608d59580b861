from datetime import datetime
from typing import Optional, List, Tuple

from sqlalchemy import or_, desc, func
from sqlalchemy.orm import Session

from app.api.notifications.models.notification import NotificationModel, TipoNotificacao


class NotificationRepository:
    """Repositório para operações com notificações"""

    def __init__(self, db: Session):
        self.db = db

    def _visiveis(self, usuario_id: int):
        """Notificações do próprio usuário e as globais, somente ativas."""
        return self.db.query(NotificationModel).filter(
            NotificationModel.ativa.is_(True),
            or_(
                NotificationModel.usuario_id == usuario_id,
                NotificationModel.usuario_id.is_(None),
            ),
        )

    def create(self, **data) -> NotificationModel:
        notification = NotificationModel(**data)
        self.db.add(notification)
        self.db.flush()
        return notification

    def get_by_id(self, notification_id: str) -> Optional[NotificationModel]:
        return (
            self.db.query(NotificationModel)
            .filter(NotificationModel.id == notification_id, NotificationModel.ativa.is_(True))
            .first()
        )

    def list_for_user(
        self,
        usuario_id: int,
        *,
        tipo: Optional[TipoNotificacao] = None,
        lida: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[NotificationModel], int]:
        query = self._visiveis(usuario_id)
        if tipo is not None:
            query = query.filter(NotificationModel.tipo == tipo)
        if lida is not None:
            query = query.filter(NotificationModel.lida.is_(lida))

        total = query.count()
        itens = (
            query.order_by(desc(NotificationModel.created_at), desc(NotificationModel.id))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return itens, total

    def count_nao_lidas(self, usuario_id: int) -> int:
        return self._visiveis(usuario_id).filter(NotificationModel.lida.is_(False)).count()

    def mark_all_read(self, usuario_id: int) -> int:
        return (
            self._visiveis(usuario_id)
            .filter(NotificationModel.lida.is_(False))
            .update({NotificationModel.lida: True}, synchronize_session=False)
        )

    def deactivate_expired(self, agora: datetime) -> int:
        return (
            self.db.query(NotificationModel)
            .filter(
                NotificationModel.ativa.is_(True),
                NotificationModel.expira_em.isnot(None),
                NotificationModel.expira_em < agora,
            )
            .update({NotificationModel.ativa: False}, synchronize_session=False)
        )

    def count_grouped(self, coluna) -> dict:
        rows = (
            self.db.query(coluna, func.count(NotificationModel.id))
            .filter(NotificationModel.ativa.is_(True))
            .group_by(coluna)
            .all()
        )
        return {valor.value: total for valor, total in rows}

    def stats(self) -> dict:
        base = self.db.query(NotificationModel).filter(NotificationModel.ativa.is_(True))
        return {
            "total": base.count(),
            "nao_lidas": base.filter(NotificationModel.lida.is_(False)).count(),
            "por_tipo": self.count_grouped(NotificationModel.tipo),
            "por_prioridade": self.count_grouped(NotificationModel.prioridade),
        }
