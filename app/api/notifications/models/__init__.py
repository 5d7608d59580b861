from app.api.notifications.models.notification import (
    NotificationModel,
    TipoNotificacao,
    PrioridadeNotificacao,
)

__all__ = ["NotificationModel", "TipoNotificacao", "PrioridadeNotificacao"]
