"""
Inicializador do domínio Notifications.
"""
from app.database.domain.base import DomainInitializer
from app.database.domain.registry import register_domain

from app.api.notifications.models.notification import NotificationModel


class NotificationsInitializer(DomainInitializer):

    def get_domain_name(self) -> str:
        return "notifications"

    def get_models(self):
        return [NotificationModel]


register_domain(NotificationsInitializer())
