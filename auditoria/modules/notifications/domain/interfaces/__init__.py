"""Notification domain contracts."""

from auditoria.modules.notifications.domain.interfaces.notification_repository import (
    INotificationRepository,
)

__all__ = ["INotificationRepository"]
