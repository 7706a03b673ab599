"""Notification repository implementations."""

from auditoria.modules.notifications.infrastructure.repositories.notification_repository import (
    SqlNotificationRepository,
)

__all__ = ["SqlNotificationRepository"]
