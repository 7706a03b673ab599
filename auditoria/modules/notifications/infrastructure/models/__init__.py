"""Notification persistence models."""

from auditoria.modules.notifications.infrastructure.models.notification_model import (
    NotificationModel,
)

__all__ = ["NotificationModel"]
