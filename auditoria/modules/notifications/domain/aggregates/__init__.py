"""Notification aggregates."""

from auditoria.modules.notifications.domain.aggregates.notification import Notification

__all__ = ["Notification"]
