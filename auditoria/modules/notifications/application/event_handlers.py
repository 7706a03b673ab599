"""Audit trail for notification events."""

from auditoria.core.events import AuditLogListener, InMemoryEventBus
from auditoria.modules.notifications.domain.events import NotificationCreated, NotificationRead

NOTIFICATION_AUDIT_ACTIONS = {
    NotificationCreated: "notification.created",
    NotificationRead: "notification.read",
}


def register_notification_event_handlers(event_bus: InMemoryEventBus) -> None:
    AuditLogListener("notifications", NOTIFICATION_AUDIT_ACTIONS).register(event_bus)
