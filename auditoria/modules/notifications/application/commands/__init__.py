"""Notification commands."""

from auditoria.modules.notifications.application.commands.create_notification_command import (
    CreateNotificationCommand,
    CreateNotificationCommandHandler,
)
from auditoria.modules.notifications.application.commands.mark_all_notifications_read_command import (  # noqa: E501
    MarkAllNotificationsReadCommand,
    MarkAllNotificationsReadCommandHandler,
)
from auditoria.modules.notifications.application.commands.mark_notification_read_command import (
    MarkNotificationReadCommand,
    MarkNotificationReadCommandHandler,
)

__all__ = [
    "CreateNotificationCommand",
    "CreateNotificationCommandHandler",
    "MarkAllNotificationsReadCommand",
    "MarkAllNotificationsReadCommandHandler",
    "MarkNotificationReadCommand",
    "MarkNotificationReadCommandHandler",
]
