"""Notification queries."""

from auditoria.modules.notifications.application.queries.get_unread_count_query import (
    GetUnreadCountQuery,
    GetUnreadCountQueryHandler,
)
from auditoria.modules.notifications.application.queries.list_notifications_query import (
    ListNotificationsQuery,
    ListNotificationsQueryHandler,
)

__all__ = [
    "GetUnreadCountQuery",
    "GetUnreadCountQueryHandler",
    "ListNotificationsQuery",
    "ListNotificationsQueryHandler",
]
