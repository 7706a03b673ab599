"""Notification domain errors."""

from typing import Any

from auditoria.core.errors import ForbiddenError, NotFoundError, ValidationError


class InvalidNotificationDataError(ValidationError):
    default_code = "INVALID_NOTIFICATION_DATA"


class NotificationNotFoundError(NotFoundError):
    default_code = "NOTIFICATION_NOT_FOUND"

    def __init__(self, identifier: Any, **kwargs: Any) -> None:
        super().__init__("Notificación", identifier, **kwargs)


class NotificationOwnershipError(ForbiddenError):
    default_code = "NOTIFICATION_FORBIDDEN"

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("user_message", "La notificación no pertenece al usuario")
        super().__init__("Notification does not belong to user", **kwargs)


__all__ = [
    "InvalidNotificationDataError",
    "NotificationNotFoundError",
    "NotificationOwnershipError",
]
