"""
Notification Aggregate

An in-app message addressed to exactly one recipient user. Delivery
(websocket push, email) is outside the domain; handlers react to
``NotificationCreated``.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from auditoria.core.domain.base import AggregateRoot, ensure_utc, utc_now
from auditoria.modules.notifications.domain.enums import NotificationType
from auditoria.modules.notifications.domain.errors import InvalidNotificationDataError
from auditoria.modules.notifications.domain.events import NotificationCreated, NotificationRead

MAX_TITLE_LENGTH = 200


def _parse_type(value: NotificationType | str | None) -> NotificationType:
    if isinstance(value, NotificationType):
        return value
    try:
        return NotificationType(str(value).upper())
    except ValueError as e:
        raise InvalidNotificationDataError(
            f"Tipo de notificación inválido: {value}", field="type"
        ) from e


class Notification(AggregateRoot):
    def __init__(
        self,
        *,
        notification_type: NotificationType,
        title: str,
        message: str,
        recipient_id: UUID,
        link: str | None = None,
        metadata: dict[str, Any] | None = None,
        is_read: bool = False,
        read_at: datetime | None = None,
        created_by_id: UUID | None = None,
        entity_id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        super().__init__(entity_id, created_at, updated_at, deleted_at)
        self.type = notification_type
        self.title = title
        self.message = message
        self.recipient_id = recipient_id
        self.link = link
        self.metadata = metadata
        self.is_read = is_read
        self.read_at = ensure_utc(read_at)
        self.created_by_id = created_by_id

    @classmethod
    def create(
        cls,
        *,
        notification_type: NotificationType | str,
        title: str | None,
        message: str | None,
        recipient_id: UUID | None,
        link: str | None = None,
        metadata: dict[str, Any] | None = None,
        created_by_id: UUID | None = None,
    ) -> "Notification":
        """Validate, trim and emit ``NotificationCreated``."""
        if not title or not title.strip():
            raise InvalidNotificationDataError("El título es requerido", field="title")
        if len(title.strip()) > MAX_TITLE_LENGTH:
            raise InvalidNotificationDataError(
                f"El título no puede exceder {MAX_TITLE_LENGTH} caracteres", field="title"
            )
        if not message or not message.strip():
            raise InvalidNotificationDataError("El mensaje es requerido", field="message")
        if recipient_id is None:
            raise InvalidNotificationDataError(
                "El destinatario es requerido", field="recipient_id"
            )

        notification = cls(
            notification_type=_parse_type(notification_type),
            title=title.strip(),
            message=message.strip(),
            recipient_id=recipient_id,
            link=(link or "").strip() or None,
            metadata=metadata or None,
            created_by_id=created_by_id,
        )
        notification.add_domain_event(
            NotificationCreated(
                aggregate_id=notification.id,
                recipient_id=recipient_id,
                notification_type=notification.type.value,
                title=notification.title,
            )
        )
        return notification

    @property
    def is_unread(self) -> bool:
        return not self.is_read

    def belongs_to(self, user_id: UUID) -> bool:
        return self.recipient_id == user_id

    def mark_as_read(self) -> None:
        """Idempotent: only the first call sets ``read_at`` and emits ``NotificationRead``."""
        if self.is_read:
            return
        self.is_read = True
        self.read_at = utc_now()
        self.touch()
        self.add_domain_event(
            NotificationRead(aggregate_id=self.id, recipient_id=self.recipient_id)
        )
