"""
Notification Model

SQLModel definition for notification persistence. ``metadata`` is reserved
on declarative classes, so the attribute is ``extra_data`` mapped onto the
``metadata`` column.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import DateTime, Text
from sqlmodel import JSON, Column, Field, SQLModel

from auditoria.core.domain.base import ensure_utc, utc_now
from auditoria.modules.notifications.domain.aggregates.notification import Notification
from auditoria.modules.notifications.domain.enums import NotificationType


class NotificationModel(SQLModel, table=True):
    """Notification persistence model."""

    __tablename__ = "notifications"

    id: UUID = Field(primary_key=True)
    type: str = Field(max_length=16)
    title: str = Field(max_length=200)
    message: str = Field(sa_type=Text)
    link: str | None = Field(default=None, max_length=500)
    extra_data: dict[str, Any] | None = Field(
        default=None, sa_column=Column("metadata", JSON, nullable=True)
    )

    is_read: bool = Field(default=False, index=True)
    read_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))
    recipient_id: UUID = Field(foreign_key="users.id", index=True)
    created_by_id: UUID | None = Field(default=None, foreign_key="users.id")

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now, index=True, sa_type=DateTime(timezone=True)
    )
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    deleted_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationModel":
        """Create model from domain entity."""
        return cls(
            id=notification.id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            link=notification.link,
            extra_data=notification.metadata,
            is_read=notification.is_read,
            read_at=notification.read_at,
            recipient_id=notification.recipient_id,
            created_by_id=notification.created_by_id,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
            deleted_at=notification.deleted_at,
        )

    def to_domain(self) -> Notification:
        """Convert to domain entity."""
        return Notification(
            entity_id=self.id,
            notification_type=NotificationType(self.type),
            title=self.title,
            message=self.message,
            link=self.link,
            metadata=self.extra_data,
            is_read=self.is_read,
            read_at=ensure_utc(self.read_at),
            recipient_id=self.recipient_id,
            created_by_id=self.created_by_id,
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
            deleted_at=ensure_utc(self.deleted_at),
        )
