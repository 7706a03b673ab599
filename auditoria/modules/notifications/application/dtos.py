"""Notification response DTOs and mapper."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from auditoria.modules.notifications.domain.aggregates.notification import Notification


class NotificationResponse(BaseModel):
    id: UUID
    type: str
    title: str
    message: str
    link: str | None = None
    metadata: dict[str, Any] | None = None
    is_read: bool
    read_at: datetime | None = None
    recipient_id: UUID
    created_by_id: UUID | None = None
    created_at: datetime


class UnreadCountResponse(BaseModel):
    unread: int


class MarkAllReadResponse(BaseModel):
    marked: int


class NotificationMapper:
    @staticmethod
    def to_response(notification: Notification) -> NotificationResponse:
        return NotificationResponse(
            id=notification.id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            link=notification.link,
            metadata=notification.metadata,
            is_read=notification.is_read,
            read_at=notification.read_at,
            recipient_id=notification.recipient_id,
            created_by_id=notification.created_by_id,
            created_at=notification.created_at,
        )


__all__ = [
    "MarkAllReadResponse",
    "NotificationMapper",
    "NotificationResponse",
    "UnreadCountResponse",
]
