"""Notification domain events."""

from dataclasses import dataclass
from uuid import UUID

from auditoria.core.domain.base import DomainEvent


@dataclass(frozen=True, kw_only=True)
class NotificationCreated(DomainEvent):
    recipient_id: UUID
    notification_type: str
    title: str


@dataclass(frozen=True, kw_only=True)
class NotificationRead(DomainEvent):
    recipient_id: UUID


__all__ = ["NotificationCreated", "NotificationRead"]
