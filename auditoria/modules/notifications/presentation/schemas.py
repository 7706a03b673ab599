"""Notification request bodies."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel


class CreateNotificationRequest(BaseModel):
    recipient_id: UUID
    title: str
    message: str
    type: str = "INFO"
    link: str | None = None
    metadata: dict[str, Any] | None = None


__all__ = ["CreateNotificationRequest"]
