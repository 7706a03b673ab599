"""Notification enumerations."""

from enum import Enum


class NotificationType(Enum):
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


__all__ = ["NotificationType"]
