"""Identity domain events."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from auditoria.core.domain.base import DomainEvent

# =====================================================================================
# USER EVENTS
# =====================================================================================


@dataclass(frozen=True, kw_only=True)
class UserCreated(DomainEvent):
    email: str
    username: str
    user_type: str
    roles: tuple[str, ...]


@dataclass(frozen=True, kw_only=True)
class UserUpdated(DomainEvent):
    updated_fields: tuple[str, ...]


@dataclass(frozen=True, kw_only=True)
class UserStatusChanged(DomainEvent):
    status: str


@dataclass(frozen=True, kw_only=True)
class UserLocked(DomainEvent):
    lock_until: datetime
    failed_attempts: int


@dataclass(frozen=True, kw_only=True)
class UserDeleted(DomainEvent):
    email: str


# =====================================================================================
# SESSION EVENTS
# =====================================================================================


@dataclass(frozen=True, kw_only=True)
class SessionCreated(DomainEvent):
    user_id: UUID
    role: str
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class SessionInvalidated(DomainEvent):
    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class SessionRoleSwitched(DomainEvent):
    user_id: UUID
    previous_role: str
    new_role: str


__all__ = [
    "SessionCreated",
    "SessionInvalidated",
    "SessionRoleSwitched",
    "UserCreated",
    "UserDeleted",
    "UserLocked",
    "UserStatusChanged",
    "UserUpdated",
]
