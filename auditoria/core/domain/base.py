"""Domain primitives shared by every module.

Architecture:
- ValueObject: immutable wrappers around a primitive (frozen dataclasses)
- DomainEvent: immutable record of something that happened to an aggregate
- Entity: identity, equality by id and creation/modification timestamps
- AggregateRoot: entity owning a consistency boundary, a soft-delete marker
  and a buffer of pending domain events

Aggregates never publish their own events. Application handlers drain the
buffer through the unit of work, which publishes only after commit.
"""

from abc import ABC
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any, TypeVar
from uuid import UUID, uuid4


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops the offset)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# =====================================================================================
# VALUE OBJECT BASE CLASS
# =====================================================================================


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base value object.

    Concrete value objects are frozen dataclasses with a single ``value``
    field; normalization happens in ``__post_init__`` through
    ``object.__setattr__`` and validation raises a typed domain error.
    """

    def __str__(self) -> str:
        return str(getattr(self, "value", super().__str__()))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =====================================================================================
# DOMAIN EVENT BASE CLASS
# =====================================================================================


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Base domain event.

    Subclasses are frozen keyword-only dataclasses carrying identifiers and
    primitive payload only, never aggregate references.
    """

    aggregate_id: UUID
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utc_now)

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        data = {}
        for key, value in asdict(self).items():
            if isinstance(value, UUID):
                data[key] = str(value)
            elif isinstance(value, datetime):
                data[key] = value.isoformat()
            else:
                data[key] = value
        data["event_type"] = self.event_type
        return data


# =====================================================================================
# ENTITY BASE CLASS
# =====================================================================================


class Entity(ABC):
    """
    Base entity with identity and timestamps.

    The id is assigned once at construction (generated when omitted) and is
    read-only afterwards.
    """

    def __init__(
        self,
        entity_id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = entity_id or uuid4()
        self.created_at = ensure_utc(created_at) or utc_now()
        self.updated_at = ensure_utc(updated_at) or self.created_at

    @property
    def id(self) -> UUID:
        return self._id

    def touch(self) -> None:
        """Advance ``updated_at`` to now."""
        self.updated_at = utc_now()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"


# =====================================================================================
# AGGREGATE ROOT CLASS
# =====================================================================================


class AggregateRoot(Entity):
    """
    Aggregate root with soft delete and a domain event buffer.

    Invariant: ``deleted_at is not None`` if and only if ``is_deleted``.
    ``soft_delete`` and ``restore`` are no-ops when the aggregate is already in
    the target state, so calling them twice never emits or changes anything.

    Usage Example:
        class Notification(AggregateRoot):
            def mark_as_read(self) -> None:
                if self.is_read:
                    return
                self.is_read = True
                self.touch()
                self.add_domain_event(NotificationRead(aggregate_id=self.id))
    """

    def __init__(
        self,
        entity_id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        super().__init__(entity_id, created_at, updated_at)
        self.deleted_at = ensure_utc(deleted_at)
        self._domain_events: list[DomainEvent] = []

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        if self.is_deleted:
            return
        self.deleted_at = utc_now()
        self.touch()

    def restore(self) -> None:
        if not self.is_deleted:
            return
        self.deleted_at = None
        self.touch()

    def add_domain_event(self, event: DomainEvent) -> None:
        if not isinstance(event, DomainEvent):
            raise TypeError("Event must be a DomainEvent instance")
        self._domain_events.append(event)

    @property
    def domain_events(self) -> list[DomainEvent]:
        """Snapshot of pending events; mutating it does not affect the buffer."""
        return list(self._domain_events)

    def clear_domain_events(self) -> list[DomainEvent]:
        """Drain and return pending events."""
        events = list(self._domain_events)
        self._domain_events.clear()
        return events

    @property
    def has_domain_events(self) -> bool:
        return bool(self._domain_events)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"id={self.id}, "
            f"events={len(self._domain_events)}, "
            f"deleted={self.is_deleted})"
        )


AggregateT = TypeVar("AggregateT", bound=AggregateRoot)

__all__ = [
    "AggregateRoot",
    "AggregateT",
    "DomainEvent",
    "Entity",
    "ValueObject",
    "ensure_utc",
    "utc_now",
]
