"""Domain layer core classes."""

from auditoria.core.domain.base import (
    AggregateRoot,
    DomainEvent,
    Entity,
    ValueObject,
    ensure_utc,
    utc_now,
)

__all__ = [
    "AggregateRoot",
    "DomainEvent",
    "Entity",
    "ValueObject",
    "ensure_utc",
    "utc_now",
]
