"""Organization domain events."""

from dataclasses import dataclass

from auditoria.core.domain.base import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrganizationCreated(DomainEvent):
    name: str


@dataclass(frozen=True, kw_only=True)
class OrganizationUpdated(DomainEvent):
    name: str
    updated_fields: tuple[str, ...]


@dataclass(frozen=True, kw_only=True)
class OrganizationDeleted(DomainEvent):
    name: str


__all__ = ["OrganizationCreated", "OrganizationDeleted", "OrganizationUpdated"]
