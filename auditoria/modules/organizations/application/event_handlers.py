"""Audit trail for organization lifecycle events."""

from auditoria.core.events import AuditLogListener, InMemoryEventBus
from auditoria.modules.organizations.domain.events import (
    OrganizationCreated,
    OrganizationDeleted,
    OrganizationUpdated,
)

ORGANIZATION_AUDIT_ACTIONS = {
    OrganizationCreated: "organization.created",
    OrganizationUpdated: "organization.updated",
    OrganizationDeleted: "organization.deleted",
}


def register_organization_event_handlers(event_bus: InMemoryEventBus) -> None:
    AuditLogListener("organizations", ORGANIZATION_AUDIT_ACTIONS).register(event_bus)
