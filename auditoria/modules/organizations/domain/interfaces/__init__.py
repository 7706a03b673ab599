"""Organization domain contracts."""

from auditoria.modules.organizations.domain.interfaces.organization_repository import (
    IOrganizationRepository,
)

__all__ = ["IOrganizationRepository"]
