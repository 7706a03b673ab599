"""Organization repository implementations."""

from auditoria.modules.organizations.infrastructure.repositories.organization_repository import (
    SqlOrganizationRepository,
)

__all__ = ["SqlOrganizationRepository"]
