"""Organization persistence models."""

from auditoria.modules.organizations.infrastructure.models.organization_model import (
    OrganizationModel,
)

__all__ = ["OrganizationModel"]
