"""Organization value objects."""

from auditoria.modules.organizations.domain.value_objects.organization_name import (
    OrganizationName,
)

__all__ = ["OrganizationName"]
