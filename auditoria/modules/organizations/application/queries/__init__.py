"""Organization queries."""

from auditoria.modules.organizations.application.queries.get_organization_query import (
    GetOrganizationQuery,
    GetOrganizationQueryHandler,
)
from auditoria.modules.organizations.application.queries.list_organizations_query import (
    ListOrganizationsQuery,
    ListOrganizationsQueryHandler,
)

__all__ = [
    "GetOrganizationQuery",
    "GetOrganizationQueryHandler",
    "ListOrganizationsQuery",
    "ListOrganizationsQueryHandler",
]
