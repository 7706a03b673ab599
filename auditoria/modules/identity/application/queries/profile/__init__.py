"""External profile and internal user queries."""

from auditoria.modules.identity.application.queries.profile.get_external_profile_query import (
    GetExternalProfileQuery,
    GetExternalProfileQueryHandler,
)
from auditoria.modules.identity.application.queries.profile.list_external_profiles_query import (
    ListExternalProfilesQuery,
    ListExternalProfilesQueryHandler,
)
from auditoria.modules.identity.application.queries.profile.list_internal_users_query import (
    ListInternalUsersQuery,
    ListInternalUsersQueryHandler,
)

__all__ = [
    "GetExternalProfileQuery",
    "GetExternalProfileQueryHandler",
    "ListExternalProfilesQuery",
    "ListExternalProfilesQueryHandler",
    "ListInternalUsersQuery",
    "ListInternalUsersQueryHandler",
]
