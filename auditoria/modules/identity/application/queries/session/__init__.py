"""Session queries."""

from auditoria.modules.identity.application.queries.session.list_my_sessions_query import (
    ListMySessionsQuery,
    ListMySessionsQueryHandler,
)
from auditoria.modules.identity.application.queries.session.resolve_principal_query import (
    Principal,
    ResolvePrincipalQuery,
    ResolvePrincipalQueryHandler,
)

__all__ = [
    "ListMySessionsQuery",
    "ListMySessionsQueryHandler",
    "Principal",
    "ResolvePrincipalQuery",
    "ResolvePrincipalQueryHandler",
]
