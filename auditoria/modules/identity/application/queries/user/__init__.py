"""User queries."""

from auditoria.modules.identity.application.queries.user.get_user_query import (
    GetUserQuery,
    GetUserQueryHandler,
)
from auditoria.modules.identity.application.queries.user.list_users_query import (
    ListUsersQuery,
    ListUsersQueryHandler,
)

__all__ = ["GetUserQuery", "GetUserQueryHandler", "ListUsersQuery", "ListUsersQueryHandler"]
