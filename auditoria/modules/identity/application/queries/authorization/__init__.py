"""Authorization queries: roles and menus."""

from auditoria.modules.identity.application.queries.authorization.get_role_menus_query import (
    GetRoleMenusQuery,
    GetRoleMenusQueryHandler,
)
from auditoria.modules.identity.application.queries.authorization.get_user_menus_query import (
    GetUserMenusQuery,
    GetUserMenusQueryHandler,
)
from auditoria.modules.identity.application.queries.authorization.list_roles_query import (
    ListRolesQuery,
    ListRolesQueryHandler,
)

__all__ = [
    "GetRoleMenusQuery",
    "GetRoleMenusQueryHandler",
    "GetUserMenusQuery",
    "GetUserMenusQueryHandler",
    "ListRolesQuery",
    "ListRolesQueryHandler",
]
