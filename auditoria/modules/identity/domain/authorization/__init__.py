"""Static authorization model: role permissions and navigation menus."""

from auditoria.modules.identity.domain.authorization.menu_config import (
    MENU_CONFIG,
    MenuFilter,
    MenuItem,
)
from auditoria.modules.identity.domain.authorization.role_permissions import (
    ROLE_PERMISSIONS,
    RolePermissionChecker,
)

__all__ = [
    "MENU_CONFIG",
    "ROLE_PERMISSIONS",
    "MenuFilter",
    "MenuItem",
    "RolePermissionChecker",
]
