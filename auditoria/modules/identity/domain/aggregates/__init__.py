"""Identity aggregates and entities."""

from auditoria.modules.identity.domain.aggregates.external_profile import ExternalProfile
from auditoria.modules.identity.domain.aggregates.internal_profile import (
    InternalProfile,
    validate_system_roles,
)
from auditoria.modules.identity.domain.aggregates.menu import Menu
from auditoria.modules.identity.domain.aggregates.permission import PermissionEntity
from auditoria.modules.identity.domain.aggregates.role import RoleEntity
from auditoria.modules.identity.domain.aggregates.session import Session
from auditoria.modules.identity.domain.aggregates.user import User, validate_user_roles

__all__ = [
    "ExternalProfile",
    "InternalProfile",
    "Menu",
    "PermissionEntity",
    "RoleEntity",
    "Session",
    "User",
    "validate_system_roles",
    "validate_user_roles",
]
