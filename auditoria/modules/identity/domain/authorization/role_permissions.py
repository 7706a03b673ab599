"""
Role to permission mapping.

The mapping is static configuration: roles are not editable at runtime.
Persisted permissions and role links are synchronized from it by the
authorization catalog seeding command.
"""

from collections.abc import Iterable

from auditoria.modules.identity.domain.enums import Action, Resource, Role
from auditoria.modules.identity.domain.value_objects.permission import Permission


def _permissions(resource: Resource, *actions: Action) -> list[Permission]:
    return [Permission.create(resource, action) for action in actions]


ROLE_PERMISSIONS: dict[Role, tuple[Permission, ...]] = {
    Role.ADMINISTRADOR: (
        *_permissions(Resource.USERS, Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE),
        *_permissions(Resource.ROLES, Action.READ),
        *_permissions(
            Resource.AUDITS,
            Action.CREATE,
            Action.READ,
            Action.UPDATE,
            Action.DELETE,
            Action.APPROVE,
            Action.ASSIGN,
        ),
        *_permissions(Resource.FINDINGS, Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE),
        *_permissions(
            Resource.REPORTS,
            Action.CREATE,
            Action.READ,
            Action.UPDATE,
            Action.DELETE,
            Action.EXPORT,
        ),
        *_permissions(Resource.CLIENTS, Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE),
        *_permissions(Resource.SETTINGS, Action.READ, Action.UPDATE),
        *_permissions(Resource.NOTIFICATIONS, Action.READ, Action.CREATE),
    ),
    Role.GERENTE: (
        *_permissions(Resource.USERS, Action.READ),
        *_permissions(
            Resource.AUDITS,
            Action.CREATE,
            Action.READ,
            Action.UPDATE,
            Action.APPROVE,
            Action.ASSIGN,
        ),
        *_permissions(Resource.FINDINGS, Action.READ, Action.UPDATE),
        *_permissions(Resource.REPORTS, Action.CREATE, Action.READ, Action.EXPORT),
        *_permissions(Resource.CLIENTS, Action.READ),
        *_permissions(Resource.NOTIFICATIONS, Action.READ),
    ),
    Role.AUDITOR: (
        *_permissions(Resource.AUDITS, Action.READ, Action.UPDATE),
        *_permissions(Resource.FINDINGS, Action.CREATE, Action.READ, Action.UPDATE),
        *_permissions(Resource.REPORTS, Action.CREATE, Action.READ),
        *_permissions(Resource.CLIENTS, Action.READ),
        *_permissions(Resource.NOTIFICATIONS, Action.READ),
    ),
    Role.CLIENTE: (
        *_permissions(Resource.AUDITS, Action.READ),
        *_permissions(Resource.FINDINGS, Action.READ),
        *_permissions(Resource.REPORTS, Action.READ),
        *_permissions(Resource.NOTIFICATIONS, Action.READ),
    ),
}


class RolePermissionChecker:
    """Pure lookups over ``ROLE_PERMISSIONS``."""

    @staticmethod
    def get_permissions(role: Role) -> list[Permission]:
        """Ordered permissions of ``role`` (a fresh list, no duplicates)."""
        return list(dict.fromkeys(ROLE_PERMISSIONS.get(role, ())))

    @staticmethod
    def get_permissions_as_strings(role: Role) -> list[str]:
        return [permission.value for permission in RolePermissionChecker.get_permissions(role)]

    @staticmethod
    def has_permission(role: Role, permission: Permission) -> bool:
        return permission in ROLE_PERMISSIONS.get(role, ())

    @staticmethod
    def has_all_permissions(role: Role, permissions: Iterable[Permission]) -> bool:
        granted = ROLE_PERMISSIONS.get(role, ())
        return all(permission in granted for permission in permissions)

    @staticmethod
    def has_any_permission(role: Role, permissions: Iterable[Permission]) -> bool:
        granted = ROLE_PERMISSIONS.get(role, ())
        return any(permission in granted for permission in permissions)

    @staticmethod
    def all_permissions() -> list[Permission]:
        """Every permission granted to at least one role, in first-seen order."""
        seen: dict[Permission, None] = {}
        for permissions in ROLE_PERMISSIONS.values():
            for permission in permissions:
                seen.setdefault(permission, None)
        return list(seen)
