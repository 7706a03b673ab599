"""Identity domain enumerations."""

from enum import Enum


class Role(Enum):
    """Application roles. CLIENTE is the only external role."""

    ADMINISTRADOR = "administrador"
    GERENTE = "gerente"
    AUDITOR = "auditor"
    CLIENTE = "cliente"

    @property
    def is_internal(self) -> bool:
        return self != Role.CLIENTE

    @classmethod
    def internal_roles(cls) -> list["Role"]:
        return [role for role in cls if role.is_internal]


class Resource(Enum):
    """Protected resources."""

    USERS = "users"
    ROLES = "roles"
    AUDITS = "audits"
    FINDINGS = "findings"
    REPORTS = "reports"
    CLIENTS = "clients"
    SETTINGS = "settings"
    NOTIFICATIONS = "notifications"


class Action(Enum):
    """Operations on a resource."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    EXPORT = "export"
    APPROVE = "approve"
    ASSIGN = "assign"

    @property
    def is_write(self) -> bool:
        return self in (Action.CREATE, Action.UPDATE, Action.DELETE)


class UserType(Enum):
    """Internal staff or external (client organization) user. Fixed at creation."""

    INTERNAL = "INTERNAL"
    EXTERNAL = "EXTERNAL"


class UserStatus(Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


__all__ = ["Action", "Resource", "Role", "UserStatus", "UserType"]
