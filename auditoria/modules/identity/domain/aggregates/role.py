"""Persisted role with the permissions linked to it."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from auditoria.core.domain.base import utc_now
from auditoria.modules.identity.domain.aggregates.permission import PermissionEntity
from auditoria.modules.identity.domain.enums import Role


@dataclass(frozen=True)
class RoleEntity:
    name: Role
    description: str | None = None
    permissions: tuple[PermissionEntity, ...] = ()
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def is_client(self) -> bool:
        return self.name == Role.CLIENTE

    @property
    def is_admin(self) -> bool:
        return self.name == Role.ADMINISTRADOR

    @property
    def is_manager(self) -> bool:
        return self.name == Role.GERENTE

    @property
    def is_auditor(self) -> bool:
        return self.name == Role.AUDITOR

    @property
    def permission_names(self) -> list[str]:
        return sorted(permission.name for permission in self.permissions)
