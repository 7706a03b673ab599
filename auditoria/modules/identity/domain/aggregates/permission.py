"""Persisted permission row, the stored counterpart of the ``Permission`` value object."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from auditoria.core.domain.base import utc_now
from auditoria.modules.identity.domain.enums import Action, Resource
from auditoria.modules.identity.domain.value_objects import Permission


@dataclass(frozen=True)
class PermissionEntity:
    name: str
    resource: str
    action: str
    description: str | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_permission(
        cls, permission: Permission, description: str | None = None
    ) -> "PermissionEntity":
        return cls(
            name=permission.value,
            resource=permission.resource.value,
            action=permission.action.value,
            description=description,
        )

    def allows(self, resource: Resource | str, action: Action | str) -> bool:
        resource = resource.value if isinstance(resource, Resource) else resource
        action = action.value if isinstance(action, Action) else action
        return self.resource == resource and self.action == action

    @property
    def is_read_permission(self) -> bool:
        return self.action == Action.READ.value

    @property
    def is_write_permission(self) -> bool:
        return self.action in (Action.CREATE.value, Action.UPDATE.value, Action.DELETE.value)

    def to_permission(self) -> Permission:
        return Permission.create(Resource(self.resource), Action(self.action))
