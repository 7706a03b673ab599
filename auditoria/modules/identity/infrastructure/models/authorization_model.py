"""
Authorization Catalog Models

Persisted roles, permissions, menus and their many-to-many links. Rows are
written by the catalog seeding command from the static configuration.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from auditoria.core.domain.base import ensure_utc, utc_now
from auditoria.modules.identity.domain.aggregates.menu import Menu
from auditoria.modules.identity.domain.aggregates.permission import PermissionEntity
from auditoria.modules.identity.domain.aggregates.role import RoleEntity
from auditoria.modules.identity.domain.enums import Role


class PermissionModel(SQLModel, table=True):
    __tablename__ = "permissions"

    id: UUID = Field(primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    resource: str = Field(index=True, max_length=50)
    action: str = Field(max_length=50)
    description: str | None = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    @classmethod
    def from_domain(cls, permission: PermissionEntity) -> "PermissionModel":
        return cls(
            id=permission.id,
            name=permission.name,
            resource=permission.resource,
            action=permission.action,
            description=permission.description,
            created_at=permission.created_at,
            updated_at=permission.updated_at,
        )

    def to_domain(self) -> PermissionEntity:
        return PermissionEntity(
            id=self.id,
            name=self.name,
            resource=self.resource,
            action=self.action,
            description=self.description,
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
        )


class RoleModel(SQLModel, table=True):
    __tablename__ = "roles"

    id: UUID = Field(primary_key=True)
    name: str = Field(unique=True, index=True, max_length=32)
    description: str | None = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    deleted_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    @classmethod
    def from_domain(cls, role: RoleEntity) -> "RoleModel":
        return cls(
            id=role.id,
            name=role.name.value,
            description=role.description,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )

    def to_domain(self, permissions: list[PermissionEntity] | None = None) -> RoleEntity:
        return RoleEntity(
            id=self.id,
            name=Role(self.name),
            description=self.description,
            permissions=tuple(permissions or ()),
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
        )


class RolePermissionModel(SQLModel, table=True):
    __tablename__ = "role_permissions"

    role_id: UUID = Field(foreign_key="roles.id", primary_key=True)
    permission_id: UUID = Field(foreign_key="permissions.id", primary_key=True)


class MenuModel(SQLModel, table=True):
    __tablename__ = "menus"

    id: UUID = Field(primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    icon: str | None = Field(default=None, max_length=50)
    path: str | None = Field(default=None, max_length=200)
    order: int = Field(default=0)
    is_active: bool = Field(default=True)
    parent_id: UUID | None = Field(default=None, foreign_key="menus.id", index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    deleted_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    @classmethod
    def from_domain(cls, menu: Menu) -> "MenuModel":
        return cls(
            id=menu.id,
            name=menu.name,
            icon=menu.icon,
            path=menu.path,
            order=menu.order,
            is_active=menu.is_active,
            parent_id=menu.parent_id,
            created_at=menu.created_at,
            updated_at=menu.updated_at,
        )

    def to_domain(
        self,
        permission_ids: list[UUID] | None = None,
        children: list[Menu] | None = None,
    ) -> Menu:
        return Menu(
            id=self.id,
            name=self.name,
            icon=self.icon,
            path=self.path,
            order=self.order,
            is_active=self.is_active,
            parent_id=self.parent_id,
            children=tuple(children or ()),
            permission_ids=tuple(permission_ids or ()),
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
        )


class MenuPermissionModel(SQLModel, table=True):
    __tablename__ = "menu_permissions"

    menu_id: UUID = Field(foreign_key="menus.id", primary_key=True)
    permission_id: UUID = Field(foreign_key="permissions.id", primary_key=True)
