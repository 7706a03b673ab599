"""
Authorization Catalog Repositories

Permissions, roles and menus with their link tables.
"""

from collections import defaultdict
from uuid import UUID

from sqlmodel import col, select

from auditoria.core.infrastructure.repository import SqlRepository
from auditoria.modules.identity.domain.aggregates.menu import Menu
from auditoria.modules.identity.domain.aggregates.permission import PermissionEntity
from auditoria.modules.identity.domain.aggregates.role import RoleEntity
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.infrastructure.models.authorization_model import (
    MenuModel,
    MenuPermissionModel,
    PermissionModel,
    RoleModel,
    RolePermissionModel,
)


class SqlPermissionRepository(SqlRepository[PermissionModel]):
    model_type = PermissionModel

    async def find_by_name(self, name: str) -> PermissionEntity | None:
        model = await self._first(select(PermissionModel).where(PermissionModel.name == name))
        return model.to_domain() if model else None

    async def find_all(self) -> list[PermissionEntity]:
        statement = select(PermissionModel).order_by(col(PermissionModel.name))
        return [model.to_domain() for model in await self._all(statement)]

    async def find_ids_for_roles(self, roles: list[Role]) -> set[UUID]:
        if not roles:
            return set()
        statement = (
            select(RolePermissionModel.permission_id)
            .join(RoleModel, col(RoleModel.id) == col(RolePermissionModel.role_id))
            .where(
                col(RoleModel.name).in_([role.value for role in roles]),
                col(RoleModel.deleted_at).is_(None),
            )
        )
        return set(await self._all(statement))

    async def save(self, permission: PermissionEntity) -> PermissionEntity:
        """Upsert by name so reseeding keeps existing ids."""
        existing = await self._first(
            select(PermissionModel).where(PermissionModel.name == permission.name)
        )
        if existing is None:
            model = await self._upsert(PermissionModel.from_domain(permission))
            return model.to_domain()

        existing.resource = permission.resource
        existing.action = permission.action
        existing.description = permission.description
        self.session.add(existing)
        await self._flush()
        return existing.to_domain()


class SqlRoleRepository(SqlRepository[RoleModel]):
    model_type = RoleModel

    async def find_by_name(self, name: Role) -> RoleEntity | None:
        model = await self._first(select(RoleModel).where(RoleModel.name == name.value))
        if model is None:
            return None
        permissions = await self._permissions_by_role([model.id])
        return model.to_domain(permissions.get(model.id))

    async def find_all(self) -> list[RoleEntity]:
        statement = (
            select(RoleModel)
            .where(col(RoleModel.deleted_at).is_(None))
            .order_by(col(RoleModel.name))
        )
        models = await self._all(statement)
        permissions = await self._permissions_by_role([model.id for model in models])
        return [model.to_domain(permissions.get(model.id)) for model in models]

    async def save(self, role: RoleEntity) -> RoleEntity:
        existing = await self._first(select(RoleModel).where(RoleModel.name == role.name.value))
        if existing is None:
            model = await self._upsert(RoleModel.from_domain(role))
            return model.to_domain()

        existing.description = role.description
        self.session.add(existing)
        await self._flush()
        return existing.to_domain()

    async def replace_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        current = await self._all(
            select(RolePermissionModel).where(RolePermissionModel.role_id == role_id)
        )
        for link in current:
            await self.session.delete(link)
        await self._flush()
        for permission_id in dict.fromkeys(permission_ids):
            self.session.add(RolePermissionModel(role_id=role_id, permission_id=permission_id))
        await self._flush()

    async def _permissions_by_role(
        self, role_ids: list[UUID]
    ) -> dict[UUID, list[PermissionEntity]]:
        if not role_ids:
            return {}
        statement = (
            select(RolePermissionModel.role_id, PermissionModel)
            .join(
                PermissionModel,
                col(PermissionModel.id) == col(RolePermissionModel.permission_id),
            )
            .where(col(RolePermissionModel.role_id).in_(role_ids))
            .order_by(col(PermissionModel.name))
        )
        grouped: dict[UUID, list[PermissionEntity]] = defaultdict(list)
        for role_id, permission in await self._all(statement):
            grouped[role_id].append(permission.to_domain())
        return grouped


class SqlMenuRepository(SqlRepository[MenuModel]):
    model_type = MenuModel

    async def find_all_with_hierarchy(self) -> list[Menu]:
        """Active root menus with their active children, both ordered by ``order``."""
        statement = (
            select(MenuModel)
            .where(col(MenuModel.is_active).is_(True), col(MenuModel.deleted_at).is_(None))
            .order_by(col(MenuModel.order), col(MenuModel.name))
        )
        models = await self._all(statement)
        permission_ids = await self._permission_ids_by_menu([model.id for model in models])

        children: dict[UUID, list[Menu]] = defaultdict(list)
        for model in models:
            if model.parent_id is not None:
                children[model.parent_id].append(
                    model.to_domain(permission_ids.get(model.id))
                )

        return [
            model.to_domain(permission_ids.get(model.id), children.get(model.id))
            for model in models
            if model.parent_id is None
        ]

    async def find_by_name(self, name: str) -> Menu | None:
        model = await self._first(select(MenuModel).where(MenuModel.name == name))
        if model is None:
            return None
        permission_ids = await self._permission_ids_by_menu([model.id])
        return model.to_domain(permission_ids.get(model.id))

    async def save(self, menu: Menu) -> Menu:
        model = await self._upsert(MenuModel.from_domain(menu))
        return model.to_domain(list(menu.permission_ids))

    async def replace_permissions(self, menu_id: UUID, permission_ids: list[UUID]) -> None:
        current = await self._all(
            select(MenuPermissionModel).where(MenuPermissionModel.menu_id == menu_id)
        )
        for link in current:
            await self.session.delete(link)
        await self._flush()
        for permission_id in dict.fromkeys(permission_ids):
            self.session.add(MenuPermissionModel(menu_id=menu_id, permission_id=permission_id))
        await self._flush()

    async def _permission_ids_by_menu(self, menu_ids: list[UUID]) -> dict[UUID, list[UUID]]:
        if not menu_ids:
            return {}
        statement = select(MenuPermissionModel).where(
            col(MenuPermissionModel.menu_id).in_(menu_ids)
        )
        grouped: dict[UUID, list[UUID]] = defaultdict(list)
        for link in await self._all(statement):
            grouped[link.menu_id].append(link.permission_id)
        return grouped
