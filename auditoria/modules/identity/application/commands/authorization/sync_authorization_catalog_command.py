"""
Sync authorization catalog command implementation.

Makes the persisted permissions, roles, role-permission links and menus match
the static configuration (``ROLE_PERMISSIONS`` and ``MENU_CONFIG``). Running it
twice changes nothing the second time: rows are matched by name and keep their
ids, and link tables are replaced wholesale.
"""

from collections.abc import Iterable
from dataclasses import replace
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.modules.identity.application.dtos.response import CatalogSyncResponse
from auditoria.modules.identity.domain.aggregates.menu import Menu
from auditoria.modules.identity.domain.aggregates.permission import PermissionEntity
from auditoria.modules.identity.domain.aggregates.role import RoleEntity
from auditoria.modules.identity.domain.authorization import (
    MENU_CONFIG,
    MenuItem,
    RolePermissionChecker,
)
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.value_objects.permission import Permission
from auditoria.modules.identity.infrastructure.unit_of_work import (
    IdentityUnitOfWork,
    IdentityUnitOfWorkFactory,
)

logger = get_logger(__name__)

ROLE_DESCRIPTIONS = {
    Role.ADMINISTRADOR: "Acceso completo al sistema",
    Role.GERENTE: "Gestión de auditorías, clientes y reportes",
    Role.AUDITOR: "Ejecución de auditorías y registro de hallazgos",
    Role.CLIENTE: "Consulta de auditorías y reportes de su organización",
}


def _menu_permissions(items: Iterable[MenuItem]) -> list[Permission]:
    found: list[Permission] = []
    for item in items:
        found.extend(item.required_permissions)
        found.extend(_menu_permissions(item.children or ()))
    return found


class SyncAuthorizationCatalogCommand(Command):
    def __init__(
        self,
        menus: tuple[MenuItem, ...] = MENU_CONFIG,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.menus = menus
        self._freeze()


class SyncAuthorizationCatalogCommandHandler(
    CommandHandler[SyncAuthorizationCatalogCommand, CatalogSyncResponse]
):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: SyncAuthorizationCatalogCommand) -> CatalogSyncResponse:
        async with self._uow_factory() as uow:
            permission_ids = await self._sync_permissions(uow, command.menus)
            await self._sync_roles(uow, permission_ids)
            menu_count = await self._sync_menus(uow, command.menus, permission_ids)

        result = CatalogSyncResponse(
            permissions=len(permission_ids), roles=len(Role), menus=menu_count
        )
        logger.info("Authorization catalog synchronized", **result.model_dump())
        return result

    async def _sync_permissions(
        self, uow: IdentityUnitOfWork, menus: tuple[MenuItem, ...]
    ) -> dict[Permission, UUID]:
        wanted = dict.fromkeys(
            [*RolePermissionChecker.all_permissions(), *_menu_permissions(menus)]
        )
        stored: dict[Permission, UUID] = {}
        for permission in wanted:
            entity = await uow.permissions.save(PermissionEntity.from_permission(permission))
            stored[permission] = entity.id
        return stored

    async def _sync_roles(
        self, uow: IdentityUnitOfWork, permission_ids: dict[Permission, UUID]
    ) -> None:
        for role in Role:
            entity = await uow.roles.save(
                RoleEntity(name=role, description=ROLE_DESCRIPTIONS.get(role))
            )
            await uow.roles.replace_permissions(
                entity.id,
                [permission_ids[p] for p in RolePermissionChecker.get_permissions(role)],
            )

    async def _sync_menus(
        self,
        uow: IdentityUnitOfWork,
        items: Iterable[MenuItem],
        permission_ids: dict[Permission, UUID],
        parent_id: UUID | None = None,
    ) -> int:
        """Upsert ``items`` under ``parent_id``; returns the number of nodes written."""
        count = 0
        for index, item in enumerate(items, start=1):
            existing = await uow.menus.find_by_name(item.label)
            menu = Menu(
                name=item.label,
                icon=item.icon,
                path=item.route,
                order=item.order if item.order is not None else index,
                parent_id=parent_id,
            )
            if existing is not None:
                menu = replace(menu, id=existing.id, created_at=existing.created_at)

            saved = await uow.menus.save(menu)
            await uow.menus.replace_permissions(
                saved.id, [permission_ids[p] for p in item.required_permissions]
            )
            count += 1
            if item.children:
                count += await self._sync_menus(uow, item.children, permission_ids, saved.id)
        return count
