"""
Get user menus query implementation.

Navigation built from the persisted menu tree. The user's permission ids are
resolved from its roles through the stored role-permission links, and each
root is filtered with ``Menu.filter_by_permissions`` (a node is visible when
the user holds any of its permissions).
"""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_uuid
from auditoria.modules.identity.application.dtos.response import MenuResponse
from auditoria.modules.identity.application.mappers.authorization_mapper import MenuMapper
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class GetUserMenusQuery(Query):
    def __init__(self, user_id: UUID | str, context: RequestContext | None = None):
        super().__init__(context)
        self.user_id = user_id
        self._freeze()

    def _validate(self) -> None:
        self.user_id = validate_uuid(self.user_id, "user_id")


class GetUserMenusQueryHandler(QueryHandler[GetUserMenusQuery, list[MenuResponse]]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: GetUserMenusQuery) -> list[MenuResponse]:
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id_or_fail(query.user_id)
            permission_ids = await uow.permissions.find_ids_for_roles(list(user.roles))
            roots = await uow.menus.find_all_with_hierarchy()

        visible = [
            menu
            for menu in (root.filter_by_permissions(permission_ids) for root in roots)
            if menu is not None
        ]
        visible.sort(key=lambda menu: menu.order)

        logger.debug(
            "User menus resolved",
            user_id=str(user.id),
            permissions=len(permission_ids),
            menus=len(visible),
        )
        return [MenuMapper.from_entity(menu) for menu in visible]
