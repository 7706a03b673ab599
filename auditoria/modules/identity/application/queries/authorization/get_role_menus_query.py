"""Navigation a role would see, computed from the static menu configuration."""

from typing import Any

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.validation import validate_enum
from auditoria.modules.identity.application.dtos.response import MenuResponse
from auditoria.modules.identity.application.mappers.authorization_mapper import MenuMapper
from auditoria.modules.identity.domain.authorization import MenuFilter
from auditoria.modules.identity.domain.enums import Role


class GetRoleMenusQuery(Query):
    def __init__(self, role: Any, context: RequestContext | None = None):
        super().__init__(context)
        self.role = role
        self._freeze()

    def _validate(self) -> None:
        self.role = validate_enum(self.role, "role", Role)


class GetRoleMenusQueryHandler(QueryHandler[GetRoleMenusQuery, list[MenuResponse]]):
    """No storage involved: every required permission must be held (ALL semantics)."""

    async def handle(self, query: GetRoleMenusQuery) -> list[MenuResponse]:
        return [MenuMapper.from_item(item) for item in MenuFilter.get_menus_for_role(query.role)]
