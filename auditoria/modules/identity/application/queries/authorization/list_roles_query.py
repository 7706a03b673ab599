"""List persisted roles with their permissions."""

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.modules.identity.application.dtos.response import RoleResponse
from auditoria.modules.identity.application.mappers.authorization_mapper import RoleMapper
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory


class ListRolesQuery(Query):
    def __init__(self, context: RequestContext | None = None):
        super().__init__(context)
        self._freeze()


class ListRolesQueryHandler(QueryHandler[ListRolesQuery, list[RoleResponse]]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: ListRolesQuery) -> list[RoleResponse]:
        async with self._uow_factory() as uow:
            roles = await uow.roles.find_all()
        return [RoleMapper.to_response(role) for role in roles]
