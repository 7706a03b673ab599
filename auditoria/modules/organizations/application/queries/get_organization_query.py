"""Get organization query implementation."""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.validation import validate_uuid
from auditoria.modules.organizations.application.dtos import (
    OrganizationMapper,
    OrganizationResponse,
)
from auditoria.modules.organizations.infrastructure.unit_of_work import (
    OrganizationsUnitOfWorkFactory,
)


class GetOrganizationQuery(Query):
    def __init__(self, organization_id: UUID | str, context: RequestContext | None = None):
        super().__init__(context)
        self.organization_id = organization_id
        self._freeze()

    def _validate(self) -> None:
        self.organization_id = validate_uuid(self.organization_id, "organization_id")


class GetOrganizationQueryHandler(QueryHandler[GetOrganizationQuery, OrganizationResponse]):
    def __init__(self, uow_factory: OrganizationsUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: GetOrganizationQuery) -> OrganizationResponse:
        async with self._uow_factory() as uow:
            organization = await uow.organizations.find_by_id_or_fail(query.organization_id)
        return OrganizationMapper.to_response(organization)
