"""List organizations query implementation."""

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.validation import validate_boolean, validate_integer, validate_string
from auditoria.modules.organizations.application.dtos import (
    OrganizationMapper,
    OrganizationResponse,
)
from auditoria.modules.organizations.infrastructure.unit_of_work import (
    OrganizationsUnitOfWorkFactory,
)
from auditoria.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResponse


class ListOrganizationsQuery(Query):
    def __init__(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        is_active: bool | None = None,
        search: str | None = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.page = page
        self.page_size = page_size
        self.is_active = is_active
        self.search = search
        self._freeze()

    def _validate(self) -> None:
        self.page = validate_integer(self.page, "page", min_value=1)
        self.page_size = validate_integer(
            self.page_size, "page_size", min_value=1, max_value=MAX_PAGE_SIZE
        )
        self.is_active = validate_boolean(self.is_active, "is_active", required=False)
        self.search = validate_string(self.search, "search", required=False, max_length=100)


class ListOrganizationsQueryHandler(
    QueryHandler[ListOrganizationsQuery, PagedResponse[OrganizationResponse]]
):
    """Organizations ordered by name."""

    def __init__(self, uow_factory: OrganizationsUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: ListOrganizationsQuery) -> PagedResponse[OrganizationResponse]:
        async with self._uow_factory() as uow:
            organizations, total = await uow.organizations.find_many(
                page=query.page,
                page_size=query.page_size,
                is_active=query.is_active,
                search=query.search,
            )

        return PagedResponse[OrganizationResponse](
            items=[OrganizationMapper.to_response(o) for o in organizations],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )
