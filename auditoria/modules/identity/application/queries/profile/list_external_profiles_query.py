"""List external profiles query implementation."""

from typing import Any
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.validation import validate_boolean, validate_integer, validate_uuid
from auditoria.modules.identity.application.dtos.response import UserDetailResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory
from auditoria.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResponse


class ListExternalProfilesQuery(Query):
    """Page of client users, optionally for one organization and membership state."""

    def __init__(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        organization_id: UUID | str | None = None,
        is_active: Any = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.page = page
        self.page_size = page_size
        self.organization_id = organization_id
        self.is_active = is_active
        self._freeze()

    def _validate(self) -> None:
        self.page = validate_integer(self.page, "page", min_value=1)
        self.page_size = validate_integer(
            self.page_size, "page_size", min_value=1, max_value=MAX_PAGE_SIZE
        )
        self.organization_id = validate_uuid(
            self.organization_id, "organization_id", required=False
        )
        self.is_active = validate_boolean(self.is_active, "is_active", required=False)


class ListExternalProfilesQueryHandler(
    QueryHandler[ListExternalProfilesQuery, PagedResponse[UserDetailResponse]]
):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: ListExternalProfilesQuery) -> PagedResponse[UserDetailResponse]:
        async with self._uow_factory() as uow:
            profiles, total = await uow.external_profiles.find_many(
                page=query.page,
                page_size=query.page_size,
                organization_id=query.organization_id,
                is_active=query.is_active,
            )
            users = await uow.users.find_by_ids([profile.user_id for profile in profiles])

        return PagedResponse[UserDetailResponse](
            items=[
                UserMapper.to_detail_response(users[profile.user_id], external_profile=profile)
                for profile in profiles
                if profile.user_id in users
            ],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )
