"""List users query implementation."""

from typing import Any

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.validation import validate_enum, validate_integer, validate_string
from auditoria.modules.identity.application.dtos.response import UserResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.domain.enums import UserStatus, UserType
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory
from auditoria.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResponse


class ListUsersQuery(Query):
    """Page of users, optionally filtered by status and type and searched by text."""

    def __init__(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        status: Any = None,
        user_type: Any = None,
        search: str | None = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.page = page
        self.page_size = page_size
        self.status = status
        self.user_type = user_type
        self.search = search
        self._freeze()

    def _validate(self) -> None:
        self.page = validate_integer(self.page, "page", min_value=1)
        self.page_size = validate_integer(
            self.page_size, "page_size", min_value=1, max_value=MAX_PAGE_SIZE
        )
        self.status = validate_enum(self.status, "status", UserStatus, required=False)
        self.user_type = validate_enum(self.user_type, "user_type", UserType, required=False)
        self.search = validate_string(self.search, "search", required=False, max_length=100)


class ListUsersQueryHandler(QueryHandler[ListUsersQuery, PagedResponse[UserResponse]]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: ListUsersQuery) -> PagedResponse[UserResponse]:
        async with self._uow_factory() as uow:
            users, total = await uow.users.find_many(
                page=query.page,
                page_size=query.page_size,
                status=query.status,
                user_type=query.user_type,
                search=query.search,
            )

        return PagedResponse[UserResponse](
            items=[UserMapper.to_response(user) for user in users],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )
