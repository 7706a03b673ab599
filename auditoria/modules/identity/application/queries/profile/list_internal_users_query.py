"""List internal users query implementation."""

from typing import Any

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.errors import ValidationError
from auditoria.core.validation import validate_enum, validate_integer, validate_string
from auditoria.modules.identity.application.dtos.response import UserDetailResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory
from auditoria.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResponse


class ListInternalUsersQuery(Query):
    """Page of staff users, optionally holding ``role`` or working in ``department``."""

    def __init__(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        role: Any = None,
        department: str | None = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.page = page
        self.page_size = page_size
        self.role = role
        self.department = department
        self._freeze()

    def _validate(self) -> None:
        self.page = validate_integer(self.page, "page", min_value=1)
        self.page_size = validate_integer(
            self.page_size, "page_size", min_value=1, max_value=MAX_PAGE_SIZE
        )
        self.role = validate_enum(self.role, "role", Role, required=False)
        if self.role is not None and not self.role.is_internal:
            raise ValidationError(f"{self.role.value} is not a staff role", field="role")
        self.department = validate_string(
            self.department, "department", required=False, max_length=100
        )


class ListInternalUsersQueryHandler(
    QueryHandler[ListInternalUsersQuery, PagedResponse[UserDetailResponse]]
):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: ListInternalUsersQuery) -> PagedResponse[UserDetailResponse]:
        async with self._uow_factory() as uow:
            profiles, total = await uow.internal_profiles.find_many(
                page=query.page,
                page_size=query.page_size,
                role=query.role,
                department=query.department,
            )
            users = await uow.users.find_by_ids([profile.user_id for profile in profiles])

        return PagedResponse[UserDetailResponse](
            items=[
                UserMapper.to_detail_response(users[profile.user_id], internal_profile=profile)
                for profile in profiles
                if profile.user_id in users
            ],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )
