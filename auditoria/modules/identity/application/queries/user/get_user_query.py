"""Get user query implementation."""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.validation import validate_uuid
from auditoria.modules.identity.application.dtos.response import UserDetailResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory


class GetUserQuery(Query):
    def __init__(self, user_id: UUID | str, context: RequestContext | None = None):
        super().__init__(context)
        self.user_id = user_id
        self._freeze()

    def _validate(self) -> None:
        self.user_id = validate_uuid(self.user_id, "user_id")


class GetUserQueryHandler(QueryHandler[GetUserQuery, UserDetailResponse]):
    """Returns the user together with the profile matching its type."""

    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: GetUserQuery) -> UserDetailResponse:
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id_or_fail(query.user_id)
            if user.is_internal:
                profile = await uow.internal_profiles.find_by_user_id(user.id)
                return UserMapper.to_detail_response(user, internal_profile=profile)

            profile = await uow.external_profiles.find_by_user_id(user.id)
            return UserMapper.to_detail_response(user, external_profile=profile)
