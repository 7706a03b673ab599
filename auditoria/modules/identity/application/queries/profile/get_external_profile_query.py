"""Get external profile query implementation."""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.validation import validate_uuid
from auditoria.modules.identity.application.dtos.response import UserDetailResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.application.profile_loader import load_external_profile
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory


class GetExternalProfileQuery(Query):
    def __init__(self, user_id: UUID | str, context: RequestContext | None = None):
        super().__init__(context)
        self.user_id = user_id
        self._freeze()

    def _validate(self) -> None:
        self.user_id = validate_uuid(self.user_id, "user_id")


class GetExternalProfileQueryHandler(QueryHandler[GetExternalProfileQuery, UserDetailResponse]):
    """A client user with its organization membership; internal users are refused."""

    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: GetExternalProfileQuery) -> UserDetailResponse:
        async with self._uow_factory() as uow:
            user, profile = await load_external_profile(uow, query.user_id)
        return UserMapper.to_detail_response(user, external_profile=profile)
