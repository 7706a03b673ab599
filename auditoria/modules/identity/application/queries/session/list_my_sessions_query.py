"""List the caller's open sessions."""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.errors import UnauthorizedError
from auditoria.core.validation import validate_uuid
from auditoria.modules.identity.application.dtos.response import SessionResponse
from auditoria.modules.identity.application.mappers.session_mapper import SessionMapper
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory


class ListMySessionsQuery(Query):
    def __init__(
        self,
        current_session_id: UUID | str | None = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.current_session_id = current_session_id
        self._freeze()

    def _validate(self) -> None:
        if not self.context.is_authenticated:
            raise UnauthorizedError("Authentication required")
        self.current_session_id = validate_uuid(
            self.current_session_id, "current_session_id", required=False
        )


class ListMySessionsQueryHandler(QueryHandler[ListMySessionsQuery, list[SessionResponse]]):
    """Active, unexpired sessions only, most recently used first."""

    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: ListMySessionsQuery) -> list[SessionResponse]:
        async with self._uow_factory() as uow:
            sessions = await uow.sessions.find_active_by_user(query.context.user_id)

        current = query.current_session_id or query.context.session_id
        return [SessionMapper.to_response(session, current) for session in sessions]
