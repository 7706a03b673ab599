"""Unread notification count of the caller."""

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.errors import UnauthorizedError
from auditoria.modules.notifications.application.dtos import UnreadCountResponse
from auditoria.modules.notifications.infrastructure.unit_of_work import (
    NotificationsUnitOfWorkFactory,
)


class GetUnreadCountQuery(Query):
    def __init__(self, context: RequestContext | None = None):
        super().__init__(context)
        self._freeze()

    def _validate(self) -> None:
        if not self.context.is_authenticated:
            raise UnauthorizedError("Authentication required")


class GetUnreadCountQueryHandler(QueryHandler[GetUnreadCountQuery, UnreadCountResponse]):
    def __init__(self, uow_factory: NotificationsUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: GetUnreadCountQuery) -> UnreadCountResponse:
        async with self._uow_factory() as uow:
            count = await uow.notifications.count_unread(query.context.user_id)
        return UnreadCountResponse(unread=count)
