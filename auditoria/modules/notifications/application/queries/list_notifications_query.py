"""List the caller's notifications, newest first."""

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.errors import UnauthorizedError
from auditoria.core.validation import validate_boolean, validate_integer
from auditoria.modules.notifications.application.dtos import (
    NotificationMapper,
    NotificationResponse,
)
from auditoria.modules.notifications.infrastructure.unit_of_work import (
    NotificationsUnitOfWorkFactory,
)
from auditoria.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResponse


class ListNotificationsQuery(Query):
    def __init__(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        unread_only: bool = False,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.page = page
        self.page_size = page_size
        self.unread_only = unread_only
        self._freeze()

    def _validate(self) -> None:
        if not self.context.is_authenticated:
            raise UnauthorizedError("Authentication required")
        self.page = validate_integer(self.page, "page", min_value=1)
        self.page_size = validate_integer(
            self.page_size, "page_size", min_value=1, max_value=MAX_PAGE_SIZE
        )
        self.unread_only = validate_boolean(self.unread_only, "unread_only")


class ListNotificationsQueryHandler(
    QueryHandler[ListNotificationsQuery, PagedResponse[NotificationResponse]]
):
    def __init__(self, uow_factory: NotificationsUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, query: ListNotificationsQuery) -> PagedResponse[NotificationResponse]:
        async with self._uow_factory() as uow:
            notifications, total = await uow.notifications.find_by_recipient(
                query.context.user_id,
                page=query.page,
                page_size=query.page_size,
                unread_only=query.unread_only,
            )

        return PagedResponse[NotificationResponse](
            items=[NotificationMapper.to_response(n) for n in notifications],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )
