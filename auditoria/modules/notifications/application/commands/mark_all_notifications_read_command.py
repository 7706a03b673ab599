"""Mark every unread notification of the caller as read."""

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.errors import UnauthorizedError
from auditoria.core.logging import get_logger
from auditoria.modules.notifications.application.dtos import MarkAllReadResponse
from auditoria.modules.notifications.infrastructure.unit_of_work import (
    NotificationsUnitOfWorkFactory,
)

logger = get_logger(__name__)


class MarkAllNotificationsReadCommand(Command):
    def __init__(self, context: RequestContext | None = None):
        super().__init__(context)
        self._freeze()

    def _validate(self) -> None:
        if not self.context.is_authenticated:
            raise UnauthorizedError("Authentication required")


class MarkAllNotificationsReadCommandHandler(
    CommandHandler[MarkAllNotificationsReadCommand, MarkAllReadResponse]
):
    def __init__(self, uow_factory: NotificationsUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: MarkAllNotificationsReadCommand) -> MarkAllReadResponse:
        async with self._uow_factory() as uow:
            unread = await uow.notifications.find_unread_by_recipient(command.context.user_id)
            for notification in unread:
                notification.mark_as_read()
                await uow.notifications.save(notification)
            uow.collect(*unread)

        logger.info(
            "Notifications marked as read",
            recipient_id=str(command.context.user_id),
            count=len(unread),
        )
        return MarkAllReadResponse(marked=len(unread))
