"""Mark one notification as read; only its recipient may do so."""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.errors import UnauthorizedError
from auditoria.core.validation import validate_uuid
from auditoria.modules.notifications.application.dtos import (
    NotificationMapper,
    NotificationResponse,
)
from auditoria.modules.notifications.domain.errors import NotificationOwnershipError
from auditoria.modules.notifications.infrastructure.unit_of_work import (
    NotificationsUnitOfWorkFactory,
)


class MarkNotificationReadCommand(Command):
    def __init__(self, notification_id: UUID | str, context: RequestContext | None = None):
        super().__init__(context)
        self.notification_id = notification_id
        self._freeze()

    def _validate(self) -> None:
        self.notification_id = validate_uuid(self.notification_id, "notification_id")
        if not self.context.is_authenticated:
            raise UnauthorizedError("Authentication required")


class MarkNotificationReadCommandHandler(
    CommandHandler[MarkNotificationReadCommand, NotificationResponse]
):
    def __init__(self, uow_factory: NotificationsUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: MarkNotificationReadCommand) -> NotificationResponse:
        """
        Raises:
            NotificationNotFoundError: If the notification does not exist
            NotificationOwnershipError: If the caller is not the recipient
        """
        async with self._uow_factory() as uow:
            notification = await uow.notifications.find_by_id_or_fail(command.notification_id)
            if not notification.belongs_to(command.context.user_id):
                raise NotificationOwnershipError()

            if notification.is_unread:
                notification.mark_as_read()
                await uow.notifications.save(notification)
                uow.collect(notification)

        return NotificationMapper.to_response(notification)
