"""
Create notification command implementation.

Notifications are stored for in-app display only; delivery by other channels
is out of scope.
"""

from typing import Any
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_uuid
from auditoria.modules.notifications.application.dtos import (
    NotificationMapper,
    NotificationResponse,
)
from auditoria.modules.notifications.domain.aggregates.notification import Notification
from auditoria.modules.notifications.domain.enums import NotificationType
from auditoria.modules.notifications.infrastructure.unit_of_work import (
    NotificationsUnitOfWorkFactory,
)

logger = get_logger(__name__)


class CreateNotificationCommand(Command):
    def __init__(
        self,
        recipient_id: UUID | str,
        title: str,
        message: str,
        notification_type: NotificationType | str = NotificationType.INFO,
        link: str | None = None,
        metadata: dict[str, Any] | None = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.recipient_id = recipient_id
        self.title = title
        self.message = message
        self.notification_type = notification_type
        self.link = link
        self.metadata = metadata
        self._freeze()

    def _validate(self) -> None:
        self.recipient_id = validate_uuid(self.recipient_id, "recipient_id")


class CreateNotificationCommandHandler(
    CommandHandler[CreateNotificationCommand, NotificationResponse]
):
    def __init__(self, uow_factory: NotificationsUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: CreateNotificationCommand) -> NotificationResponse:
        notification = Notification.create(
            notification_type=command.notification_type,
            title=command.title,
            message=command.message,
            recipient_id=command.recipient_id,
            link=command.link,
            metadata=command.metadata,
            created_by_id=command.context.user_id,
        )

        async with self._uow_factory() as uow:
            await uow.notifications.save(notification)
            uow.collect(notification)

        logger.info(
            "Notification created",
            notification_id=str(notification.id),
            recipient_id=str(notification.recipient_id),
            type=notification.type.value,
        )
        return NotificationMapper.to_response(notification)
