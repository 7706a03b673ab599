"""
Notification Repository Implementation

SQLModel-based implementation of the notification repository interface.
"""

from uuid import UUID

from sqlmodel import col, select

from auditoria.core.infrastructure.repository import SqlRepository
from auditoria.modules.notifications.domain.aggregates.notification import Notification
from auditoria.modules.notifications.domain.errors import NotificationNotFoundError
from auditoria.modules.notifications.infrastructure.models.notification_model import (
    NotificationModel,
)


class SqlNotificationRepository(SqlRepository[NotificationModel]):
    model_type = NotificationModel

    def _for_recipient(self, recipient_id: UUID, unread_only: bool = False):
        statement = select(NotificationModel).where(
            NotificationModel.recipient_id == recipient_id,
            col(NotificationModel.deleted_at).is_(None),
        )
        if unread_only:
            statement = statement.where(col(NotificationModel.is_read).is_(False))
        return statement

    async def find_by_id(self, notification_id: UUID) -> Notification | None:
        model = await self._first(
            select(NotificationModel).where(
                NotificationModel.id == notification_id,
                col(NotificationModel.deleted_at).is_(None),
            )
        )
        return model.to_domain() if model else None

    async def find_by_id_or_fail(self, notification_id: UUID) -> Notification:
        notification = await self.find_by_id(notification_id)
        if notification is None:
            raise NotificationNotFoundError(notification_id)
        return notification

    async def find_by_recipient(
        self,
        recipient_id: UUID,
        *,
        page: int = 1,
        page_size: int = 20,
        unread_only: bool = False,
    ) -> tuple[list[Notification], int]:
        statement = self._for_recipient(recipient_id, unread_only).order_by(
            col(NotificationModel.created_at).desc()
        )
        models, total = await self._paginate(statement, page, page_size)
        return [model.to_domain() for model in models], total

    async def find_unread_by_recipient(self, recipient_id: UUID) -> list[Notification]:
        statement = self._for_recipient(recipient_id, unread_only=True)
        return [model.to_domain() for model in await self._all(statement)]

    async def count_unread(self, recipient_id: UUID) -> int:
        return await self._count(self._for_recipient(recipient_id, unread_only=True))

    async def save(self, notification: Notification) -> None:
        await self._upsert(NotificationModel.from_domain(notification))
