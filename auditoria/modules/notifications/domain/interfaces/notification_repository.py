"""Notification Repository Interface"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from auditoria.modules.notifications.domain.aggregates.notification import Notification


class INotificationRepository(Protocol):
    async def find_by_id(self, notification_id: UUID) -> "Notification | None":
        ...

    async def find_by_id_or_fail(self, notification_id: UUID) -> "Notification":
        """Raises NotificationNotFoundError when missing."""
        ...

    async def find_by_recipient(
        self,
        recipient_id: UUID,
        *,
        page: int = 1,
        page_size: int = 20,
        unread_only: bool = False,
    ) -> tuple[list["Notification"], int]:
        """Newest first.

        Returns:
            The notifications of the page and the total count
        """
        ...

    async def find_unread_by_recipient(self, recipient_id: UUID) -> list["Notification"]:
        ...

    async def count_unread(self, recipient_id: UUID) -> int:
        ...

    async def save(self, notification: "Notification") -> None:
        ...
