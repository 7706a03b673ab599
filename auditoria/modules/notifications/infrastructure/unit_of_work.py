"""Notifications Unit of Work."""

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError

from auditoria.core.errors import AuditoriaError
from auditoria.core.infrastructure.integrity import is_foreign_key_violation
from auditoria.core.infrastructure.unit_of_work import SqlUnitOfWork
from auditoria.modules.notifications.domain.errors import InvalidNotificationDataError
from auditoria.modules.notifications.infrastructure.repositories import (
    SqlNotificationRepository,
)


class NotificationsUnitOfWork(SqlUnitOfWork):
    notifications: SqlNotificationRepository

    def _init_repositories(self) -> None:
        self.notifications = SqlNotificationRepository(self.session)

    def translate_integrity_error(self, error: IntegrityError) -> AuditoriaError | None:
        # recipient_id and created_by_id both reference users
        if is_foreign_key_violation(error):
            return InvalidNotificationDataError(
                "Notification references a missing user",
                field="recipient_id",
                user_message="El destinatario de la notificación no existe",
            )
        return None


NotificationsUnitOfWorkFactory = Callable[[], NotificationsUnitOfWork]


__all__ = ["NotificationsUnitOfWork", "NotificationsUnitOfWorkFactory"]
