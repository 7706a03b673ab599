"""Delete (soft) user command implementation."""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_uuid
from auditoria.modules.identity.domain.errors import InvalidUserStateError
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class DeleteUserCommand(Command):
    def __init__(self, user_id: UUID | str, context: RequestContext | None = None):
        super().__init__(context)
        self.user_id = user_id
        self._freeze()

    def _validate(self) -> None:
        self.user_id = validate_uuid(self.user_id, "user_id")


class DeleteUserCommandHandler(CommandHandler[DeleteUserCommand, None]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: DeleteUserCommand) -> None:
        """
        Soft delete the user and close its open sessions.

        Raises:
            UserNotFoundError: If the user does not exist or is already deleted
            InvalidUserStateError: If a user tries to delete itself
        """
        if command.context.user_id == command.user_id:
            raise InvalidUserStateError("Un usuario no puede eliminarse a sí mismo")

        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id_or_fail(command.user_id)
            user.mark_as_deleted()
            await uow.users.delete(user)

            sessions = await uow.sessions.find_active_by_user(user.id)
            for session in sessions:
                session.invalidate()
                await uow.sessions.save(session)

            uow.collect(user, *sessions)

        logger.info(
            "User deleted",
            user_id=str(command.user_id),
            sessions_closed=len(sessions),
        )
