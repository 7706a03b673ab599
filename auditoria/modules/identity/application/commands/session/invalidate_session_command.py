"""Invalidate session command implementation (logout of one session)."""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.errors import UnauthorizedError
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_uuid
from auditoria.modules.identity.domain.errors import SessionOwnershipError
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class InvalidateSessionCommand(Command):
    def __init__(self, session_id: UUID | str, context: RequestContext | None = None):
        super().__init__(context)
        self.session_id = session_id
        self._freeze()

    def _validate(self) -> None:
        self.session_id = validate_uuid(self.session_id, "session_id")
        if not self.context.is_authenticated:
            raise UnauthorizedError("Authentication required")


class InvalidateSessionCommandHandler(CommandHandler[InvalidateSessionCommand, None]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: InvalidateSessionCommand) -> None:
        """
        Invalidate one of the caller's own sessions.

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionOwnershipError: If the session belongs to another user
        """
        async with self._uow_factory() as uow:
            session = await uow.sessions.find_by_id_or_fail(command.session_id)
            if not session.belongs_to(command.context.user_id):
                logger.warning(
                    "Attempt to invalidate foreign session",
                    session_id=str(session.id),
                    owner_id=str(session.user_id),
                )
                raise SessionOwnershipError()

            if session.is_active:
                session.invalidate()
                await uow.sessions.save(session)
                uow.collect(session)

        logger.info("Session invalidated", session_id=str(command.session_id))
