"""Logout commands: close the current session or every session of the caller."""

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.errors import UnauthorizedError
from auditoria.core.logging import get_logger
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class LogoutCommand(Command):
    def __init__(self, context: RequestContext | None = None):
        super().__init__(context)
        self._freeze()

    def _validate(self) -> None:
        if not self.context.is_authenticated or self.context.session_id is None:
            raise UnauthorizedError("Authentication required")


class LogoutCommandHandler(CommandHandler[LogoutCommand, None]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: LogoutCommand) -> None:
        """Close the session the request was authenticated with; repeated calls are no-ops."""
        async with self._uow_factory() as uow:
            session = await uow.sessions.find_by_id(command.context.session_id)
            if (
                session is not None
                and session.belongs_to(command.context.user_id)
                and session.is_active
            ):
                session.invalidate()
                await uow.sessions.save(session)
                uow.collect(session)

        logger.info("Logged out", session_id=str(command.context.session_id))


class LogoutAllCommand(Command):
    def __init__(self, context: RequestContext | None = None):
        super().__init__(context)
        self._freeze()

    def _validate(self) -> None:
        if not self.context.is_authenticated:
            raise UnauthorizedError("Authentication required")


class LogoutAllCommandHandler(CommandHandler[LogoutAllCommand, int]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: LogoutAllCommand) -> int:
        """Close every open session of the caller and return how many were closed."""
        async with self._uow_factory() as uow:
            sessions = await uow.sessions.find_active_by_user(command.context.user_id)
            for session in sessions:
                session.invalidate()
                await uow.sessions.save(session)
            uow.collect(*sessions)

        logger.info(
            "Logged out everywhere",
            user_id=str(command.context.user_id),
            sessions_closed=len(sessions),
        )
        return len(sessions)
