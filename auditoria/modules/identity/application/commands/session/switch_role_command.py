"""Switch the acting role of a session."""

from typing import Any
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.errors import UnauthorizedError
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_enum, validate_uuid
from auditoria.modules.identity.application.dtos.response import SessionResponse
from auditoria.modules.identity.application.mappers.session_mapper import SessionMapper
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.errors import (
    InvalidSessionDataError,
    RoleNotAssignedError,
    SessionOwnershipError,
)
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class SwitchRoleCommand(Command):
    def __init__(self, session_id: UUID | str, role: Any, context: RequestContext | None = None):
        super().__init__(context)
        self.session_id = session_id
        self.role = role
        self._freeze()

    def _validate(self) -> None:
        self.session_id = validate_uuid(self.session_id, "session_id")
        self.role = validate_enum(self.role, "role", Role)
        if not self.context.is_authenticated:
            raise UnauthorizedError("Authentication required")


class SwitchRoleCommandHandler(CommandHandler[SwitchRoleCommand, SessionResponse]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: SwitchRoleCommand) -> SessionResponse:
        """
        Change the role the caller acts as in one of its sessions.

        Raises:
            SessionNotFoundError: If the session does not exist
            SessionOwnershipError: If the session belongs to another user
            InvalidSessionDataError: If the session is closed or expired
            RoleNotAssignedError: If the user does not hold the role
        """
        async with self._uow_factory() as uow:
            session = await uow.sessions.find_by_id_or_fail(command.session_id)
            if not session.belongs_to(command.context.user_id):
                raise SessionOwnershipError()
            if not session.is_valid:
                raise InvalidSessionDataError("La sesión no está activa", field="session_id")

            user = await uow.users.find_by_id_or_fail(session.user_id)
            if not user.has_role(command.role):
                raise RoleNotAssignedError(command.role.value)

            if session.current_role != command.role:
                session.switch_role(command.role)
            session.update_last_used()
            await uow.sessions.save(session)
            uow.collect(session)

        logger.info(
            "Session role switched",
            session_id=str(session.id),
            role=session.current_role.value,
        )
        return SessionMapper.to_response(session, session.id)
