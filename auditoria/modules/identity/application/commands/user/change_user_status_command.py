"""
Activate / deactivate user command implementation.

Deactivating a user also closes its open sessions.
"""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_boolean, validate_uuid
from auditoria.modules.identity.application.dtos.response import UserResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.domain.errors import InvalidUserStateError
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class ChangeUserStatusCommand(Command):
    def __init__(self, user_id: UUID | str, active: bool, context: RequestContext | None = None):
        super().__init__(context)
        self.user_id = user_id
        self.active = active
        self._freeze()

    def _validate(self) -> None:
        self.user_id = validate_uuid(self.user_id, "user_id")
        self.active = validate_boolean(self.active, "active")


class ChangeUserStatusCommandHandler(CommandHandler[ChangeUserStatusCommand, UserResponse]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: ChangeUserStatusCommand) -> UserResponse:
        if not command.active and command.context.user_id == command.user_id:
            raise InvalidUserStateError("Un usuario no puede desactivarse a sí mismo")

        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id_or_fail(command.user_id)
            sessions = []
            if command.active:
                user.activate()
            else:
                user.deactivate()
                sessions = await uow.sessions.find_active_by_user(user.id)
                for session in sessions:
                    session.invalidate()
                    await uow.sessions.save(session)

            await uow.users.save(user)
            uow.collect(user, *sessions)

        logger.info("User status changed", user_id=str(user.id), status=user.status.value)
        return UserMapper.to_response(user)
