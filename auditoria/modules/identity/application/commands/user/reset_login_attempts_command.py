"""Reset login attempts command implementation (also lifts a lock)."""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_uuid
from auditoria.modules.identity.application.dtos.response import UserResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class ResetLoginAttemptsCommand(Command):
    def __init__(self, user_id: UUID | str, context: RequestContext | None = None):
        super().__init__(context)
        self.user_id = user_id
        self._freeze()

    def _validate(self) -> None:
        self.user_id = validate_uuid(self.user_id, "user_id")


class ResetLoginAttemptsCommandHandler(CommandHandler[ResetLoginAttemptsCommand, UserResponse]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: ResetLoginAttemptsCommand) -> UserResponse:
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id_or_fail(command.user_id)
            user.reset_login_attempts()
            await uow.users.save(user)

        logger.info("Login attempts reset", user_id=str(user.id))
        return UserMapper.to_response(user)
