"""
Change password command implementation.

Stores a new bcrypt hash, clears any lockout and closes every open session of
the user so tokens issued with the old password stop working.
"""

from typing import Any
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_string, validate_uuid
from auditoria.modules.identity.application.dtos.response import UserResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.domain.errors import InvalidCredentialsError
from auditoria.modules.identity.domain.interfaces.password_hasher import IPasswordHasher
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class ChangePasswordCommand(Command):
    def __init__(
        self,
        user_id: UUID | str,
        new_password: str,
        current_password: str | None = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.user_id = user_id
        self.new_password = new_password
        self.current_password = current_password
        self._freeze()

    def _validate(self) -> None:
        self.user_id = validate_uuid(self.user_id, "user_id")
        self.new_password = validate_string(
            self.new_password, "new_password", min_length=8, max_length=72
        )

    @property
    def is_own_account(self) -> bool:
        return self.context.user_id == self.user_id

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.pop("new_password", None)
        data.pop("current_password", None)
        return data


class ChangePasswordCommandHandler(CommandHandler[ChangePasswordCommand, UserResponse]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory, password_hasher: IPasswordHasher):
        self._uow_factory = uow_factory
        self._password_hasher = password_hasher

    async def handle(self, command: ChangePasswordCommand) -> UserResponse:
        """
        Replace the password of a user.

        Users changing their own password must confirm the current one.

        Raises:
            UserNotFoundError: If the user does not exist
            InvalidCredentialsError: If the current password is missing or wrong
        """
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id_or_fail(command.user_id)
            if command.is_own_account and not (
                command.current_password
                and self._password_hasher.verify(command.current_password, user.password.value)
            ):
                logger.warning("Password change with wrong current password", user_id=str(user.id))
                raise InvalidCredentialsError()

            user.update_password(self._password_hasher.hash(command.new_password))
            await uow.users.save(user)

            sessions = await uow.sessions.find_active_by_user(user.id)
            for session in sessions:
                session.invalidate()
                await uow.sessions.save(session)
            uow.collect(user, *sessions)

        logger.info(
            "Password changed",
            user_id=str(user.id),
            by_owner=command.is_own_account,
            sessions_closed=len(sessions),
        )
        return UserMapper.to_response(user)
