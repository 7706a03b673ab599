"""
Login command implementation.

Verifies a username-or-email and password pair against the stored bcrypt
hash and opens a session. Failed password checks are counted and lock the
account once the login policy threshold is reached.
"""

from typing import Any

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_enum, validate_string
from auditoria.modules.identity.application.commands.session.create_session_command import (
    open_session,
)
from auditoria.modules.identity.application.dtos.response import LoginResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.domain.aggregates.user import User
from auditoria.modules.identity.domain.authorization import RolePermissionChecker
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.errors import (
    InvalidCredentialsError,
    UserInactiveError,
    UserLockedError,
)
from auditoria.modules.identity.domain.interfaces.password_hasher import IPasswordHasher
from auditoria.modules.identity.domain.policies.login_policy import LoginPolicy
from auditoria.modules.identity.infrastructure.security import TokenService
from auditoria.modules.identity.infrastructure.unit_of_work import (
    IdentityUnitOfWork,
    IdentityUnitOfWorkFactory,
)

logger = get_logger(__name__)


class LoginCommand(Command):
    def __init__(
        self,
        username_or_email: str,
        password: str,
        role: Any = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.username_or_email = username_or_email
        self.password = password
        self.role = role
        self._freeze()

    def _validate(self) -> None:
        self.username_or_email = validate_string(
            self.username_or_email, "username_or_email", max_length=255
        ).lower()
        if not self.password:
            raise InvalidCredentialsError()
        self.role = validate_enum(self.role, "role", Role, required=False)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.pop("password", None)
        return data


class LoginCommandHandler(CommandHandler[LoginCommand, LoginResponse]):
    def __init__(
        self,
        uow_factory: IdentityUnitOfWorkFactory,
        password_hasher: IPasswordHasher,
        token_service: TokenService,
        login_policy: LoginPolicy,
    ):
        self._uow_factory = uow_factory
        self._password_hasher = password_hasher
        self._tokens = token_service
        self._login_policy = login_policy

    async def handle(self, command: LoginCommand) -> LoginResponse:
        """
        Authenticate and open a session.

        A wrong password is persisted as a failed attempt before the error is
        raised, so the counter survives the rejected request.

        Raises:
            InvalidCredentialsError: Unknown user or wrong password
            UserLockedError: If the account is locked, including by this attempt
            UserInactiveError: If the account is inactive
            RoleNotAssignedError: If the requested role is not one of the user's roles
        """
        async with self._uow_factory() as uow:
            user = await self._find_user(uow, command.username_or_email)
            if user is None:
                logger.warning(
                    "Login with unknown identifier", client_ip=command.context.ip_address
                )
                raise InvalidCredentialsError()
            if user.is_locked:
                raise UserLockedError(user.lock_until)
            if not user.is_active:
                raise UserInactiveError()

            password_ok = self._password_hasher.verify(command.password, user.password.value)
            if password_ok:
                tokens = await open_session(uow, self._tokens, user, command.role, command.context)
            else:
                user.increment_failed_attempts(self._login_policy)
                await uow.users.save(user)
                uow.collect(user)

        if not password_ok:
            self._reject(user, command.context)

        logger.info("Login succeeded", user_id=str(user.id), role=tokens.current_role)
        return LoginResponse(
            user=UserMapper.to_response(user),
            session=tokens,
            permissions=RolePermissionChecker.get_permissions_as_strings(
                Role(tokens.current_role)
            ),
        )

    @staticmethod
    async def _find_user(uow: IdentityUnitOfWork, identifier: str) -> User | None:
        if "@" in identifier:
            return await uow.users.find_by_email(identifier)
        return await uow.users.find_by_username(identifier)

    def _reject(self, user: User, context: RequestContext) -> None:
        logger.warning(
            "Failed login recorded",
            user_id=str(user.id),
            failed_attempts=user.failed_login_attempts,
            locked=user.is_locked,
            client_ip=context.ip_address,
        )
        if user.is_locked:
            raise UserLockedError(user.lock_until)
        raise InvalidCredentialsError(
            remaining_attempts=self._login_policy.max_attempts - user.failed_login_attempts
        )
