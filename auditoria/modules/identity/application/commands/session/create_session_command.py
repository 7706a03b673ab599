"""
Create session command implementation.

Opens a session for a user that may log in, acting as one of its roles, and
issues the token pair bound to it.
"""

from typing import Any
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_enum, validate_uuid
from auditoria.modules.identity.application.dtos.response import SessionTokensResponse
from auditoria.modules.identity.application.mappers.session_mapper import SessionMapper
from auditoria.modules.identity.domain.aggregates.session import Session
from auditoria.modules.identity.domain.aggregates.user import User
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.errors import (
    RoleNotAssignedError,
    UserInactiveError,
    UserLockedError,
)
from auditoria.modules.identity.infrastructure.security import TokenService
from auditoria.modules.identity.infrastructure.unit_of_work import (
    IdentityUnitOfWork,
    IdentityUnitOfWorkFactory,
)

logger = get_logger(__name__)


async def open_session(
    uow: IdentityUnitOfWork,
    tokens: TokenService,
    user: User,
    role: Role | None,
    context: RequestContext,
) -> SessionTokensResponse:
    """
    Persist a new session for ``user`` inside ``uow`` and issue its tokens.

    The acting role defaults to the user's primary role. A successful open
    clears any failed login count or stale lock.

    Raises:
        UserInactiveError: If the user is inactive
        UserLockedError: If the user is locked after failed logins
        RoleNotAssignedError: If the requested role is not one of the user's roles
    """
    if not user.is_active:
        raise UserInactiveError()
    if user.is_locked:
        raise UserLockedError(user.lock_until)

    role = role or user.primary_role
    if not user.has_role(role):
        raise RoleNotAssignedError(role.value)

    session = Session.create(
        user_id=user.id,
        refresh_token=tokens.create_refresh_token(user.id),
        current_role=role,
        expires_at=tokens.refresh_token_expiry(),
        ip_address=context.ip_address,
        user_agent=context.user_agent,
    )
    await uow.sessions.save(session)

    if user.failed_login_attempts or user.lock_until is not None:
        user.reset_login_attempts()
        await uow.users.save(user)
    uow.collect(session)

    logger.info(
        "Session created",
        session_id=str(session.id),
        user_id=str(user.id),
        role=role.value,
    )
    return SessionMapper.to_tokens_response(
        session,
        tokens.create_access_token(user.id, session.id, role),
        int(tokens.access_token_lifetime.total_seconds()),
    )


class CreateSessionCommand(Command):
    def __init__(
        self,
        user_id: UUID | str,
        role: Any = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.user_id = user_id
        self.role = role
        self._freeze()

    def _validate(self) -> None:
        self.user_id = validate_uuid(self.user_id, "user_id")
        self.role = validate_enum(self.role, "role", Role, required=False)


class CreateSessionCommandHandler(CommandHandler[CreateSessionCommand, SessionTokensResponse]):
    """Open a session for a user already identified by id."""

    def __init__(self, uow_factory: IdentityUnitOfWorkFactory, token_service: TokenService):
        self._uow_factory = uow_factory
        self._tokens = token_service

    async def handle(self, command: CreateSessionCommand) -> SessionTokensResponse:
        """
        Raises:
            UserNotFoundError: If the user does not exist
            UserInactiveError: If the user is inactive
            UserLockedError: If the user is locked after failed logins
            RoleNotAssignedError: If the requested role is not one of the user's roles
        """
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id_or_fail(command.user_id)
            return await open_session(uow, self._tokens, user, command.role, command.context)
