"""
Refresh session command implementation.

Exchanges a refresh token for a new token pair. The refresh token is rotated
on every use, so a token that was already exchanged no longer matches any
session.
"""

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_string
from auditoria.modules.identity.application.dtos.response import SessionTokensResponse
from auditoria.modules.identity.application.mappers.session_mapper import SessionMapper
from auditoria.modules.identity.domain.errors import InvalidSessionError
from auditoria.modules.identity.infrastructure.security import TokenService
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class RefreshSessionCommand(Command):
    def __init__(self, refresh_token: str, context: RequestContext | None = None):
        super().__init__(context)
        self.refresh_token = refresh_token
        self._freeze()

    def _validate(self) -> None:
        self.refresh_token = validate_string(self.refresh_token, "refresh_token", max_length=500)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.pop("refresh_token", None)
        return data


class RefreshSessionCommandHandler(CommandHandler[RefreshSessionCommand, SessionTokensResponse]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory, token_service: TokenService):
        self._uow_factory = uow_factory
        self._tokens = token_service

    async def handle(self, command: RefreshSessionCommand) -> SessionTokensResponse:
        """
        Rotate the session's refresh token and issue a new access token.

        A session whose user can no longer log in is closed before the request
        is rejected. When the session role was revoked the session falls back
        to the user's primary role.

        Raises:
            UnauthorizedError: If the refresh token is malformed, expired or forged
            InvalidSessionError: If no open session holds the token, or the user
                was deleted, deactivated or locked since login
        """
        user_id = self._tokens.decode_refresh_token(command.refresh_token)

        async with self._uow_factory() as uow:
            session = await uow.sessions.find_by_refresh_token(command.refresh_token)
            if session is None or not session.is_valid or not session.belongs_to(user_id):
                raise InvalidSessionError()

            user = await uow.users.find_by_id(session.user_id)
            allowed = user is not None and user.can_attempt_login()
            if allowed:
                if not user.has_role(session.current_role):
                    session.switch_role(user.primary_role)
                session.update_refresh_token(
                    self._tokens.create_refresh_token(user.id),
                    self._tokens.refresh_token_expiry(),
                )
                session.update_last_used()
            else:
                session.invalidate()
            await uow.sessions.save(session)
            uow.collect(session)

        if not allowed:
            logger.warning(
                "Refresh rejected for unauthorized user",
                session_id=str(session.id),
                user_id=str(session.user_id),
            )
            raise InvalidSessionError("Usuario no autorizado")

        logger.info("Session refreshed", session_id=str(session.id), user_id=str(user.id))
        return SessionMapper.to_tokens_response(
            session,
            self._tokens.create_access_token(user.id, session.id, session.current_role),
            int(self._tokens.access_token_lifetime.total_seconds()),
        )
