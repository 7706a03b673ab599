"""
Resolve the principal behind an access token.

The token only says which session it was issued for. The user, its status
and the acting role are read from the store on every request, so
deactivation, locking, deletion, logout and role changes apply immediately.
"""

from dataclasses import dataclass
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Query, QueryHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_string
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.errors import (
    InvalidSessionError,
    RoleNotAssignedError,
    UserInactiveError,
    UserLockedError,
)
from auditoria.modules.identity.infrastructure.security import TokenService
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


@dataclass(frozen=True)
class Principal:
    user_id: UUID
    session_id: UUID
    role: Role


class ResolvePrincipalQuery(Query):
    def __init__(self, access_token: str, context: RequestContext | None = None):
        super().__init__(context)
        self.access_token = access_token
        self._freeze()

    def _validate(self) -> None:
        self.access_token = validate_string(self.access_token, "access_token")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.pop("access_token", None)
        return data


class ResolvePrincipalQueryHandler(QueryHandler[ResolvePrincipalQuery, Principal]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory, token_service: TokenService):
        self._uow_factory = uow_factory
        self._tokens = token_service

    async def handle(self, query: ResolvePrincipalQuery) -> Principal:
        """
        Raises:
            UnauthorizedError: If the token is malformed, expired or forged
            InvalidSessionError: If the session is closed or expired, or the
                user no longer exists
            UserInactiveError: If the user was deactivated
            UserLockedError: If the user is locked
            RoleNotAssignedError: If the session role was revoked from the user
        """
        claims = self._tokens.decode_access_token(query.access_token)

        async with self._uow_factory() as uow:
            session = await uow.sessions.find_by_id(claims.session_id)
            user = await uow.users.find_by_id(claims.user_id)

        if session is None or not session.belongs_to(claims.user_id) or not session.is_valid:
            raise InvalidSessionError()
        if user is None:
            logger.warning(
                "Token presented for missing user",
                user_id=str(claims.user_id),
                session_id=str(claims.session_id),
            )
            raise InvalidSessionError("Usuario no autorizado")
        if not user.is_active:
            raise UserInactiveError()
        if user.is_locked:
            raise UserLockedError(user.lock_until)
        if not user.has_role(session.current_role):
            raise RoleNotAssignedError(session.current_role.value)

        return Principal(user_id=user.id, session_id=session.id, role=session.current_role)
