"""
Session Repository Implementation

SQLModel-based implementation of the session repository interface.
"""

from uuid import UUID

from sqlmodel import col, select

from auditoria.core.domain.base import utc_now
from auditoria.core.infrastructure.repository import SqlRepository
from auditoria.modules.identity.domain.aggregates.session import Session
from auditoria.modules.identity.domain.errors import SessionNotFoundError
from auditoria.modules.identity.infrastructure.models.session_model import SessionModel


class SqlSessionRepository(SqlRepository[SessionModel]):
    """SQLModel implementation of session repository."""

    model_type = SessionModel

    async def find_by_id(self, session_id: UUID) -> Session | None:
        """Find session by ID."""
        model = await self._first(
            select(SessionModel).where(
                SessionModel.id == session_id, col(SessionModel.deleted_at).is_(None)
            )
        )
        return model.to_domain() if model else None

    async def find_by_id_or_fail(self, session_id: UUID) -> Session:
        session = await self.find_by_id(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def find_by_refresh_token(self, refresh_token: str) -> Session | None:
        """Find session by refresh token."""
        model = await self._first(
            select(SessionModel).where(SessionModel.refresh_token == refresh_token)
        )
        return model.to_domain() if model else None

    async def find_active_by_user(self, user_id: UUID) -> list[Session]:
        """Find active, unexpired sessions for user."""
        statement = (
            select(SessionModel)
            .where(
                SessionModel.user_id == user_id,
                col(SessionModel.is_active).is_(True),
                col(SessionModel.expires_at) > utc_now(),
                col(SessionModel.deleted_at).is_(None),
            )
            .order_by(col(SessionModel.last_used_at).desc())
        )
        return [model.to_domain() for model in await self._all(statement)]

    async def save(self, session: Session) -> None:
        await self._upsert(SessionModel.from_domain(session))

    async def delete(self, session: Session) -> None:
        session.soft_delete()
        await self.save(session)
