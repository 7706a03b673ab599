"""Session mapper."""

from uuid import UUID

from auditoria.modules.identity.application.dtos.response import (
    SessionResponse,
    SessionTokensResponse,
)
from auditoria.modules.identity.domain.aggregates.session import Session


class SessionMapper:
    @staticmethod
    def to_response(session: Session, current_session_id: UUID | None = None) -> SessionResponse:
        return SessionResponse(
            id=session.id,
            user_id=session.user_id,
            current_role=session.current_role.value,
            expires_at=session.expires_at,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            is_active=session.is_active,
            is_current=current_session_id is not None and session.id == current_session_id,
            last_used_at=session.last_used_at,
            created_at=session.created_at,
        )

    @classmethod
    def to_tokens_response(
        cls, session: Session, access_token: str, expires_in: int
    ) -> SessionTokensResponse:
        return SessionTokensResponse(
            **cls.to_response(session, session.id).model_dump(),
            access_token=access_token,
            refresh_token=session.refresh_token,
            expires_in=expires_in,
        )
