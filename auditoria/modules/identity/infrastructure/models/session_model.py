"""
Session Model

SQLModel definition for session persistence.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from auditoria.core.domain.base import ensure_utc, utc_now
from auditoria.modules.identity.domain.aggregates.session import Session
from auditoria.modules.identity.domain.enums import Role


class SessionModel(SQLModel, table=True):
    """Session persistence model."""

    __tablename__ = "sessions"

    id: UUID = Field(primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    refresh_token: str = Field(unique=True, index=True, max_length=500)
    current_role: str = Field(max_length=32)
    expires_at: datetime = Field(index=True, sa_type=DateTime(timezone=True))

    # Device info
    ip_address: str | None = Field(default=None, max_length=64)
    user_agent: str | None = Field(default=None, max_length=500)

    is_active: bool = Field(default=True, index=True)
    last_used_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    deleted_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    @classmethod
    def from_domain(cls, session: Session) -> "SessionModel":
        """Create model from domain entity."""
        return cls(
            id=session.id,
            user_id=session.user_id,
            refresh_token=session.refresh_token,
            current_role=session.current_role.value,
            expires_at=session.expires_at,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            is_active=session.is_active,
            last_used_at=session.last_used_at,
            created_at=session.created_at,
            updated_at=session.updated_at,
            deleted_at=session.deleted_at,
        )

    def to_domain(self) -> Session:
        """Convert to domain entity."""
        return Session(
            entity_id=self.id,
            user_id=self.user_id,
            refresh_token=self.refresh_token,
            current_role=Role(self.current_role),
            expires_at=ensure_utc(self.expires_at),
            ip_address=self.ip_address,
            user_agent=self.user_agent,
            is_active=self.is_active,
            last_used_at=ensure_utc(self.last_used_at),
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
            deleted_at=ensure_utc(self.deleted_at),
        )
