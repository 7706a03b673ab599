"""
User Model

SQLModel definition for user persistence. Value objects are stored as their
primitive values; roles are a JSON list of role names.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime
from sqlmodel import JSON, Column, Field, SQLModel

from auditoria.core.domain.base import ensure_utc, utc_now
from auditoria.modules.identity.domain.aggregates.user import User


class UserModel(SQLModel, table=True):
    """User persistence model."""

    __tablename__ = "users"

    # Identity
    id: UUID = Field(primary_key=True)
    user_type: str = Field(index=True, max_length=16)
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=50)
    ci: str = Field(unique=True, index=True, max_length=10)

    # Profile
    names: str = Field(max_length=100)
    last_names: str = Field(max_length=100)
    phone: str | None = Field(default=None, max_length=8)
    image: str | None = Field(default=None, max_length=500)
    address: str | None = Field(default=None, max_length=200)

    # Credentials and access
    password: str = Field(max_length=255)
    roles: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    status: str = Field(default="ACTIVE", index=True, max_length=16)
    failed_login_attempts: int = Field(default=0)
    lock_until: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    deleted_at: datetime | None = Field(default=None, index=True, sa_type=DateTime(timezone=True))

    @classmethod
    def from_domain(cls, user: User) -> "UserModel":
        """Create model from domain entity."""
        return cls(
            id=user.id,
            user_type=user.type.value,
            email=user.email.value,
            username=user.username.value,
            ci=user.ci.value,
            names=user.names.value,
            last_names=user.last_names.value,
            phone=user.phone.value if user.phone else None,
            image=user.image.value if user.image else None,
            address=user.address.value if user.address else None,
            password=user.password.value,
            roles=[role.value for role in user.roles],
            status=user.status.value,
            failed_login_attempts=user.failed_login_attempts,
            lock_until=user.lock_until,
            created_at=user.created_at,
            updated_at=user.updated_at,
            deleted_at=user.deleted_at,
        )

    def to_domain(self) -> User:
        """Convert to domain entity."""
        return User.from_persistence(
            id=self.id,
            user_type=self.user_type,
            names=self.names,
            last_names=self.last_names,
            email=self.email,
            username=self.username,
            password=self.password,
            ci=self.ci,
            roles=list(self.roles or []),
            status=self.status,
            failed_login_attempts=self.failed_login_attempts,
            lock_until=ensure_utc(self.lock_until),
            phone=self.phone,
            image=self.image,
            address=self.address,
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
            deleted_at=ensure_utc(self.deleted_at),
        )
