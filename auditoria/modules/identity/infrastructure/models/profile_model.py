"""
Profile Models

One internal or external profile row per user; ``user_id`` is unique.
"""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import DateTime
from sqlmodel import JSON, Column, Field, SQLModel

from auditoria.core.domain.base import ensure_utc, utc_now
from auditoria.modules.identity.domain.aggregates.external_profile import ExternalProfile
from auditoria.modules.identity.domain.aggregates.internal_profile import InternalProfile
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.value_objects import Email


class InternalProfileModel(SQLModel, table=True):
    __tablename__ = "internal_profiles"

    id: UUID = Field(primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)
    roles: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    department: str | None = Field(default=None, max_length=100)
    employee_code: str | None = Field(default=None, unique=True, max_length=50)
    hire_date: date | None = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    deleted_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    @classmethod
    def from_domain(cls, profile: InternalProfile) -> "InternalProfileModel":
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            roles=[role.value for role in profile.roles],
            department=profile.department,
            employee_code=profile.employee_code,
            hire_date=profile.hire_date,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
            deleted_at=profile.deleted_at,
        )

    def to_domain(self) -> InternalProfile:
        return InternalProfile(
            entity_id=self.id,
            user_id=self.user_id,
            roles=[Role(role) for role in self.roles or []],
            department=self.department,
            employee_code=self.employee_code,
            hire_date=self.hire_date,
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
            deleted_at=ensure_utc(self.deleted_at),
        )


class ExternalProfileModel(SQLModel, table=True):
    __tablename__ = "external_profiles"

    id: UUID = Field(primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)
    organization_id: UUID = Field(foreign_key="organizations.id", index=True)
    job_title: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    organizational_email: str | None = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)
    joined_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    left_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    deleted_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    @classmethod
    def from_domain(cls, profile: ExternalProfile) -> "ExternalProfileModel":
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            organization_id=profile.organization_id,
            job_title=profile.job_title,
            department=profile.department,
            organizational_email=(
                profile.organizational_email.value if profile.organizational_email else None
            ),
            is_active=profile.is_active,
            joined_at=profile.joined_at,
            left_at=profile.left_at,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
            deleted_at=profile.deleted_at,
        )

    def to_domain(self) -> ExternalProfile:
        return ExternalProfile(
            entity_id=self.id,
            user_id=self.user_id,
            organization_id=self.organization_id,
            job_title=self.job_title,
            department=self.department,
            organizational_email=(
                Email.create(self.organizational_email) if self.organizational_email else None
            ),
            is_active=self.is_active,
            joined_at=ensure_utc(self.joined_at),
            left_at=ensure_utc(self.left_at),
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
            deleted_at=ensure_utc(self.deleted_at),
        )
