"""
Organization Model

SQLModel definition for organization persistence.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from auditoria.core.domain.base import ensure_utc, utc_now
from auditoria.modules.organizations.domain.aggregates.organization import Organization


class OrganizationModel(SQLModel, table=True):
    """Organization persistence model."""

    __tablename__ = "organizations"

    id: UUID = Field(primary_key=True)
    name: str = Field(unique=True, index=True, max_length=200)
    tax_id: str | None = Field(default=None, unique=True, max_length=50)

    # Contact
    address: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=8)
    email: str | None = Field(default=None, max_length=255)
    website: str | None = Field(default=None, max_length=255)

    # Branding
    logo: str | None = Field(default=None, max_length=500)
    banner: str | None = Field(default=None, max_length=500)

    # Profile texts
    description: str | None = Field(default=None, sa_type=Text)
    mission: str | None = Field(default=None, sa_type=Text)
    vision: str | None = Field(default=None, sa_type=Text)
    values: str | None = Field(default=None, sa_type=Text)

    is_active: bool = Field(default=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    deleted_at: datetime | None = Field(default=None, index=True, sa_type=DateTime(timezone=True))

    @classmethod
    def from_domain(cls, organization: Organization) -> "OrganizationModel":
        """Create model from domain entity."""
        return cls(
            id=organization.id,
            name=organization.name.value,
            tax_id=organization.tax_id,
            address=organization.address.value if organization.address else None,
            phone=organization.phone.value if organization.phone else None,
            email=organization.email.value if organization.email else None,
            website=organization.website,
            logo=organization.logo.value if organization.logo else None,
            banner=organization.banner.value if organization.banner else None,
            description=organization.description,
            mission=organization.mission,
            vision=organization.vision,
            values=organization.values,
            is_active=organization.is_active,
            created_at=organization.created_at,
            updated_at=organization.updated_at,
            deleted_at=organization.deleted_at,
        )

    def to_domain(self) -> Organization:
        """Convert to domain entity."""
        return Organization.from_persistence(
            id=self.id,
            name=self.name,
            tax_id=self.tax_id,
            address=self.address,
            phone=self.phone,
            email=self.email,
            website=self.website,
            logo=self.logo,
            banner=self.banner,
            description=self.description,
            mission=self.mission,
            vision=self.vision,
            values=self.values,
            is_active=self.is_active,
            created_at=ensure_utc(self.created_at),
            updated_at=ensure_utc(self.updated_at),
            deleted_at=ensure_utc(self.deleted_at),
        )
