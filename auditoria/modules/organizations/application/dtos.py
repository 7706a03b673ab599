"""Organization response DTOs and mapper."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from auditoria.modules.organizations.domain.aggregates.organization import Organization


class OrganizationResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    logo: str | None = None
    banner: str | None = None
    mission: str | None = None
    vision: str | None = None
    values: str | None = None
    website: str | None = None
    tax_id: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


def _value(value_object) -> str | None:
    return value_object.value if value_object is not None else None


class OrganizationMapper:
    @staticmethod
    def to_response(organization: Organization) -> OrganizationResponse:
        return OrganizationResponse(
            id=organization.id,
            name=organization.name.value,
            description=organization.description,
            address=_value(organization.address),
            phone=_value(organization.phone),
            email=_value(organization.email),
            logo=_value(organization.logo),
            banner=_value(organization.banner),
            mission=organization.mission,
            vision=organization.vision,
            values=organization.values,
            website=organization.website,
            tax_id=organization.tax_id,
            is_active=organization.is_active,
            created_at=organization.created_at,
            updated_at=organization.updated_at,
        )


__all__ = ["OrganizationMapper", "OrganizationResponse"]
