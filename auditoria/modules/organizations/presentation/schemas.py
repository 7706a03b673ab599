"""Organization request bodies."""

from pydantic import BaseModel, ConfigDict


class OrganizationFields(BaseModel):
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


class CreateOrganizationRequest(OrganizationFields):
    name: str


class UpdateOrganizationRequest(OrganizationFields):
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    is_active: bool | None = None


__all__ = ["CreateOrganizationRequest", "UpdateOrganizationRequest"]
