"""
Organization Aggregate

A client organization that external users belong to. Contact value objects
(email, phone, address, image references) are shared with the identity
module.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from auditoria.core.domain.base import AggregateRoot
from auditoria.modules.identity.domain.errors import EmptyFieldError
from auditoria.modules.identity.domain.value_objects import Address, Email, ImageUrl, Phone
from auditoria.modules.organizations.domain.errors import InvalidOrganizationDataError
from auditoria.modules.organizations.domain.events import (
    OrganizationCreated,
    OrganizationDeleted,
    OrganizationUpdated,
)
from auditoria.modules.organizations.domain.value_objects import OrganizationName

TEXT_FIELDS = ("description", "mission", "vision", "values", "website", "tax_id")
PROFILE_FIELDS = frozenset({"name", "address", "phone", "email", *TEXT_FIELDS})


def _optional_email(value: str | None) -> Email | None:
    return Email.create(value) if value else None


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class Organization(AggregateRoot):
    def __init__(
        self,
        *,
        name: OrganizationName,
        description: str | None = None,
        address: Address | None = None,
        phone: Phone | None = None,
        email: Email | None = None,
        logo: ImageUrl | None = None,
        banner: ImageUrl | None = None,
        mission: str | None = None,
        vision: str | None = None,
        values: str | None = None,
        website: str | None = None,
        tax_id: str | None = None,
        is_active: bool = True,
        entity_id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        super().__init__(entity_id, created_at, updated_at, deleted_at)
        self.name = name
        self.description = description
        self.address = address
        self.phone = phone
        self.email = email
        self.logo = logo
        self.banner = banner
        self.mission = mission
        self.vision = vision
        self.values = values
        self.website = website
        self.tax_id = tax_id
        self.is_active = is_active

    @classmethod
    def create(
        cls,
        *,
        name: str,
        description: str | None = None,
        address: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        logo: str | None = None,
        banner: str | None = None,
        mission: str | None = None,
        vision: str | None = None,
        values: str | None = None,
        website: str | None = None,
        tax_id: str | None = None,
    ) -> "Organization":
        if not name or not str(name).strip():
            raise EmptyFieldError("nombre de organización")

        return cls(
            name=OrganizationName.create(name),
            description=_optional_text(description),
            address=Address.create(address),
            phone=Phone.create_optional(phone),
            email=_optional_email(email),
            logo=ImageUrl.create(logo),
            banner=ImageUrl.create(banner),
            mission=_optional_text(mission),
            vision=_optional_text(vision),
            values=_optional_text(values),
            website=_optional_text(website),
            tax_id=_optional_text(tax_id),
        )

    @classmethod
    def from_persistence(cls, *, id: UUID, name: str, **fields: Any) -> "Organization":
        return cls(
            entity_id=id,
            name=OrganizationName.create(name),
            description=fields.get("description"),
            address=Address.create(fields.get("address")),
            phone=Phone.create_optional(fields.get("phone")),
            email=_optional_email(fields.get("email")),
            logo=ImageUrl.create(fields.get("logo")),
            banner=ImageUrl.create(fields.get("banner")),
            mission=fields.get("mission"),
            vision=fields.get("vision"),
            values=fields.get("values"),
            website=fields.get("website"),
            tax_id=fields.get("tax_id"),
            is_active=fields.get("is_active", True),
            created_at=fields.get("created_at"),
            updated_at=fields.get("updated_at"),
            deleted_at=fields.get("deleted_at"),
        )

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    def update_profile(self, **changes: Any) -> None:
        """
        Apply profile changes and emit ``OrganizationUpdated``.

        Value objects are rebuilt from the new raw values before anything is
        assigned; an invalid value leaves the organization untouched.
        """
        unknown = set(changes) - PROFILE_FIELDS
        if unknown:
            raise InvalidOrganizationDataError(
                f"Campos no actualizables: {', '.join(sorted(unknown))}"
            )
        if not changes:
            return

        parsed: dict[str, Any] = {}
        if "name" in changes:
            parsed["name"] = OrganizationName.create(changes["name"])
        if "address" in changes:
            parsed["address"] = Address.create(changes["address"])
        if "phone" in changes:
            parsed["phone"] = Phone.create_optional(changes["phone"])
        if "email" in changes:
            parsed["email"] = _optional_email(changes["email"])
        for name in TEXT_FIELDS:
            if name in changes:
                parsed[name] = _optional_text(changes[name])

        for name, value in parsed.items():
            setattr(self, name, value)

        self.touch()
        self.add_domain_event(
            OrganizationUpdated(
                aggregate_id=self.id,
                name=self.name.value,
                updated_fields=tuple(changes),
            )
        )

    def update_logo(self, logo_url: str) -> None:
        self.logo = ImageUrl.create(logo_url)
        self.touch()

    def update_banner(self, banner_url: str) -> None:
        self.banner = ImageUrl.create(banner_url)
        self.touch()

    def mark_as_created(self) -> None:
        self.add_domain_event(OrganizationCreated(aggregate_id=self.id, name=self.name.value))

    def mark_as_deleted(self) -> None:
        if self.is_deleted:
            return
        self.is_active = False
        self.soft_delete()
        self.add_domain_event(OrganizationDeleted(aggregate_id=self.id, name=self.name.value))
