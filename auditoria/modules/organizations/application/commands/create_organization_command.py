"""
Create organization command implementation.

Organization names are unique ignoring case; the tax id, when given, is
unique as well.
"""

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.modules.organizations.application.dtos import (
    OrganizationMapper,
    OrganizationResponse,
)
from auditoria.modules.organizations.domain.aggregates.organization import Organization
from auditoria.modules.organizations.domain.errors import DuplicateOrganizationError
from auditoria.modules.organizations.infrastructure.unit_of_work import (
    OrganizationsUnitOfWorkFactory,
)

logger = get_logger(__name__)

ORGANIZATION_FIELDS = (
    "name",
    "description",
    "address",
    "phone",
    "email",
    "logo",
    "banner",
    "mission",
    "vision",
    "values",
    "website",
    "tax_id",
)


class CreateOrganizationCommand(Command):
    def __init__(
        self,
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
        context: RequestContext | None = None,
    ):
        super().__init__(context)
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
        self._freeze()

    def organization_fields(self) -> dict:
        return {name: getattr(self, name) for name in ORGANIZATION_FIELDS}


class CreateOrganizationCommandHandler(
    CommandHandler[CreateOrganizationCommand, OrganizationResponse]
):
    def __init__(self, uow_factory: OrganizationsUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: CreateOrganizationCommand) -> OrganizationResponse:
        """
        Create an organization.

        Raises:
            EmptyFieldError, InvalidOrganizationDataError: If the name is missing or invalid
            DuplicateOrganizationError: If the name or tax id is already registered
        """
        organization = Organization.create(**command.organization_fields())

        async with self._uow_factory() as uow:
            if await uow.organizations.exists_by_name(organization.name.value):
                raise DuplicateOrganizationError("name", organization.name.value)
            if organization.tax_id and await uow.organizations.exists_by_tax_id(
                organization.tax_id
            ):
                raise DuplicateOrganizationError("tax_id", organization.tax_id)

            await uow.organizations.save(organization)
            organization.mark_as_created()
            uow.collect(organization)

        logger.info(
            "Organization created",
            organization_id=str(organization.id),
            name=organization.name.value,
        )
        return OrganizationMapper.to_response(organization)
