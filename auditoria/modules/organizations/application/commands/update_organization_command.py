"""Update organization profile command implementation."""

from typing import Any
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_boolean, validate_uuid
from auditoria.modules.organizations.application.dtos import (
    OrganizationMapper,
    OrganizationResponse,
)
from auditoria.modules.organizations.domain.errors import (
    DuplicateOrganizationError,
    InvalidOrganizationDataError,
)
from auditoria.modules.organizations.infrastructure.unit_of_work import (
    OrganizationsUnitOfWorkFactory,
)

logger = get_logger(__name__)


class UpdateOrganizationCommand(Command):
    """Partial update; ``is_active`` toggles activation, everything else is profile data."""

    def __init__(
        self,
        organization_id: UUID | str,
        changes: dict[str, Any],
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.organization_id = organization_id
        self.changes = dict(changes)
        self._freeze()

    def _validate(self) -> None:
        self.organization_id = validate_uuid(self.organization_id, "organization_id")
        if not self.changes:
            raise InvalidOrganizationDataError("No se proporcionaron campos para actualizar")
        if "is_active" in self.changes:
            self.changes["is_active"] = validate_boolean(self.changes["is_active"], "is_active")


class UpdateOrganizationCommandHandler(
    CommandHandler[UpdateOrganizationCommand, OrganizationResponse]
):
    def __init__(self, uow_factory: OrganizationsUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: UpdateOrganizationCommand) -> OrganizationResponse:
        changes = dict(command.changes)
        is_active = changes.pop("is_active", None)

        async with self._uow_factory() as uow:
            organization = await uow.organizations.find_by_id_or_fail(command.organization_id)
            organization.update_profile(**changes)

            if "name" in changes and await uow.organizations.exists_by_name(
                organization.name.value, exclude_id=organization.id
            ):
                raise DuplicateOrganizationError("name", organization.name.value)
            if changes.get("tax_id") and await uow.organizations.exists_by_tax_id(
                organization.tax_id, exclude_id=organization.id
            ):
                raise DuplicateOrganizationError("tax_id", organization.tax_id)

            if is_active is True:
                organization.activate()
            elif is_active is False:
                organization.deactivate()

            await uow.organizations.save(organization)
            uow.collect(organization)

        logger.info(
            "Organization updated",
            organization_id=str(organization.id),
            fields=sorted(command.changes),
        )
        return OrganizationMapper.to_response(organization)
