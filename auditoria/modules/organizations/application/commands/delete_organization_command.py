"""Delete (soft) organization command implementation."""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_uuid
from auditoria.modules.organizations.infrastructure.unit_of_work import (
    OrganizationsUnitOfWorkFactory,
)

logger = get_logger(__name__)


class DeleteOrganizationCommand(Command):
    def __init__(self, organization_id: UUID | str, context: RequestContext | None = None):
        super().__init__(context)
        self.organization_id = organization_id
        self._freeze()

    def _validate(self) -> None:
        self.organization_id = validate_uuid(self.organization_id, "organization_id")


class DeleteOrganizationCommandHandler(CommandHandler[DeleteOrganizationCommand, None]):
    def __init__(self, uow_factory: OrganizationsUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: DeleteOrganizationCommand) -> None:
        async with self._uow_factory() as uow:
            organization = await uow.organizations.find_by_id_or_fail(command.organization_id)
            organization.mark_as_deleted()
            await uow.organizations.delete(organization)
            uow.collect(organization)

        logger.info("Organization deleted", organization_id=str(command.organization_id))
