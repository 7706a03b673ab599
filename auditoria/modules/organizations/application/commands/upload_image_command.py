"""
Upload organization image command implementation.

Stores a logo or banner file and points the organization at it. The file
written for a failed update is removed, as is the image it replaces.
"""

from enum import Enum
from typing import Any
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_enum, validate_string, validate_uuid
from auditoria.modules.organizations.application.dtos import (
    OrganizationMapper,
    OrganizationResponse,
)
from auditoria.modules.organizations.infrastructure.unit_of_work import (
    OrganizationsUnitOfWorkFactory,
)
from auditoria.shared.file_storage import LocalFileStorage

logger = get_logger(__name__)


class OrganizationImage(Enum):
    LOGO = "logo"
    BANNER = "banner"

    @property
    def folder(self) -> str:
        return f"{self.value}s"


class UploadOrganizationImageCommand(Command):
    def __init__(
        self,
        organization_id: UUID | str,
        kind: Any,
        content: bytes,
        content_type: str | None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.organization_id = organization_id
        self.kind = kind
        self.content = content
        self.content_type = content_type
        self._freeze()

    def _validate(self) -> None:
        self.organization_id = validate_uuid(self.organization_id, "organization_id")
        self.kind = validate_enum(self.kind, "kind", OrganizationImage)
        self.content_type = validate_string(self.content_type, "content_type").lower()

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["content"] = f"<{len(self.content)} bytes>"
        return data


class UploadOrganizationImageCommandHandler(
    CommandHandler[UploadOrganizationImageCommand, OrganizationResponse]
):
    def __init__(self, uow_factory: OrganizationsUnitOfWorkFactory, storage: LocalFileStorage):
        self._uow_factory = uow_factory
        self._storage = storage

    async def handle(self, command: UploadOrganizationImageCommand) -> OrganizationResponse:
        self._storage.validate_upload(command.content, command.content_type)

        path = LocalFileStorage.build_path(
            command.kind.folder, command.organization_id, command.content, command.content_type
        )
        url = await self._storage.save(path, command.content)

        try:
            async with self._uow_factory() as uow:
                organization = await uow.organizations.find_by_id_or_fail(
                    command.organization_id
                )
                if command.kind is OrganizationImage.LOGO:
                    previous = organization.logo
                    organization.update_logo(url)
                else:
                    previous = organization.banner
                    organization.update_banner(url)
                await uow.organizations.save(organization)
        except Exception:
            await self._storage.delete(path)
            raise

        previous_path = self._storage.path_for_url(previous.value) if previous else None
        if previous_path and previous_path != path:
            await self._storage.delete(previous_path)

        logger.info(
            "Organization image uploaded",
            organization_id=str(organization.id),
            kind=command.kind.value,
            path=path,
        )
        return OrganizationMapper.to_response(organization)
