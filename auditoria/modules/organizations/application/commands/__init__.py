"""Organization commands."""

from auditoria.modules.organizations.application.commands.create_organization_command import (
    CreateOrganizationCommand,
    CreateOrganizationCommandHandler,
)
from auditoria.modules.organizations.application.commands.delete_organization_command import (
    DeleteOrganizationCommand,
    DeleteOrganizationCommandHandler,
)
from auditoria.modules.organizations.application.commands.update_organization_command import (
    UpdateOrganizationCommand,
    UpdateOrganizationCommandHandler,
)
from auditoria.modules.organizations.application.commands.upload_image_command import (
    OrganizationImage,
    UploadOrganizationImageCommand,
    UploadOrganizationImageCommandHandler,
)

__all__ = [
    "CreateOrganizationCommand",
    "CreateOrganizationCommandHandler",
    "DeleteOrganizationCommand",
    "DeleteOrganizationCommandHandler",
    "OrganizationImage",
    "UpdateOrganizationCommand",
    "UpdateOrganizationCommandHandler",
    "UploadOrganizationImageCommand",
    "UploadOrganizationImageCommandHandler",
]
