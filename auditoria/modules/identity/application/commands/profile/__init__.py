"""External and internal profile commands."""

from auditoria.modules.identity.application.commands.profile.delete_external_profile_command import (  # noqa: E501
    DeleteExternalProfileCommand,
    DeleteExternalProfileCommandHandler,
)
from auditoria.modules.identity.application.commands.profile.update_external_profile_command import (  # noqa: E501
    UpdateExternalProfileCommand,
    UpdateExternalProfileCommandHandler,
)
from auditoria.modules.identity.application.commands.profile.update_internal_user_command import (
    UpdateInternalUserCommand,
    UpdateInternalUserCommandHandler,
)

__all__ = [
    "DeleteExternalProfileCommand",
    "DeleteExternalProfileCommandHandler",
    "UpdateExternalProfileCommand",
    "UpdateExternalProfileCommandHandler",
    "UpdateInternalUserCommand",
    "UpdateInternalUserCommandHandler",
]
