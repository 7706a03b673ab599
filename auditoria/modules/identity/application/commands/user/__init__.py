"""User management commands."""

from auditoria.modules.identity.application.commands.user.change_password_command import (
    ChangePasswordCommand,
    ChangePasswordCommandHandler,
)
from auditoria.modules.identity.application.commands.user.change_user_status_command import (
    ChangeUserStatusCommand,
    ChangeUserStatusCommandHandler,
)
from auditoria.modules.identity.application.commands.user.create_external_user_command import (
    CreateExternalUserCommand,
    CreateExternalUserCommandHandler,
)
from auditoria.modules.identity.application.commands.user.create_internal_user_command import (
    CreateInternalUserCommand,
    CreateInternalUserCommandHandler,
)
from auditoria.modules.identity.application.commands.user.delete_user_command import (
    DeleteUserCommand,
    DeleteUserCommandHandler,
)
from auditoria.modules.identity.application.commands.user.reset_login_attempts_command import (
    ResetLoginAttemptsCommand,
    ResetLoginAttemptsCommandHandler,
)
from auditoria.modules.identity.application.commands.user.update_user_command import (
    UpdateUserCommand,
    UpdateUserCommandHandler,
)
from auditoria.modules.identity.application.commands.user.upload_avatar_command import (
    UploadAvatarCommand,
    UploadAvatarCommandHandler,
)

__all__ = [
    "ChangePasswordCommand",
    "ChangePasswordCommandHandler",
    "ChangeUserStatusCommand",
    "ChangeUserStatusCommandHandler",
    "CreateExternalUserCommand",
    "CreateExternalUserCommandHandler",
    "CreateInternalUserCommand",
    "CreateInternalUserCommandHandler",
    "DeleteUserCommand",
    "DeleteUserCommandHandler",
    "ResetLoginAttemptsCommand",
    "ResetLoginAttemptsCommandHandler",
    "UpdateUserCommand",
    "UpdateUserCommandHandler",
    "UploadAvatarCommand",
    "UploadAvatarCommandHandler",
]
