"""Session commands."""

from auditoria.modules.identity.application.commands.session.create_session_command import (
    CreateSessionCommand,
    CreateSessionCommandHandler,
)
from auditoria.modules.identity.application.commands.session.invalidate_session_command import (
    InvalidateSessionCommand,
    InvalidateSessionCommandHandler,
)
from auditoria.modules.identity.application.commands.session.switch_role_command import (
    SwitchRoleCommand,
    SwitchRoleCommandHandler,
)

__all__ = [
    "CreateSessionCommand",
    "CreateSessionCommandHandler",
    "InvalidateSessionCommand",
    "InvalidateSessionCommandHandler",
    "SwitchRoleCommand",
    "SwitchRoleCommandHandler",
]
