"""Authentication commands."""

from auditoria.modules.identity.application.commands.auth.login_command import (
    LoginCommand,
    LoginCommandHandler,
)
from auditoria.modules.identity.application.commands.auth.logout_command import (
    LogoutAllCommand,
    LogoutAllCommandHandler,
    LogoutCommand,
    LogoutCommandHandler,
)
from auditoria.modules.identity.application.commands.auth.refresh_session_command import (
    RefreshSessionCommand,
    RefreshSessionCommandHandler,
)

__all__ = [
    "LoginCommand",
    "LoginCommandHandler",
    "LogoutAllCommand",
    "LogoutAllCommandHandler",
    "LogoutCommand",
    "LogoutCommandHandler",
    "RefreshSessionCommand",
    "RefreshSessionCommandHandler",
]
