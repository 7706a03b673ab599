"""
Identity Domain Repository Interfaces

Domain contracts for data access that must be implemented by the infrastructure layer.
"""

from auditoria.modules.identity.domain.interfaces.repositories.authorization_repository import (
    IMenuRepository,
    IPermissionRepository,
    IRoleRepository,
)
from auditoria.modules.identity.domain.interfaces.repositories.profile_repository import (
    IExternalProfileRepository,
    IInternalProfileRepository,
)
from auditoria.modules.identity.domain.interfaces.repositories.session_repository import (
    ISessionRepository,
)
from auditoria.modules.identity.domain.interfaces.repositories.user_repository import (
    IUserRepository,
)

__all__ = [
    "IExternalProfileRepository",
    "IInternalProfileRepository",
    "IMenuRepository",
    "IPermissionRepository",
    "IRoleRepository",
    "ISessionRepository",
    "IUserRepository",
]
