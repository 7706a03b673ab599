"""Identity repository implementations."""

from auditoria.modules.identity.infrastructure.repositories.authorization_repository import (
    SqlMenuRepository,
    SqlPermissionRepository,
    SqlRoleRepository,
)
from auditoria.modules.identity.infrastructure.repositories.profile_repository import (
    SqlExternalProfileRepository,
    SqlInternalProfileRepository,
)
from auditoria.modules.identity.infrastructure.repositories.session_repository import (
    SqlSessionRepository,
)
from auditoria.modules.identity.infrastructure.repositories.user_repository import (
    SqlUserRepository,
)

__all__ = [
    "SqlExternalProfileRepository",
    "SqlInternalProfileRepository",
    "SqlMenuRepository",
    "SqlPermissionRepository",
    "SqlRoleRepository",
    "SqlSessionRepository",
    "SqlUserRepository",
]
