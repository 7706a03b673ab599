"""Identity persistence models."""

from auditoria.modules.identity.infrastructure.models.authorization_model import (
    MenuModel,
    MenuPermissionModel,
    PermissionModel,
    RoleModel,
    RolePermissionModel,
)
from auditoria.modules.identity.infrastructure.models.profile_model import (
    ExternalProfileModel,
    InternalProfileModel,
)
from auditoria.modules.identity.infrastructure.models.session_model import SessionModel
from auditoria.modules.identity.infrastructure.models.user_model import UserModel

__all__ = [
    "ExternalProfileModel",
    "InternalProfileModel",
    "MenuModel",
    "MenuPermissionModel",
    "PermissionModel",
    "RoleModel",
    "RolePermissionModel",
    "SessionModel",
    "UserModel",
]
