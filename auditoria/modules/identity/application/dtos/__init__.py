"""Identity application DTOs."""

from auditoria.modules.identity.application.dtos.response import (
    CatalogSyncResponse,
    ExternalProfileResponse,
    InternalProfileResponse,
    LoginResponse,
    MenuResponse,
    PagedResponse,
    PermissionResponse,
    RoleResponse,
    SessionResponse,
    SessionTokensResponse,
    UserDetailResponse,
    UserResponse,
)

__all__ = [
    "CatalogSyncResponse",
    "ExternalProfileResponse",
    "InternalProfileResponse",
    "LoginResponse",
    "MenuResponse",
    "PagedResponse",
    "PermissionResponse",
    "RoleResponse",
    "SessionResponse",
    "SessionTokensResponse",
    "UserDetailResponse",
    "UserResponse",
]
