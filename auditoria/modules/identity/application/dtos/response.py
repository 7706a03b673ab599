"""
Response DTOs for the identity module.

Plain pydantic models returned by command and query handlers and serialized
as-is by the HTTP layer. They never carry password hashes; tokens appear
only in the login and refresh responses.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from auditoria.shared.pagination import PagedResponse


class InternalProfileResponse(BaseModel):
    id: UUID
    roles: list[str]
    department: str | None = None
    employee_code: str | None = None
    hire_date: date | None = None


class ExternalProfileResponse(BaseModel):
    id: UUID
    organization_id: UUID
    job_title: str | None = None
    department: str | None = None
    organizational_email: str | None = None
    is_active: bool
    joined_at: datetime | None = None
    left_at: datetime | None = None


class UserResponse(BaseModel):
    id: UUID
    type: str
    names: str
    last_names: str
    full_name: str
    email: str
    username: str
    ci: str
    phone: str | None = None
    address: str | None = None
    image: str | None = None
    roles: list[str]
    status: str
    is_locked: bool
    failed_login_attempts: int
    lock_until: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UserDetailResponse(UserResponse):
    """User plus the profile matching its type."""

    internal_profile: InternalProfileResponse | None = None
    external_profile: ExternalProfileResponse | None = None


class SessionResponse(BaseModel):
    id: UUID
    user_id: UUID
    current_role: str
    expires_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None
    is_active: bool
    is_current: bool = False
    last_used_at: datetime | None = None
    created_at: datetime


class SessionTokensResponse(SessionResponse):
    """Returned on login and refresh: the only responses carrying tokens."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class LoginResponse(BaseModel):
    user: UserResponse
    session: SessionTokensResponse
    permissions: list[str]


class PermissionResponse(BaseModel):
    id: UUID
    name: str
    resource: str
    action: str
    description: str | None = None


class RoleResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    permissions: list[PermissionResponse] = Field(default_factory=list)


class MenuResponse(BaseModel):
    id: str
    name: str
    icon: str | None = None
    path: str | None = None
    order: int = 0
    children: list["MenuResponse"] = Field(default_factory=list)


class CatalogSyncResponse(BaseModel):
    permissions: int
    roles: int
    menus: int


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
