"""
Identity request bodies.

Schemas only carry types; field rules (formats, lengths, role exclusivity)
are enforced by the commands and the domain.
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CreateInternalUserRequest(BaseModel):
    names: str
    last_names: str
    email: str
    username: str
    password: str
    ci: str
    roles: list[str]
    phone: str | None = None
    address: str | None = None
    image: str | None = None
    department: str | None = None
    employee_code: str | None = None
    hire_date: date | None = None


class CreateExternalUserRequest(BaseModel):
    names: str
    last_names: str
    email: str
    username: str
    password: str
    ci: str
    organization_id: UUID
    phone: str | None = None
    address: str | None = None
    image: str | None = None
    job_title: str | None = None
    department: str | None = None
    organizational_email: str | None = None


class UpdateUserRequest(BaseModel):
    """Partial update; only the fields sent are changed."""

    # Unknown fields reach the domain, which names them in its error.
    model_config = ConfigDict(extra="allow")

    names: str | None = None
    last_names: str | None = None
    email: str | None = None
    username: str | None = None
    ci: str | None = None
    phone: str | None = None
    address: str | None = None
    image: str | None = None
    roles: list[str] | None = None


class UpdateExternalProfileRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    job_title: str | None = None
    department: str | None = None
    organizational_email: str | None = None
    organization_id: UUID | None = None
    is_active: bool | None = None


class UpdateInternalUserRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    department: str | None = None
    employee_code: str | None = None
    hire_date: date | None = None


class ChangePasswordRequest(BaseModel):
    """``current_password`` is required when changing one's own password."""

    new_password: str
    current_password: str | None = None


class LoginRequest(BaseModel):
    """``username`` accepts either the username or the email."""

    username: str
    password: str
    role: str | None = None


class RefreshSessionRequest(BaseModel):
    refresh_token: str


class SwitchRoleRequest(BaseModel):
    role: str


__all__ = [
    "ChangePasswordRequest",
    "CreateExternalUserRequest",
    "CreateInternalUserRequest",
    "LoginRequest",
    "RefreshSessionRequest",
    "SwitchRoleRequest",
    "UpdateExternalProfileRequest",
    "UpdateInternalUserRequest",
    "UpdateUserRequest",
]
