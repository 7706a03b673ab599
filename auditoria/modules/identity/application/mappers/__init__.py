"""Mappers from identity aggregates to response DTOs."""

from auditoria.modules.identity.application.mappers.authorization_mapper import (
    MenuMapper,
    PermissionMapper,
    RoleMapper,
)
from auditoria.modules.identity.application.mappers.session_mapper import SessionMapper
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper

__all__ = ["MenuMapper", "PermissionMapper", "RoleMapper", "SessionMapper", "UserMapper"]
