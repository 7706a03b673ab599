"""Credential handling adapters."""

from auditoria.modules.identity.infrastructure.security.password_hasher import (
    BcryptPasswordHasher,
)
from auditoria.modules.identity.infrastructure.security.token_service import (
    AccessTokenClaims,
    TokenService,
)

__all__ = ["AccessTokenClaims", "BcryptPasswordHasher", "TokenService"]
