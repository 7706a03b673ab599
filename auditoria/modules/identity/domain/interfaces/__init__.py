"""Identity domain contracts implemented by the infrastructure layer."""

from auditoria.modules.identity.domain.interfaces.password_hasher import IPasswordHasher

__all__ = ["IPasswordHasher"]
