"""Identity domain services."""

from auditoria.modules.identity.domain.services.user_uniqueness_validator import (
    UserUniquenessValidator,
)

__all__ = ["UserUniquenessValidator"]
