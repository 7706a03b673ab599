"""bcrypt password hasher."""

import bcrypt

from auditoria.core.config import SecurityConfig
from auditoria.core.logging import get_logger
from auditoria.modules.identity.domain.errors import InvalidPasswordError

logger = get_logger(__name__)

# bcrypt ignores input beyond 72 bytes
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher:
    """Hashes with a per-password salt; the cost factor comes from ``SecurityConfig``."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    @classmethod
    def from_config(cls, config: SecurityConfig) -> "BcryptPasswordHasher":
        return cls(rounds=config.bcrypt_rounds)

    def hash(self, plain_password: str) -> str:
        if not plain_password:
            raise InvalidPasswordError("La contraseña es requerida")
        encoded = plain_password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise InvalidPasswordError(
                f"La contraseña no puede exceder {MAX_PASSWORD_BYTES} bytes"
            )
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.warning("Stored password hash is malformed", error=str(e))
            return False
