"""
HashedPassword Value Object

Wraps an already hashed password. Hashing itself happens in the
infrastructure layer; this object only checks the hash format.
"""

import re
from dataclasses import dataclass, field
from typing import Any, ClassVar

from auditoria.core.domain.base import ValueObject
from auditoria.modules.identity.domain.errors import InvalidPasswordError


@dataclass(frozen=True)
class HashedPassword(ValueObject):
    """Password hash in bcrypt, argon2 or crypt SHA-256/512 format."""

    HASH_PATTERNS: ClassVar[tuple[re.Pattern, ...]] = (
        re.compile(r"^\$2[aby]\$"),
        re.compile(r"^\$argon2"),
        re.compile(r"^\$6\$"),
        re.compile(r"^\$5\$"),
    )

    value: str = field(repr=False)

    def __post_init__(self):
        if not self.value or not isinstance(self.value, str):
            raise InvalidPasswordError("La contraseña no puede estar vacía")

        if not any(pattern.match(self.value) for pattern in self.HASH_PATTERNS):
            raise InvalidPasswordError("La contraseña debe estar hasheada")

    @classmethod
    def create(cls, value: Any) -> "HashedPassword":
        return cls(value)

    def __str__(self) -> str:
        return "[HASHED_PASSWORD]"
