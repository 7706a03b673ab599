"""
Username Value Object

Lowercased login handle without whitespace.
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from auditoria.core.domain.base import ValueObject
from auditoria.modules.identity.domain.errors import EmptyFieldError, InvalidUsernameError


@dataclass(frozen=True)
class Username(ValueObject):
    """
    Username value object.

    Rules:
    - trimmed, lowercased, inner whitespace removed
    - 3 to 20 characters from ``[a-z0-9_-]``
    - must not start or end with ``-`` or ``_``
    """

    MIN_LENGTH: ClassVar[int] = 3
    MAX_LENGTH: ClassVar[int] = 20
    PATTERN: ClassVar[re.Pattern] = re.compile(r"^[a-z0-9_-]+$")

    value: str

    def __post_init__(self):
        raw = self.value.strip() if isinstance(self.value, str) else ""
        if not raw:
            raise EmptyFieldError("nombre de usuario")

        normalized = re.sub(r"\s", "", raw.lower())
        object.__setattr__(self, "value", normalized)

        if len(normalized) < self.MIN_LENGTH:
            raise InvalidUsernameError(
                "El nombre de usuario debe tener al menos 3 caracteres"
            )
        if len(normalized) > self.MAX_LENGTH:
            raise InvalidUsernameError(
                "El nombre de usuario no puede tener más de 20 caracteres"
            )
        if not self.PATTERN.match(normalized):
            raise InvalidUsernameError(
                "El nombre de usuario solo puede contener letras minúsculas, "
                "números, guiones y guiones bajos"
            )
        if normalized[0] in "-_" or normalized[-1] in "-_":
            raise InvalidUsernameError(
                "El nombre de usuario no puede empezar o terminar con guión o guión bajo"
            )

    @classmethod
    def create(cls, value: Any) -> "Username":
        return cls(value)
