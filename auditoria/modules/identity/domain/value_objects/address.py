"""
Address Value Object

Optional free-form postal address.
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from auditoria.core.domain.base import ValueObject
from auditoria.modules.identity.domain.errors import InvalidAddressError


@dataclass(frozen=True)
class Address(ValueObject):
    """Address with collapsed whitespace, at most 200 characters."""

    MAX_LENGTH: ClassVar[int] = 200

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidAddressError("La dirección no puede estar vacía")

        normalized = re.sub(r"\s+", " ", self.value.strip())
        if len(normalized) > self.MAX_LENGTH:
            raise InvalidAddressError(
                "La dirección no puede tener más de 200 caracteres"
            )
        object.__setattr__(self, "value", normalized)

    @classmethod
    def create(cls, value: Any) -> "Address | None":
        """Return None for a missing or blank address."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return cls(value)
