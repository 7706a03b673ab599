"""
PersonName Value Object

First names or last names of a person.
"""

import re
from dataclasses import dataclass, field
from typing import Any, ClassVar

from auditoria.core.domain.base import ValueObject
from auditoria.modules.identity.domain.errors import EmptyFieldError, InvalidPersonNameError


def _capitalize_words(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


@dataclass(frozen=True)
class PersonName(ValueObject):
    """
    Person name, 2 to 50 characters of letters (Spanish accents included),
    spaces, apostrophes and hyphens. Each word is capitalized.
    """

    PATTERN: ClassVar[re.Pattern] = re.compile(r"^[a-zA-ZáéíóúÁÉÍÓÚñÑ\s'-]+$")

    value: str
    field_name: str = field(default="nombre", compare=False, repr=False)

    def __post_init__(self):
        trimmed = self.value.strip() if isinstance(self.value, str) else ""
        if not trimmed:
            raise EmptyFieldError(self.field_name)

        if len(trimmed) < 2:
            raise InvalidPersonNameError(
                f"{self.field_name} debe tener al menos 2 caracteres", field=self.field_name
            )
        if len(trimmed) > 50:
            raise InvalidPersonNameError(
                f"{self.field_name} no puede tener más de 50 caracteres", field=self.field_name
            )
        if not self.PATTERN.match(trimmed):
            raise InvalidPersonNameError(
                f"{self.field_name} solo puede contener letras, espacios, guiones y apóstrofes",
                field=self.field_name,
            )

        object.__setattr__(self, "value", _capitalize_words(trimmed))

    @classmethod
    def create(cls, value: Any, field_name: str = "nombre") -> "PersonName":
        return cls(value, field_name)

