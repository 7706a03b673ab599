"""
OrganizationName Value Object

Trimmed legal or commercial name of a client organization, 3 to 200
characters.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from auditoria.core.domain.base import ValueObject
from auditoria.modules.organizations.domain.errors import InvalidOrganizationDataError


@dataclass(frozen=True)
class OrganizationName(ValueObject):
    MIN_LENGTH: ClassVar[int] = 3
    MAX_LENGTH: ClassVar[int] = 200

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidOrganizationDataError(
                "El nombre de la organización no puede estar vacío", field="name"
            )

        object.__setattr__(self, "value", self.value.strip())

        if len(self.value) < self.MIN_LENGTH:
            raise InvalidOrganizationDataError(
                f"El nombre de la organización debe tener al menos {self.MIN_LENGTH} caracteres",
                field="name",
            )
        if len(self.value) > self.MAX_LENGTH:
            raise InvalidOrganizationDataError(
                f"El nombre de la organización no puede exceder {self.MAX_LENGTH} caracteres",
                field="name",
            )

    @classmethod
    def create(cls, value: Any) -> "OrganizationName":
        return cls(value)
