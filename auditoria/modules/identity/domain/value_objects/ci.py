"""
CI Value Object

Bolivian national identity card number (Cédula de Identidad).
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from auditoria.core.domain.base import ValueObject
from auditoria.modules.identity.domain.errors import InvalidCiFormatError

UNKNOWN_DEPARTMENT = "Desconocido"


@dataclass(frozen=True)
class CI(ValueObject):
    """
    Identity card number; every non-digit is stripped before validation.

    The first digit identifies the issuing department.
    """

    PATTERN: ClassVar[re.Pattern] = re.compile(r"^\d{7,10}$")

    DEPARTMENTS: ClassVar[dict[str, tuple[str, str]]] = {
        "1": ("La Paz", "LP"),
        "2": ("Oruro", "OR"),
        "3": ("Potosí", "PT"),
        "4": ("Cochabamba", "CB"),
        "5": ("Chuquisaca", "CH"),
        "6": ("Tarija", "TJ"),
        "7": ("Santa Cruz", "SC"),
        "8": ("Beni", "BE"),
        "9": ("Pando", "PD"),
    }

    value: str

    def __post_init__(self):
        if self.value is None:
            raise InvalidCiFormatError()

        digits = re.sub(r"\D", "", str(self.value))
        object.__setattr__(self, "value", digits)

        if not self.PATTERN.match(digits):
            raise InvalidCiFormatError()

    @classmethod
    def create(cls, value: Any) -> "CI":
        return cls(value)

    @property
    def extension(self) -> str:
        return self.value[:2]

    @property
    def department(self) -> str:
        return self.DEPARTMENTS.get(self.value[0], (UNKNOWN_DEPARTMENT, "XX"))[0]

    @property
    def department_code(self) -> str:
        return self.DEPARTMENTS.get(self.value[0], (UNKNOWN_DEPARTMENT, "XX"))[1]

    @property
    def formatted(self) -> str:
        """e.g. ``1234567-8 LP``."""
        return f"{self.value[:-1]}-{self.value[-1]} {self.department_code}"
