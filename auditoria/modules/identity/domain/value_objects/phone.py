"""
Phone Value Object

Bolivian 8-digit phone number, mobile or landline.
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from auditoria.core.domain.base import ValueObject
from auditoria.modules.identity.domain.errors import InvalidPhoneFormatError

UNKNOWN_CARRIER = "Desconocido"


@dataclass(frozen=True)
class Phone(ValueObject):
    """
    Phone value object.

    Rules:
    - non-digits are stripped
    - exactly 8 digits, first digit in {2, 3, 4, 6, 7}
    - mobile when the first digit is 6 or 7, landline otherwise
    """

    PATTERN: ClassVar[re.Pattern] = re.compile(r"^[23467]\d{7}$")
    COUNTRY_CODE: ClassVar[str] = "+591"

    value: str

    def __post_init__(self):
        if self.value is None:
            raise InvalidPhoneFormatError()

        digits = re.sub(r"\D", "", str(self.value))
        object.__setattr__(self, "value", digits)

        if not self.PATTERN.match(digits):
            raise InvalidPhoneFormatError()

    @classmethod
    def create(cls, value: Any) -> "Phone":
        return cls(value)

    @classmethod
    def create_optional(cls, value: Any) -> "Phone | None":
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return cls(value)

    @property
    def is_mobile(self) -> bool:
        return self.value[0] in "67"

    @property
    def is_landline(self) -> bool:
        return not self.is_mobile

    @property
    def carrier(self) -> str | None:
        """Mobile carrier by prefix; None for landlines."""
        if not self.is_mobile:
            return None

        prefix = int(self.value[:2])
        if 60 <= prefix <= 63:
            return "Viva"
        if 70 <= prefix <= 73:
            return "Entel"
        if 74 <= prefix <= 79:
            return "Tigo"
        return UNKNOWN_CARRIER

    @property
    def formatted(self) -> str:
        """``70-12-3456`` for mobiles, ``2-212-3456`` for landlines."""
        if self.is_mobile:
            return f"{self.value[:2]}-{self.value[2:4]}-{self.value[4:]}"
        return f"{self.value[0]}-{self.value[1:4]}-{self.value[4:]}"

    @property
    def international(self) -> str:
        return f"{self.COUNTRY_CODE} {self.value}"
