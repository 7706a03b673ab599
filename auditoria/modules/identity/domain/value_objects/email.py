"""
Email Value Object

Represents a validated, normalized email address.
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from auditoria.core.domain.base import ValueObject
from auditoria.modules.identity.domain.errors import InvalidEmailFormatError


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object; trimmed and lowercased before validation."""

    EMAIL_REGEX: ClassVar[re.Pattern] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

    PERSONAL_DOMAINS: ClassVar[frozenset[str]] = frozenset({
        "gmail.com", "hotmail.com", "yahoo.com", "outlook.com", "live.com", "icloud.com",
    })

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise InvalidEmailFormatError()

        object.__setattr__(self, "value", self.value.strip().lower())

        if not self.EMAIL_REGEX.match(self.value):
            raise InvalidEmailFormatError()

    @classmethod
    def create(cls, value: Any) -> "Email":
        return cls(value)

    @property
    def domain(self) -> str:
        return self.value.split("@")[1]

    @property
    def local_part(self) -> str:
        return self.value.split("@")[0]

    @property
    def is_personal_email(self) -> bool:
        """Free webmail provider (gmail, hotmail, ...)."""
        return self.domain in self.PERSONAL_DOMAINS

    @property
    def is_corporate_email(self) -> bool:
        return not self.is_personal_email
