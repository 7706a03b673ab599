"""
ImageUrl Value Object

Optional reference to an image: an http(s) URL, a relative image path or an
absolute path served by the file storage.
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from auditoria.core.domain.base import ValueObject
from auditoria.modules.identity.domain.errors import InvalidImageUrlError


@dataclass(frozen=True)
class ImageUrl(ValueObject):
    URL_PATTERN: ClassVar[re.Pattern] = re.compile(r"^https?://.+", re.IGNORECASE)
    RELATIVE_PATTERN: ClassVar[re.Pattern] = re.compile(
        r"^[\w\-./]+\.(jpg|jpeg|png|gif|webp|svg)$", re.IGNORECASE
    )
    ABSOLUTE_PATTERN: ClassVar[re.Pattern] = re.compile(r"^/[a-zA-Z0-9_\-/.]+$")

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidImageUrlError()

        trimmed = self.value.strip()
        if not self.is_valid_url_or_path(trimmed):
            raise InvalidImageUrlError()
        object.__setattr__(self, "value", trimmed)

    @classmethod
    def is_valid_url_or_path(cls, value: str) -> bool:
        return bool(
            cls.URL_PATTERN.match(value)
            or cls.RELATIVE_PATTERN.match(value)
            or cls.ABSOLUTE_PATTERN.match(value)
        )

    @classmethod
    def create(cls, value: Any) -> "ImageUrl | None":
        """Return None for a missing or blank reference."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return cls(value)

    @property
    def is_external(self) -> bool:
        return bool(self.URL_PATTERN.match(self.value))
