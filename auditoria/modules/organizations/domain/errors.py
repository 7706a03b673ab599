"""Organization domain errors."""

from typing import Any

from auditoria.core.errors import ConflictError, NotFoundError, ValidationError


class InvalidOrganizationDataError(ValidationError):
    default_code = "INVALID_ORGANIZATION_DATA"


class OrganizationNotFoundError(NotFoundError):
    default_code = "ORGANIZATION_NOT_FOUND"

    def __init__(self, identifier: Any, **kwargs: Any) -> None:
        super().__init__("Organización", identifier, **kwargs)


class DuplicateOrganizationError(ConflictError):
    default_code = "DUPLICATE_ORGANIZATION"

    def __init__(self, field: str, value: str | None = None, **kwargs: Any) -> None:
        message = f"Ya existe una organización con {field}"
        if value:
            message = f"{message}: {value}"
        super().__init__(message, field=field, **kwargs)


__all__ = [
    "DuplicateOrganizationError",
    "InvalidOrganizationDataError",
    "OrganizationNotFoundError",
]
