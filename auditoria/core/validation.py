"""Composable input validators.

Plain functions used when building commands and when loading configuration.
Each returns the normalized value or raises ``ValidationError`` naming the
field. They compose by simple nesting, e.g.
``validate_list(raw, "roles", item_validator=partial(validate_enum, enum_class=Role))``.
"""

import re
from collections.abc import Callable
from enum import Enum
from typing import Any
from uuid import UUID

from auditoria.core.errors import ValidationError

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def validate_string(
    value: Any,
    field_name: str,
    required: bool = True,
    min_length: int = 0,
    max_length: int | None = None,
    pattern: str | None = None,
) -> str | None:
    """
    Validate and strip a string value.

    Args:
        value: Value to validate
        field_name: Field name for error messages
        required: Whether field is required
        min_length: Minimum string length
        max_length: Maximum string length
        pattern: Regular expression pattern to match

    Returns:
        str | None: Stripped string, or None for an optional empty value

    Raises:
        ValidationError: If validation fails
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field_name} is required", field=field_name)
        return None

    str_value = str(value).strip()

    if min_length > 0 and len(str_value) < min_length:
        raise ValidationError(
            f"{field_name} must be at least {min_length} characters", field=field_name
        )

    if max_length and len(str_value) > max_length:
        raise ValidationError(
            f"{field_name} must be at most {max_length} characters", field=field_name
        )

    if pattern and not re.match(pattern, str_value):
        raise ValidationError(
            f"{field_name} does not match required pattern", field=field_name
        )

    return str_value


def validate_integer(
    value: Any,
    field_name: str,
    required: bool = True,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int | None:
    """Validate an integer value with optional bounds."""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field_name} is required", field=field_name)
        return None

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a valid integer", field=field_name)

    try:
        int_value = int(value)
    except (ValueError, TypeError) as e:
        raise ValidationError(
            f"{field_name} must be a valid integer", field=field_name
        ) from e

    if min_value is not None and int_value < min_value:
        raise ValidationError(f"{field_name} must be at least {min_value}", field=field_name)

    if max_value is not None and int_value > max_value:
        raise ValidationError(f"{field_name} must be at most {max_value}", field=field_name)

    return int_value


def validate_boolean(value: Any, field_name: str, required: bool = True) -> bool | None:
    """Validate a boolean value, accepting the usual string spellings."""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field_name} is required", field=field_name)
        return None

    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        lowered = value.lower().strip()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False

    raise ValidationError(f"{field_name} must be a valid boolean value", field=field_name)


def validate_enum(
    value: Any, field_name: str, enum_class: type[Enum], required: bool = True
) -> Enum | None:
    """Validate an enum member by value (case-insensitive for strings)."""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field_name} is required", field=field_name)
        return None

    if isinstance(value, enum_class):
        return value

    for member in enum_class:
        if isinstance(value, str) and str(member.value).lower() == value.strip().lower():
            return member

    allowed = ", ".join(str(member.value) for member in enum_class)
    raise ValidationError(
        f"{field_name} must be one of: {allowed}", field=field_name
    )


def validate_uuid(value: Any, field_name: str, required: bool = True) -> UUID | None:
    """Validate a UUID given as UUID or string."""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field_name} is required", field=field_name)
        return None

    if isinstance(value, UUID):
        return value

    try:
        return UUID(str(value))
    except ValueError as e:
        raise ValidationError(f"{field_name} must be a valid UUID", field=field_name) from e


def validate_list(
    value: Any,
    field_name: str,
    required: bool = True,
    min_items: int = 0,
    max_items: int | None = None,
    item_validator: Callable[..., Any] | None = None,
) -> list[Any] | None:
    """Validate a list, optionally validating every item."""
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required", field=field_name)
        return None

    if isinstance(value, str):
        value = [item.strip() for item in value.split(",") if item.strip()]

    if not isinstance(value, list | tuple):
        raise ValidationError(f"{field_name} must be a list", field=field_name)

    if len(value) < min_items:
        raise ValidationError(
            f"{field_name} must contain at least {min_items} item(s)", field=field_name
        )

    if max_items is not None and len(value) > max_items:
        raise ValidationError(
            f"{field_name} must contain at most {max_items} item(s)", field=field_name
        )

    if item_validator is None:
        return list(value)

    return [item_validator(item, f"{field_name}[{index}]") for index, item in enumerate(value)]


__all__ = [
    "validate_boolean",
    "validate_enum",
    "validate_integer",
    "validate_list",
    "validate_string",
    "validate_uuid",
]
