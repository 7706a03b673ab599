"""
Permission Value Object

A (resource, action) pair such as ``users:create``.
"""

from dataclasses import dataclass
from typing import Any

from auditoria.core.domain.base import ValueObject
from auditoria.modules.identity.domain.enums import Action, Resource
from auditoria.modules.identity.domain.errors import InvalidPermissionError


@dataclass(frozen=True)
class Permission(ValueObject):
    """Permission value object; equal when resource and action are equal."""

    resource: Resource
    action: Action

    def __post_init__(self):
        if not isinstance(self.resource, Resource):
            raise InvalidPermissionError(f"Invalid resource: {self.resource}")
        if not isinstance(self.action, Action):
            raise InvalidPermissionError(f"Invalid action: {self.action}")

    @classmethod
    def create(cls, resource: Resource, action: Action) -> "Permission":
        return cls(resource, action)

    @classmethod
    def from_string(cls, value: Any) -> "Permission":
        """Parse ``"resource:action"``."""
        if not isinstance(value, str) or value.count(":") != 1:
            raise InvalidPermissionError(f"Invalid permission format: {value}")

        resource, action = value.split(":")
        if not resource or not action:
            raise InvalidPermissionError(f"Invalid permission format: {value}")

        try:
            parsed_resource = Resource(resource)
        except ValueError as e:
            raise InvalidPermissionError(f"Invalid resource: {resource}") from e

        try:
            parsed_action = Action(action)
        except ValueError as e:
            raise InvalidPermissionError(f"Invalid action: {action}") from e

        return cls(parsed_resource, parsed_action)

    @property
    def value(self) -> str:
        return f"{self.resource.value}:{self.action.value}"

    def __str__(self) -> str:
        return self.value
