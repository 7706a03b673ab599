"""CQRS base classes.

Architecture:
- Command: intent to change state, validated and frozen on construction
- Query: request for information, same lifecycle as commands
- CommandHandler / QueryHandler: one handler per message type

Every command and query carries the ``RequestContext`` of the caller. Input
validation runs in ``_validate`` using the composable functions from
``auditoria.core.validation``; business rules stay in the aggregates.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID, uuid4

from auditoria.core.context import RequestContext
from auditoria.core.domain.base import utc_now
from auditoria.core.logging import get_logger

logger = get_logger(__name__)

TCommand = TypeVar("TCommand", bound="Command")
TQuery = TypeVar("TQuery", bound="Query")
TResult = TypeVar("TResult")


class _Message(ABC):
    """Shared lifecycle for commands and queries."""

    def __init__(self, context: RequestContext | None = None):
        self.message_id: UUID = uuid4()
        self.created_at: datetime = utc_now()
        self.context = context or RequestContext.system()
        self._frozen = False

    def _validate(self) -> None:
        """Validate and normalize fields. Override in subclasses."""

    def _freeze(self) -> None:
        """Validate then mark the message immutable. Call last in ``__init__``."""
        self._validate()
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(
                f"Cannot modify immutable {self.__class__.__name__}"
            )
        super().__setattr__(name, value)

    def to_dict(self) -> dict[str, Any]:
        result = {}
        for key, value in self.__dict__.items():
            if key.startswith("_") or key == "context":
                continue
            if isinstance(value, UUID):
                result[key] = str(value)
            elif isinstance(value, datetime):
                result[key] = value.isoformat()
            else:
                result[key] = value
        result["message_type"] = self.__class__.__name__
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.message_id})"


class Command(_Message):
    """Base command representing an intent to change system state."""


class Query(_Message):
    """Base query representing a request for information."""


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """
    Base command handler.

    Usage Example:
        class DeleteUserHandler(CommandHandler[DeleteUserCommand, None]):
            async def handle(self, command: DeleteUserCommand) -> None:
                async with self._uow_factory() as uow:
                    user = await uow.users.find_by_id_or_fail(command.user_id)
                    user.mark_as_deleted()
                    await uow.users.save(user)
                    uow.collect(user)
    """

    @abstractmethod
    async def handle(self, command: TCommand) -> TResult:
        """Handle the command and return its result."""

    async def __call__(self, command: TCommand) -> TResult:
        logger.debug(
            "Executing command",
            command_type=command.__class__.__name__,
            command_id=str(command.message_id),
            handler=self.__class__.__name__,
        )
        return await self.handle(command)


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """Base query handler."""

    @abstractmethod
    async def handle(self, query: TQuery) -> TResult:
        """Handle the query and return data."""

    async def __call__(self, query: TQuery) -> TResult:
        logger.debug(
            "Executing query",
            query_type=query.__class__.__name__,
            query_id=str(query.message_id),
            handler=self.__class__.__name__,
        )
        return await self.handle(query)


__all__ = ["Command", "CommandHandler", "Query", "QueryHandler"]
