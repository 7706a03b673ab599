"""In-process domain event bus.

Handlers subscribe to an event class and receive every event that is an
instance of it (subclasses included). Publishing awaits handlers one at a
time in subscription order. A failing handler is logged and skipped: events
are published after commit, so there is nothing left to roll back.

Usage Example:
    bus = InMemoryEventBus()
    bus.subscribe(UserCreated, audit_handler.on_user_created)
    await bus.publish_all(user.clear_domain_events())
"""

import inspect
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from auditoria.core.domain.base import DomainEvent
from auditoria.core.logging import get_logger

logger = get_logger(__name__)

EventHandlerType = Callable[[DomainEvent], Awaitable[None] | None]


class EventBus(ABC):
    """Sink for domain events."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Deliver one event to its handlers."""

    async def publish_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            await self.publish(event)


class InMemoryEventBus(EventBus):
    """Event bus delivering to handlers registered in this process."""

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandlerType]] = defaultdict(list)
        self._published_count = 0

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandlerType) -> None:
        if handler in self._handlers[event_type]:
            return
        self._handlers[event_type].append(handler)
        logger.debug(
            "Event handler subscribed",
            event_type=event_type.__name__,
            handler=getattr(handler, "__qualname__", repr(handler)),
        )

    def unsubscribe(self, event_type: type[DomainEvent], handler: EventHandlerType) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers_for(self, event: DomainEvent) -> list[EventHandlerType]:
        handlers: list[EventHandlerType] = []
        for event_type in type(event).__mro__:
            for handler in self._handlers.get(event_type, []):
                if handler not in handlers:
                    handlers.append(handler)
        return handlers

    async def publish(self, event: DomainEvent) -> None:
        self._published_count += 1
        handlers = self.handlers_for(event)

        if not handlers:
            logger.debug("No handlers for event", event_type=event.event_type)
            return

        for handler in handlers:
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.exception(
                    "Event handler failed",
                    event_type=event.event_type,
                    event_id=str(event.event_id),
                    handler=getattr(handler, "__qualname__", repr(handler)),
                    error=str(e),
                )

    def get_statistics(self) -> dict[str, Any]:
        return {
            "published_events": self._published_count,
            "subscriptions": {
                event_type.__name__: len(handlers)
                for event_type, handlers in self._handlers.items()
            },
        }


__all__ = ["EventBus", "EventHandlerType", "InMemoryEventBus"]
