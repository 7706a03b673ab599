"""
Audit trail listener.

Writes one structured log record per published domain event under the
``auditoria.audit`` logger. Request context (request id, acting user, client
IP) is merged in by structlog's contextvars processor.

Usage Example:
    listener = AuditLogListener("identity", {UserCreated: "user.created"})
    listener.register(event_bus)
"""

from collections.abc import Mapping

from auditoria.core.domain.base import DomainEvent
from auditoria.core.events.bus import InMemoryEventBus
from auditoria.core.logging import get_logger

audit_logger = get_logger("auditoria.audit")

# events logged at warning level
_WARNING_ACTIONS = frozenset({"user.locked", "user.deleted", "organization.deleted"})


class AuditLogListener:
    def __init__(self, module: str, actions: Mapping[type[DomainEvent], str]):
        self.module = module
        self.actions = dict(actions)

    def register(self, event_bus: InMemoryEventBus) -> None:
        for event_type in self.actions:
            event_bus.subscribe(event_type, self)

    def action_for(self, event: DomainEvent) -> str:
        for event_type in type(event).__mro__:
            if event_type in self.actions:
                return self.actions[event_type]
        return event.event_type

    async def __call__(self, event: DomainEvent) -> None:
        action = self.action_for(event)
        payload = event.to_dict()
        payload.pop("event_type", None)
        log = audit_logger.warning if action in _WARNING_ACTIONS else audit_logger.info
        log("Audit event", module=self.module, action=action, **payload)


__all__ = ["AuditLogListener"]
