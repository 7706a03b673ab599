"""Domain event delivery and the audit trail listener."""

from auditoria.core.events.audit import AuditLogListener
from auditoria.core.events.bus import EventBus, InMemoryEventBus

__all__ = ["AuditLogListener", "EventBus", "InMemoryEventBus"]
