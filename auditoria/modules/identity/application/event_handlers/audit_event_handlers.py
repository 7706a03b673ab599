"""Audit trail for user and session lifecycle events."""

from auditoria.core.events import AuditLogListener, InMemoryEventBus
from auditoria.core.logging import get_logger
from auditoria.modules.identity.domain.events import (
    SessionCreated,
    SessionInvalidated,
    SessionRoleSwitched,
    UserCreated,
    UserDeleted,
    UserLocked,
    UserStatusChanged,
    UserUpdated,
)

logger = get_logger(__name__)

IDENTITY_AUDIT_ACTIONS = {
    UserCreated: "user.created",
    UserUpdated: "user.updated",
    UserStatusChanged: "user.status_changed",
    UserLocked: "user.locked",
    UserDeleted: "user.deleted",
    SessionCreated: "session.created",
    SessionInvalidated: "session.invalidated",
    SessionRoleSwitched: "session.role_switched",
}


def register_identity_event_handlers(event_bus: InMemoryEventBus) -> None:
    """Subscribe the identity audit listener to every identity event."""
    AuditLogListener("identity", IDENTITY_AUDIT_ACTIONS).register(event_bus)
    logger.debug("Identity event handlers registered", events=len(IDENTITY_AUDIT_ACTIONS))
