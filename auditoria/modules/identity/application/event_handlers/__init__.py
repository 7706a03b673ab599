"""Identity event handlers."""

from auditoria.modules.identity.application.event_handlers.audit_event_handlers import (
    IDENTITY_AUDIT_ACTIONS,
    register_identity_event_handlers,
)

__all__ = ["IDENTITY_AUDIT_ACTIONS", "register_identity_event_handlers"]
