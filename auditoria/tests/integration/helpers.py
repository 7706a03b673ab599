"""Helpers shared by the integration tests."""

from auditoria.core.context import RequestContext
from auditoria.modules.identity.domain.aggregates.user import User


def context_for(user: User, role: str | None = None) -> RequestContext:
    """Request context of ``user`` acting with ``role`` (its primary role by default)."""
    return RequestContext(
        user_id=user.id,
        role=role or user.primary_role.value,
        ip_address="10.0.0.9",
        user_agent="pytest",
    )
