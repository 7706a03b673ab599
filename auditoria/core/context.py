"""Request context carried explicitly through commands and queries."""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4


@dataclass(frozen=True)
class RequestContext:
    """
    Who is acting and from where.

    Built once per HTTP request by the presentation layer and passed to every
    command/query, so handlers never read ambient globals.
    """

    user_id: UUID | None = None
    role: str | None = None
    request_id: str = field(default_factory=lambda: str(uuid4()))
    ip_address: str | None = None
    user_agent: str | None = None
    session_id: UUID | None = None

    @classmethod
    def system(cls) -> "RequestContext":
        """Context for work not triggered by a user (seeding, maintenance)."""
        return cls(request_id=f"system-{uuid4()}")

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def as_log_context(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "user_id": str(self.user_id) if self.user_id else None,
            "role": self.role,
            "session_id": str(self.session_id) if self.session_id else None,
            "client_ip": self.ip_address,
        }
