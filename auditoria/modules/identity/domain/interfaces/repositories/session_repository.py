"""Session Repository Interface"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from auditoria.modules.identity.domain.aggregates.session import Session


class ISessionRepository(Protocol):
    """Repository interface for login sessions."""

    async def find_by_id(self, session_id: UUID) -> "Session | None":
        ...

    async def find_by_id_or_fail(self, session_id: UUID) -> "Session":
        """Raises SessionNotFoundError when missing."""
        ...

    async def find_by_refresh_token(self, refresh_token: str) -> "Session | None":
        ...

    async def find_active_by_user(self, user_id: UUID) -> list["Session"]:
        """Active, unexpired sessions of a user, most recently used first.

        Args:
            user_id: Owner of the sessions

        Returns:
            List of valid sessions
        """
        ...

    async def save(self, session: "Session") -> None:
        ...

    async def delete(self, session: "Session") -> None:
        ...
