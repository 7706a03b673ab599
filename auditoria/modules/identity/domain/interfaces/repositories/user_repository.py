"""User Repository Interface

Domain contract for user data access that must be implemented by the infrastructure layer.
"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from auditoria.modules.identity.domain.enums import UserStatus, UserType

if TYPE_CHECKING:
    from auditoria.modules.identity.domain.aggregates.user import User


class IUserRepository(Protocol):
    """Repository interface for users. Soft-deleted users are never returned."""

    async def find_by_id(self, user_id: UUID) -> "User | None":
        """Find user by ID.

        Args:
            user_id: User identifier

        Returns:
            User if found, None otherwise
        """
        ...

    async def find_by_id_or_fail(self, user_id: UUID) -> "User":
        """Find user by ID.

        Raises:
            UserNotFoundError: If no live user has this ID
        """
        ...

    async def find_by_ids(self, user_ids: list[UUID]) -> dict[UUID, "User"]:
        """Live users among ``user_ids``, keyed by id; unknown ids are left out."""
        ...

    async def find_by_email(self, email: str) -> "User | None":
        ...

    async def find_by_username(self, username: str) -> "User | None":
        ...

    async def find_by_ci(self, ci: str) -> "User | None":
        ...

    async def find_many(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        status: UserStatus | None = None,
        user_type: UserType | None = None,
        search: str | None = None,
    ) -> tuple[list["User"], int]:
        """Page through users.

        Args:
            page: 1-based page number
            page_size: Items per page
            status: Optional status filter
            user_type: Optional type filter
            search: Case-insensitive match on names, last names, email or username

        Returns:
            The users of the page and the total count of matching users
        """
        ...

    async def save(self, user: "User") -> None:
        """Insert or update; flushes but never commits."""
        ...

    async def delete(self, user: "User") -> None:
        """Persist a soft delete."""
        ...

    async def exists_by_email(self, email: str, exclude_id: UUID | None = None) -> bool:
        """Check whether another user holds this email.

        Args:
            email: Normalized email
            exclude_id: User to ignore, used on updates
        """
        ...

    async def exists_by_username(self, username: str, exclude_id: UUID | None = None) -> bool:
        ...

    async def exists_by_ci(self, ci: str, exclude_id: UUID | None = None) -> bool:
        ...
