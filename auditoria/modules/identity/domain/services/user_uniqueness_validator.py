"""
User uniqueness checks.

Fast-path validation of email, username and CI against the repository
before any write. The database unique constraints stay authoritative: a
concurrent insert that slips past these checks is translated into the same
duplicate errors by the identity unit of work.
"""

from uuid import UUID

from auditoria.modules.identity.domain.errors import (
    DuplicateCiError,
    DuplicateEmailError,
    DuplicateUsernameError,
)
from auditoria.modules.identity.domain.interfaces.repositories import IUserRepository


class UserUniquenessValidator:
    def __init__(self, users: IUserRepository):
        self._users = users

    async def validate_for_create(self, email: str, username: str, ci: str) -> None:
        """Raise the first duplicate found, checked in email, username, CI order."""
        await self._check(email, username, ci, exclude_id=None)

    async def validate_for_update(
        self,
        user_id: UUID,
        email: str | None = None,
        username: str | None = None,
        ci: str | None = None,
    ) -> None:
        """Same as ``validate_for_create`` but ignores ``user_id``; None skips a field."""
        await self._check(email, username, ci, exclude_id=user_id)

    async def _check(
        self,
        email: str | None,
        username: str | None,
        ci: str | None,
        exclude_id: UUID | None,
    ) -> None:
        if email is not None and await self._users.exists_by_email(email, exclude_id):
            raise DuplicateEmailError(email)
        if username is not None and await self._users.exists_by_username(username, exclude_id):
            raise DuplicateUsernameError(username)
        if ci is not None and await self._users.exists_by_ci(ci, exclude_id):
            raise DuplicateCiError(ci)
