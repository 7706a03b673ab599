"""Profile Repository Interfaces

One profile row per user, keyed by ``user_id``.
"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from auditoria.modules.identity.domain.enums import Role

if TYPE_CHECKING:
    from auditoria.modules.identity.domain.aggregates.external_profile import ExternalProfile
    from auditoria.modules.identity.domain.aggregates.internal_profile import InternalProfile


class IInternalProfileRepository(Protocol):
    async def find_by_user_id(self, user_id: UUID) -> "InternalProfile | None":
        ...

    async def find_by_employee_code(self, employee_code: str) -> "InternalProfile | None":
        ...

    async def find_many(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        role: Role | None = None,
        department: str | None = None,
    ) -> tuple[list["InternalProfile"], int]:
        """Page of live profiles of live users, filtered by held role and department."""
        ...

    async def save(self, profile: "InternalProfile") -> None:
        ...

    async def delete(self, profile: "InternalProfile") -> None:
        ...


class IExternalProfileRepository(Protocol):
    async def find_by_user_id(self, user_id: UUID) -> "ExternalProfile | None":
        ...

    async def find_by_organization(self, organization_id: UUID) -> list["ExternalProfile"]:
        """Live profiles attached to an organization."""
        ...

    async def find_many(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        organization_id: UUID | None = None,
        is_active: bool | None = None,
    ) -> tuple[list["ExternalProfile"], int]:
        """Page of live profiles of live users, newest membership first."""
        ...

    async def save(self, profile: "ExternalProfile") -> None:
        ...

    async def delete(self, profile: "ExternalProfile") -> None:
        ...
