"""Organization Repository Interface"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from auditoria.modules.organizations.domain.aggregates.organization import Organization


class IOrganizationRepository(Protocol):
    """Repository interface for client organizations. Soft-deleted rows are hidden."""

    async def find_by_id(self, organization_id: UUID) -> "Organization | None":
        ...

    async def find_by_id_or_fail(self, organization_id: UUID) -> "Organization":
        """Raises OrganizationNotFoundError when missing."""
        ...

    async def find_by_name(self, name: str) -> "Organization | None":
        """Case-insensitive lookup by name."""
        ...

    async def find_by_tax_id(self, tax_id: str) -> "Organization | None":
        ...

    async def find_many(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        is_active: bool | None = None,
        search: str | None = None,
    ) -> tuple[list["Organization"], int]:
        """Page through organizations ordered by name.

        Returns:
            The organizations of the page and the total count
        """
        ...

    async def save(self, organization: "Organization") -> None:
        ...

    async def delete(self, organization: "Organization") -> None:
        ...

    async def exists_by_name(self, name: str, exclude_id: UUID | None = None) -> bool:
        ...

    async def exists_by_tax_id(self, tax_id: str, exclude_id: UUID | None = None) -> bool:
        ...
