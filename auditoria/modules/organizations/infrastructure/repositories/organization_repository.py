"""
Organization Repository Implementation

SQLModel-based implementation of the organization repository interface.
"""

from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import col, select

from auditoria.core.infrastructure.repository import LIKE_ESCAPE, SqlRepository, escape_like
from auditoria.modules.organizations.domain.aggregates.organization import Organization
from auditoria.modules.organizations.domain.errors import OrganizationNotFoundError
from auditoria.modules.organizations.infrastructure.models.organization_model import (
    OrganizationModel,
)


class SqlOrganizationRepository(SqlRepository[OrganizationModel]):
    """SQLModel implementation of the organization repository."""

    model_type = OrganizationModel

    def _live(self):
        return select(OrganizationModel).where(col(OrganizationModel.deleted_at).is_(None))

    async def find_by_id(self, organization_id: UUID) -> Organization | None:
        model = await self._first(self._live().where(OrganizationModel.id == organization_id))
        return model.to_domain() if model else None

    async def find_by_id_or_fail(self, organization_id: UUID) -> Organization:
        organization = await self.find_by_id(organization_id)
        if organization is None:
            raise OrganizationNotFoundError(organization_id)
        return organization

    async def find_by_name(self, name: str) -> Organization | None:
        model = await self._first(
            self._live().where(func.lower(OrganizationModel.name) == name.strip().lower())
        )
        return model.to_domain() if model else None

    async def find_by_tax_id(self, tax_id: str) -> Organization | None:
        model = await self._first(self._live().where(OrganizationModel.tax_id == tax_id.strip()))
        return model.to_domain() if model else None

    async def find_many(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        is_active: bool | None = None,
        search: str | None = None,
    ) -> tuple[list[Organization], int]:
        statement = self._live()
        if is_active is not None:
            statement = statement.where(col(OrganizationModel.is_active).is_(is_active))
        if search:
            pattern = f"%{escape_like(search.strip().lower())}%"
            statement = statement.where(
                or_(
                    func.lower(OrganizationModel.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(OrganizationModel.tax_id).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        statement = statement.order_by(col(OrganizationModel.name))

        models, total = await self._paginate(statement, page, page_size)
        return [model.to_domain() for model in models], total

    async def save(self, organization: Organization) -> None:
        await self._upsert(OrganizationModel.from_domain(organization))

    async def delete(self, organization: Organization) -> None:
        if not organization.is_deleted:
            organization.soft_delete()
        await self.save(organization)

    async def exists_by_name(self, name: str, exclude_id: UUID | None = None) -> bool:
        statement = select(OrganizationModel.id).where(
            func.lower(OrganizationModel.name) == name.strip().lower()
        )
        if exclude_id is not None:
            statement = statement.where(OrganizationModel.id != exclude_id)
        return await self._first(statement.limit(1)) is not None

    async def exists_by_tax_id(self, tax_id: str, exclude_id: UUID | None = None) -> bool:
        statement = select(OrganizationModel.id).where(OrganizationModel.tax_id == tax_id.strip())
        if exclude_id is not None:
            statement = statement.where(OrganizationModel.id != exclude_id)
        return await self._first(statement.limit(1)) is not None
