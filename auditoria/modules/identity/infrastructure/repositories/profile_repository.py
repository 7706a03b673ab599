"""
Profile Repository Implementations

Internal and external profiles, both looked up by owning user. Listings only
return profiles whose user is not deleted.
"""

from uuid import UUID

from sqlalchemy import String, cast, func
from sqlmodel import col, select

from auditoria.core.infrastructure.repository import SqlRepository
from auditoria.modules.identity.domain.aggregates.external_profile import ExternalProfile
from auditoria.modules.identity.domain.aggregates.internal_profile import InternalProfile
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.infrastructure.models.profile_model import (
    ExternalProfileModel,
    InternalProfileModel,
)
from auditoria.modules.identity.infrastructure.models.user_model import UserModel


class SqlInternalProfileRepository(SqlRepository[InternalProfileModel]):
    model_type = InternalProfileModel

    async def find_by_user_id(self, user_id: UUID) -> InternalProfile | None:
        model = await self._first(
            select(InternalProfileModel).where(
                InternalProfileModel.user_id == user_id,
                col(InternalProfileModel.deleted_at).is_(None),
            )
        )
        return model.to_domain() if model else None

    async def find_by_employee_code(self, employee_code: str) -> InternalProfile | None:
        model = await self._first(
            select(InternalProfileModel).where(
                InternalProfileModel.employee_code == employee_code
            )
        )
        return model.to_domain() if model else None

    async def find_many(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        role: Role | None = None,
        department: str | None = None,
    ) -> tuple[list[InternalProfile], int]:
        statement = (
            select(InternalProfileModel)
            .join(UserModel, col(UserModel.id) == col(InternalProfileModel.user_id))
            .where(
                col(InternalProfileModel.deleted_at).is_(None),
                col(UserModel.deleted_at).is_(None),
            )
        )
        if role is not None:
            # roles is a JSON array of enum values, none of which hold LIKE wildcards
            statement = statement.where(
                cast(InternalProfileModel.roles, String).like(f'%"{role.value}"%')
            )
        if department:
            statement = statement.where(
                func.lower(InternalProfileModel.department) == department.strip().lower()
            )
        statement = statement.order_by(col(InternalProfileModel.created_at).desc())

        models, total = await self._paginate(statement, page, page_size)
        return [model.to_domain() for model in models], total

    async def save(self, profile: InternalProfile) -> None:
        await self._upsert(InternalProfileModel.from_domain(profile))

    async def delete(self, profile: InternalProfile) -> None:
        profile.soft_delete()
        await self.save(profile)


class SqlExternalProfileRepository(SqlRepository[ExternalProfileModel]):
    model_type = ExternalProfileModel

    async def find_by_user_id(self, user_id: UUID) -> ExternalProfile | None:
        model = await self._first(
            select(ExternalProfileModel).where(
                ExternalProfileModel.user_id == user_id,
                col(ExternalProfileModel.deleted_at).is_(None),
            )
        )
        return model.to_domain() if model else None

    async def find_by_organization(self, organization_id: UUID) -> list[ExternalProfile]:
        statement = (
            select(ExternalProfileModel)
            .where(
                ExternalProfileModel.organization_id == organization_id,
                col(ExternalProfileModel.deleted_at).is_(None),
            )
            .order_by(col(ExternalProfileModel.joined_at))
        )
        return [model.to_domain() for model in await self._all(statement)]

    async def find_many(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        organization_id: UUID | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[ExternalProfile], int]:
        statement = (
            select(ExternalProfileModel)
            .join(UserModel, col(UserModel.id) == col(ExternalProfileModel.user_id))
            .where(
                col(ExternalProfileModel.deleted_at).is_(None),
                col(UserModel.deleted_at).is_(None),
            )
        )
        if organization_id is not None:
            statement = statement.where(ExternalProfileModel.organization_id == organization_id)
        if is_active is not None:
            statement = statement.where(ExternalProfileModel.is_active == is_active)
        statement = statement.order_by(col(ExternalProfileModel.joined_at).desc())

        models, total = await self._paginate(statement, page, page_size)
        return [model.to_domain() for model in models], total

    async def save(self, profile: ExternalProfile) -> None:
        await self._upsert(ExternalProfileModel.from_domain(profile))

    async def delete(self, profile: ExternalProfile) -> None:
        profile.soft_delete()
        await self.save(profile)
