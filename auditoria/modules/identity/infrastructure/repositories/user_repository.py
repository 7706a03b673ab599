"""
User Repository Implementation

SQLModel-based implementation of the user repository interface.
"""

from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import col, select

from auditoria.core.infrastructure.repository import LIKE_ESCAPE, SqlRepository, escape_like
from auditoria.modules.identity.domain.aggregates.user import User
from auditoria.modules.identity.domain.enums import UserStatus, UserType
from auditoria.modules.identity.domain.errors import UserNotFoundError
from auditoria.modules.identity.domain.value_objects import CI
from auditoria.modules.identity.infrastructure.models.user_model import UserModel


class SqlUserRepository(SqlRepository[UserModel]):
    """SQLModel implementation of the user repository."""

    model_type = UserModel

    def _live(self):
        return select(UserModel).where(col(UserModel.deleted_at).is_(None))

    async def find_by_id(self, user_id: UUID) -> User | None:
        model = await self._first(self._live().where(UserModel.id == user_id))
        return model.to_domain() if model else None

    async def find_by_id_or_fail(self, user_id: UUID) -> User:
        user = await self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def find_by_ids(self, user_ids: list[UUID]) -> dict[UUID, User]:
        if not user_ids:
            return {}
        models = await self._all(self._live().where(col(UserModel.id).in_(user_ids)))
        return {model.id: model.to_domain() for model in models}

    async def find_by_email(self, email: str) -> User | None:
        model = await self._first(self._live().where(UserModel.email == email.strip().lower()))
        return model.to_domain() if model else None

    async def find_by_username(self, username: str) -> User | None:
        model = await self._first(
            self._live().where(UserModel.username == username.strip().lower())
        )
        return model.to_domain() if model else None

    async def find_by_ci(self, ci: str) -> User | None:
        model = await self._first(self._live().where(UserModel.ci == CI.create(ci).value))
        return model.to_domain() if model else None

    async def find_many(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        status: UserStatus | None = None,
        user_type: UserType | None = None,
        search: str | None = None,
    ) -> tuple[list[User], int]:
        statement = self._live()
        if status is not None:
            statement = statement.where(UserModel.status == status.value)
        if user_type is not None:
            statement = statement.where(UserModel.user_type == user_type.value)
        if search:
            pattern = f"%{escape_like(search.strip().lower())}%"
            statement = statement.where(
                or_(
                    func.lower(UserModel.names).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(UserModel.last_names).like(pattern, escape=LIKE_ESCAPE),
                    col(UserModel.email).like(pattern, escape=LIKE_ESCAPE),
                    col(UserModel.username).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        statement = statement.order_by(col(UserModel.created_at).desc())

        models, total = await self._paginate(statement, page, page_size)
        return [model.to_domain() for model in models], total

    async def save(self, user: User) -> None:
        await self._upsert(UserModel.from_domain(user))

    async def delete(self, user: User) -> None:
        if not user.is_deleted:
            user.soft_delete()
        await self.save(user)

    async def exists_by_email(self, email: str, exclude_id: UUID | None = None) -> bool:
        return await self._exists(UserModel.email == email.strip().lower(), exclude_id)

    async def exists_by_username(self, username: str, exclude_id: UUID | None = None) -> bool:
        return await self._exists(UserModel.username == username.strip().lower(), exclude_id)

    async def exists_by_ci(self, ci: str, exclude_id: UUID | None = None) -> bool:
        return await self._exists(UserModel.ci == CI.create(ci).value, exclude_id)

    async def _exists(self, condition, exclude_id: UUID | None) -> bool:
        # Soft-deleted rows still hold the unique index, so they count.
        statement = select(UserModel.id).where(condition)
        if exclude_id is not None:
            statement = statement.where(UserModel.id != exclude_id)
        return await self._first(statement.limit(1)) is not None
