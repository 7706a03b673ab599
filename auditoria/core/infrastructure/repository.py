"""SQLModel repository base.

Repositories translate between aggregates and table models and never own the
transaction: writes are flushed so constraint violations surface inside the
unit of work, which decides whether to commit.

Architecture:
- SqlRepository: session holder with shared query helpers
- ``_upsert``: insert-or-update of a table model by primary key
- ``_paginate``: page of rows plus total row count for a select
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.sql.expression import SelectOfScalar

from auditoria.core.errors import InfrastructureError
from auditoria.core.logging import get_logger

logger = get_logger(__name__)

TModel = TypeVar("TModel", bound=SQLModel)

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``term`` matches literally; use with ``escape=LIKE_ESCAPE``."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class RepositoryError(InfrastructureError):
    """Base exception for repository-specific errors."""

    default_code = "REPOSITORY_ERROR"


class SqlRepository(Generic[TModel]):
    """
    Base class for SQLModel repositories bound to one unit-of-work session.

    Usage Example:
        class SqlSessionRepository(SqlRepository[SessionModel]):
            model_type = SessionModel

            async def find_by_refresh_token(self, token: str) -> Session | None:
                model = await self._first(
                    select(SessionModel).where(SessionModel.refresh_token == token)
                )
                return model.to_domain() if model else None
    """

    model_type: type[TModel]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get(self, model_id: Any) -> TModel | None:
        return await self.session.get(self.model_type, model_id)

    async def _first(self, statement: SelectOfScalar) -> Any:
        result = await self.session.exec(statement)
        return result.first()

    async def _all(self, statement: SelectOfScalar) -> list[Any]:
        result = await self.session.exec(statement)
        return list(result.all())

    async def _count(self, statement: SelectOfScalar) -> int:
        count_statement = select(func.count()).select_from(statement.order_by(None).subquery())
        result = await self.session.exec(count_statement)
        return int(result.one())

    async def _paginate(
        self, statement: SelectOfScalar, page: int, page_size: int
    ) -> tuple[list[Any], int]:
        page = max(page, 1)
        total = await self._count(statement)
        rows = await self._all(statement.offset((page - 1) * page_size).limit(page_size))
        return rows, total

    async def _upsert(self, model: TModel) -> TModel:
        """Insert ``model`` or copy its columns onto the stored row, then flush."""
        primary_key = model.id
        existing = await self._get(primary_key)
        if existing is None:
            self.session.add(model)
            target = model
        else:
            for key, value in model.model_dump(exclude={"id"}).items():
                setattr(existing, key, value)
            self.session.add(existing)
            target = existing

        await self._flush()
        return target

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.exception(
                "Repository flush failed", model=self.model_type.__name__, error=str(e)
            )
            raise RepositoryError(f"Failed to persist {self.model_type.__name__}", cause=e) from e


__all__ = ["LIKE_ESCAPE", "RepositoryError", "SqlRepository", "TModel", "escape_like"]
