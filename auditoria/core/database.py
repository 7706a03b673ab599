"""Async database engine and session factory.

Table models are SQLModel classes registered on ``SQLModel.metadata``; the
model modules must be imported before ``create_all`` runs, which
``import_models`` takes care of.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from auditoria.core.config import DatabaseConfig
from auditoria.core.logging import get_logger

logger = get_logger(__name__)

SessionFactory = async_sessionmaker[AsyncSession]


def import_models() -> None:
    """Import every table model so its metadata is registered."""
    from auditoria.modules.identity.infrastructure import models as _identity  # noqa: F401
    from auditoria.modules.notifications.infrastructure import models as _notifications  # noqa: F401
    from auditoria.modules.organizations.infrastructure import models as _organizations  # noqa: F401


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_config(config: DatabaseConfig, **kwargs) -> AsyncEngine:
    """Create the async engine described by ``config``."""
    engine = create_async_engine(config.url, echo=config.echo, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    logger.info("Database engine created", dialect=engine.dialect.name)
    return engine


def create_session_factory(engine: AsyncEngine) -> SessionFactory:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create every table that does not exist yet."""
    import_models()
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def drop_all(engine: AsyncEngine) -> None:
    import_models()
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)


__all__ = [
    "SessionFactory",
    "create_all",
    "create_engine_from_config",
    "create_session_factory",
    "drop_all",
    "import_models",
]
