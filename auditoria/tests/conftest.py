"""
Global pytest configuration and fixtures for all tests.

Provides:
- Settings pointing at a throwaway SQLite file and upload directory
- Engine, session factory and per-module unit of work factories
- A recording event bus
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from uuid import uuid4

import pytest
from sqlalchemy import func
from sqlmodel import select

from auditoria.core.config import (
    DatabaseConfig,
    Environment,
    LogConfig,
    LogFormat,
    SecurityConfig,
    Settings,
    StorageConfig,
)
from auditoria.core.context import RequestContext
from auditoria.core.database import create_all, create_engine_from_config, create_session_factory
from auditoria.core.domain.base import DomainEvent
from auditoria.core.events import InMemoryEventBus
from auditoria.core.logging import configure_logging
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.infrastructure.security.password_hasher import (
    BcryptPasswordHasher,
)
from auditoria.modules.identity.infrastructure.security.token_service import TokenService
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWork
from auditoria.modules.notifications.infrastructure.unit_of_work import NotificationsUnitOfWork
from auditoria.modules.organizations.infrastructure.unit_of_work import OrganizationsUnitOfWork
from auditoria.shared.file_storage import LocalFileStorage


def pytest_configure(config):
    configure_logging(LogConfig(level="WARNING", format=LogFormat.CONSOLE), force=True)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated to the test's temporary directory."""
    return Settings(
        environment=Environment.TESTING,
        database=DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"),
        security=SecurityConfig(bcrypt_rounds=4),
        storage=StorageConfig(upload_dir=str(tmp_path / "uploads")),
        logging=LogConfig(level="WARNING", format=LogFormat.CONSOLE),
    )


@pytest.fixture
async def engine(settings: Settings) -> AsyncGenerator:
    engine = create_engine_from_config(settings.database)
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


class RecordingEventBus(InMemoryEventBus):
    """In-memory bus that also keeps every published event."""

    def __init__(self) -> None:
        super().__init__()
        self.published: list[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        self.published.append(event)
        await super().publish(event)

    def of_type(self, event_type: type[DomainEvent]) -> list[DomainEvent]:
        return [event for event in self.published if isinstance(event, event_type)]


@pytest.fixture
def event_bus() -> RecordingEventBus:
    return RecordingEventBus()


@pytest.fixture
def identity_uow_factory(session_factory, event_bus):
    return lambda: IdentityUnitOfWork(session_factory, event_bus)


@pytest.fixture
def organizations_uow_factory(session_factory, event_bus):
    return lambda: OrganizationsUnitOfWork(session_factory, event_bus)


@pytest.fixture
def notifications_uow_factory(session_factory, event_bus):
    return lambda: NotificationsUnitOfWork(session_factory, event_bus)


@pytest.fixture
def password_hasher(settings: Settings) -> BcryptPasswordHasher:
    return BcryptPasswordHasher.from_config(settings.security)


@pytest.fixture
def token_service(settings: Settings) -> TokenService:
    return TokenService(settings.security)


@pytest.fixture
def file_storage(settings: Settings) -> LocalFileStorage:
    return LocalFileStorage(settings.storage)


@pytest.fixture
def admin_context() -> RequestContext:
    return RequestContext(
        user_id=uuid4(),
        role=Role.ADMINISTRADOR.value,
        ip_address="10.0.0.1",
        user_agent="pytest",
    )


@pytest.fixture
def count_rows(session_factory):
    """Count the rows of a table model, deleted ones included."""

    async def count(model) -> int:
        async with session_factory() as session:
            result = await session.exec(select(func.count()).select_from(model))
            return int(result.one())

    return count
