"""
API test fixtures.

The application is built from the test settings and driven in-process through
httpx; the lifespan runs so tables and the authorization catalog exist.
Principals authenticate with a bearer token from a real session.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from auditoria.main import create_app
from auditoria.modules.identity.application.commands.session import (
    CreateSessionCommand,
    CreateSessionCommandHandler,
)
from auditoria.modules.identity.application.dtos import SessionTokensResponse
from auditoria.modules.identity.domain.aggregates.user import User
from auditoria.tests.api.helpers import bearer
from auditoria.tests.builders import UserBuilder


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def seed_user(app):
    """Persist a user through the application's own unit of work."""

    async def seed(builder: UserBuilder | None = None) -> User:
        user = (builder or UserBuilder()).build()
        async with app.state.container.identity_uow() as uow:
            await uow.users.save(user)
        return user

    return seed


@pytest.fixture
def open_session(app):
    """Open a session for ``user`` acting as ``role`` (its primary role by default)."""

    async def open_(user: User, role: str | None = None) -> SessionTokensResponse:
        container = app.state.container
        handler = CreateSessionCommandHandler(container.identity_uow, container.token_service())
        return await handler(CreateSessionCommand(user.id, role=role))

    return open_


@pytest.fixture
def authorize(open_session):
    """Bearer headers of a fresh session for ``user``."""

    async def authorize_(user: User, role: str | None = None) -> dict[str, str]:
        tokens = await open_session(user, role)
        return bearer(tokens.access_token)

    return authorize_


@pytest.fixture
async def admin(seed_user) -> User:
    return await seed_user(UserBuilder().with_roles("administrador"))


@pytest.fixture
async def admin_headers(admin, authorize) -> dict[str, str]:
    return await authorize(admin)
