"""
API tests for application wiring.

Tests cover:
- Health endpoints
- Request id propagation
- Bearer token resolution against the identity store and permission checks
- The error envelope for domain and request validation errors
"""

from dataclasses import replace
from uuid import uuid4

import pytest

from auditoria.modules.identity.domain.policies.login_policy import LoginPolicy
from auditoria.modules.identity.infrastructure.security import TokenService
from auditoria.presentation.dependencies import REQUEST_ID_HEADER
from auditoria.tests.api.helpers import bearer
from auditoria.tests.builders import UserBuilder, unique_ci


@pytest.mark.api
class TestHealth:
    """Test suite for health endpoints."""

    async def test_health(self, client, settings):
        """Test the liveness probe reports version and environment."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "version": settings.app_version,
            "environment": "testing",
        }

    async def test_database_health(self, client):
        """Test the database probe reaches SQLite."""
        response = await client.get("/health/db")

        assert response.status_code == 200
        assert response.json()["component"] == "database"


@pytest.mark.api
class TestRequestId:
    """Test suite for request id handling."""

    async def test_echoes_incoming_request_id(self, client):
        """Test a caller supplied request id is returned unchanged."""
        response = await client.get("/health", headers={REQUEST_ID_HEADER: "req-123"})

        assert response.headers[REQUEST_ID_HEADER] == "req-123"

    async def test_generates_request_id(self, client):
        """Test a request id is generated when missing."""
        response = await client.get("/health")

        assert len(response.headers[REQUEST_ID_HEADER]) == 36


@pytest.mark.api
class TestAuthentication:
    """Test suite for bearer token resolution and permissions."""

    async def update_user(self, app, user_id, change) -> None:
        async with app.state.container.identity_uow() as uow:
            user = await uow.users.find_by_id_or_fail(user_id)
            change(user)
            await uow.users.save(user)

    async def test_missing_principal(self, client):
        """Test protected endpoints answer 401 without a bearer token."""
        response = await client.get("/api/v1/users")

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"

    @pytest.mark.parametrize("token", ["nope", "a.b.c"])
    async def test_garbage_token(self, client, token):
        """Test a token that is not a signed JWT is rejected."""
        response = await client.get("/api/v1/users", headers=bearer(token))

        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_TOKEN"

    async def test_role_without_permission(self, client, seed_user, authorize):
        """Test an auditor cannot list users."""
        auditor = await seed_user()

        response = await client.get("/api/v1/users", headers=await authorize(auditor))

        assert response.status_code == 403
        body = response.json()
        assert body["error"] == "PERMISSION_DENIED"
        assert body["details"]["required_permissions"] == ["users:read"]

    async def test_role_claim_in_token_is_not_trusted(self, app, client, seed_user, open_session):
        """Test a token claiming administrador on an auditor session cannot create users."""
        auditor = await seed_user()
        session = await open_session(auditor)
        forged = app.state.container.token_service().create_access_token(
            auditor.id, session.id, "administrador"
        )

        response = await client.post(
            "/api/v1/users/internal",
            json={
                "names": "Eva",
                "last_names": "Rojas",
                "email": "eva.rojas@auditoria.test",
                "username": "erojas",
                "password": "Secreta123",
                "ci": unique_ci(),
                "roles": ["administrador"],
            },
            headers=bearer(forged),
        )

        assert response.status_code == 403
        assert response.json()["error"] == "PERMISSION_DENIED"

    async def test_unknown_user_and_session(self, app, client):
        """Test a validly signed token for a user that does not exist is rejected."""
        token = app.state.container.token_service().create_access_token(
            uuid4(), uuid4(), "administrador"
        )

        response = await client.get("/api/v1/users", headers=bearer(token))

        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_SESSION"

    async def test_session_of_another_user(self, app, client, seed_user, open_session):
        """Test a token pairing one user with another user's session is rejected."""
        owner = await seed_user(UserBuilder().with_roles("administrador"))
        intruder = await seed_user()
        session = await open_session(owner)
        token = app.state.container.token_service().create_access_token(
            intruder.id, session.id, "administrador"
        )

        response = await client.get("/api/v1/users", headers=bearer(token))

        assert response.status_code == 401

    async def test_token_signed_with_other_secret(self, client, settings, seed_user, open_session):
        """Test a token signed with a different secret is rejected."""
        admin = await seed_user(UserBuilder().with_roles("administrador"))
        session = await open_session(admin)
        other = TokenService(
            replace(settings.security, access_token_secret="x" * 40, refresh_token_secret="y" * 40)
        )

        response = await client.get(
            "/api/v1/users",
            headers=bearer(other.create_access_token(admin.id, session.id, "administrador")),
        )

        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_TOKEN"

    async def test_deleted_user(self, app, client, admin, authorize):
        """Test a soft deleted user's token stops working."""
        headers = await authorize(admin)
        await self.update_user(app, admin.id, lambda user: user.mark_as_deleted())

        response = await client.get("/api/v1/users", headers=headers)

        assert response.status_code == 401

    async def test_inactive_user(self, app, client, admin, authorize):
        """Test a deactivated user's token is refused."""
        headers = await authorize(admin)
        await self.update_user(app, admin.id, lambda user: user.deactivate())

        response = await client.get("/api/v1/users", headers=headers)

        assert response.status_code == 403
        assert response.json()["error"] == "USER_INACTIVE"

    async def test_locked_user(self, app, client, admin, authorize):
        """Test a locked user's token is refused until the lock is cleared."""
        headers = await authorize(admin)
        policy = LoginPolicy.default()

        def lock(user):
            for _ in range(policy.max_attempts):
                user.increment_failed_attempts(policy)

        await self.update_user(app, admin.id, lock)

        response = await client.get("/api/v1/users", headers=headers)

        assert response.status_code == 403
        assert response.json()["error"] == "USER_LOCKED"

    async def test_closed_session(self, client, admin, authorize):
        """Test a token of a logged out session is rejected."""
        headers = await authorize(admin)

        logout = await client.post("/api/v1/auth/logout", headers=headers)
        response = await client.get("/api/v1/users", headers=headers)

        assert logout.status_code == 204
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_SESSION"

    async def test_revoked_role(self, app, client, seed_user, authorize):
        """Test removing the session's role from the user revokes its permissions."""
        user = await seed_user(UserBuilder().with_roles("administrador", "auditor"))
        headers = await authorize(user, "administrador")
        await self.update_user(app, user.id, lambda stored: stored.update(roles=["auditor"]))

        response = await client.get("/api/v1/users", headers=headers)

        assert response.status_code == 403
        assert response.json()["error"] == "ROLE_NOT_ASSIGNED"


@pytest.mark.api
class TestErrorEnvelope:
    """Test suite for error responses."""

    async def test_not_found(self, client, admin_headers):
        """Test domain errors keep their code and status."""
        response = await client.get(
            "/api/v1/organizations/00000000-0000-0000-0000-000000000000",
            headers=admin_headers,
        )

        assert response.status_code == 404
        assert response.json()["error"] == "ORGANIZATION_NOT_FOUND"

    async def test_request_validation(self, client, admin_headers):
        """Test body validation failures use the common envelope."""
        response = await client.post(
            "/api/v1/users/internal", json={"names": "Ana"}, headers=admin_headers
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"]["errors"]
