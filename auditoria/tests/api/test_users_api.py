"""
API tests for user, session and menu endpoints.

Tests cover:
- Creating internal users and the duplicate conflict
- Reading one's own account without users:read
- Switching, listing and closing sessions of the principal
- Menus for the principal and for a role
"""

import pytest

from auditoria.tests.api.helpers import bearer
from auditoria.tests.builders import UserBuilder, unique_ci


def internal_user_payload(**overrides) -> dict:
    payload = {
        "names": "Carla",
        "last_names": "Mendoza",
        "email": "carla.mendoza@auditoria.test",
        "username": "cmendoza",
        "password": "Secreta123",
        "ci": unique_ci(),
        "roles": ["auditor"],
        "department": "Auditoría Interna",
    }
    payload.update(overrides)
    return payload


@pytest.mark.api
class TestUsersApi:
    """Test suite for /api/v1/users."""

    async def test_create_internal_user(self, client, admin_headers):
        """Test an administrator creates a staff user."""
        # Act
        response = await client.post(
            "/api/v1/users/internal", json=internal_user_payload(), headers=admin_headers
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["type"] == "INTERNAL"
        assert body["roles"] == ["auditor"]
        assert body["internal_profile"]["department"] == "Auditoría Interna"
        assert "password" not in body

    async def test_duplicate_email_conflict(self, client, admin_headers):
        """Test reusing an email answers 409 with the duplicate code."""
        await client.post(
            "/api/v1/users/internal", json=internal_user_payload(), headers=admin_headers
        )

        response = await client.post(
            "/api/v1/users/internal",
            json=internal_user_payload(username="otro_usuario"),
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"] == "DUPLICATE_EMAIL"

    async def test_invalid_role_set(self, client, admin_headers):
        """Test mixing cliente with staff roles is a business rule error."""
        response = await client.post(
            "/api/v1/users/internal",
            json=internal_user_payload(roles=["auditor", "cliente"]),
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "EXCLUSIVE_ROLE_VIOLATION"

    async def test_user_reads_own_account(self, client, seed_user, authorize):
        """Test an auditor can read itself but not others."""
        auditor = await seed_user()
        other = await seed_user()
        headers = await authorize(auditor)

        own = await client.get(f"/api/v1/users/{auditor.id}", headers=headers)
        foreign = await client.get(f"/api/v1/users/{other.id}", headers=headers)

        assert own.status_code == 200
        assert own.json()["username"] == auditor.username.value
        assert foreign.status_code == 403

    async def test_list_users(self, client, admin_headers, seed_user):
        """Test listing returns a page with totals."""
        await seed_user()

        response = await client.get("/api/v1/users?page_size=1", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert len(body["items"]) == 1

    async def test_deactivate_user(self, client, admin_headers, seed_user):
        """Test deactivation through the API."""
        user = await seed_user()

        response = await client.post(
            f"/api/v1/users/{user.id}/deactivate", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "INACTIVE"

    async def test_upload_avatar(self, client, seed_user, authorize):
        """Test a user uploads its own avatar as multipart form data."""
        user = await seed_user()
        png = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8

        response = await client.put(
            f"/api/v1/users/{user.id}/avatar",
            files={"file": ("avatar.png", png, "image/png")},
            headers=await authorize(user),
        )

        assert response.status_code == 200
        assert response.json()["image"].startswith(f"/uploads/avatars/{user.id}_")


@pytest.mark.api
class TestSessionsApi:
    """Test suite for /api/v1/sessions."""

    async def test_session_lifecycle(self, client, seed_user, open_session):
        """Test switching, listing and closing sessions of the principal."""
        user = await seed_user(UserBuilder().with_roles("gerente", "auditor"))
        current = await open_session(user)
        other = await open_session(user)
        headers = bearer(current.access_token)

        switched = await client.post(
            f"/api/v1/sessions/{current.id}/switch-role",
            json={"role": "auditor"},
            headers=headers,
        )
        listed = await client.get("/api/v1/sessions/me", headers=headers)
        closed = await client.delete(f"/api/v1/sessions/{other.id}", headers=headers)
        after = await client.get("/api/v1/sessions/me", headers=headers)

        assert current.current_role == "gerente"
        assert switched.json()["current_role"] == "auditor"
        assert {s["id"]: s["is_current"] for s in listed.json()} == {
            str(current.id): True,
            str(other.id): False,
        }
        assert closed.status_code == 204
        assert [s["id"] for s in after.json()] == [str(current.id)]

    async def test_switched_role_applies_to_next_request(
        self, client, seed_user, open_session
    ):
        """Test permissions follow the role stored on the session."""
        user = await seed_user(UserBuilder().with_roles("auditor", "administrador"))
        tokens = await open_session(user)
        headers = bearer(tokens.access_token)

        before = await client.get("/api/v1/users", headers=headers)
        await client.post(
            f"/api/v1/sessions/{tokens.id}/switch-role",
            json={"role": "administrador"},
            headers=headers,
        )
        after = await client.get("/api/v1/users", headers=headers)

        assert before.status_code == 403
        assert after.status_code == 200

    async def test_other_users_session(self, client, seed_user, open_session, authorize):
        """Test closing someone else's session is forbidden."""
        owner = await seed_user()
        intruder = await seed_user()
        owned = await open_session(owner)

        response = await client.delete(
            f"/api/v1/sessions/{owned.id}", headers=await authorize(intruder)
        )

        assert response.status_code == 403
        assert response.json()["error"] == "SESSION_FORBIDDEN"


@pytest.mark.api
class TestMenusApi:
    """Test suite for menu and role endpoints."""

    async def test_my_menus_from_synced_catalog(self, client, seed_user, authorize):
        """Test the catalog seeded at startup drives the principal's menus."""
        auditor = await seed_user()

        response = await client.get("/api/v1/menus/me", headers=await authorize(auditor))

        assert response.status_code == 200
        assert [menu["name"] for menu in response.json()][:2] == ["Dashboard", "Auditorías"]

    async def test_role_menus(self, client, admin_headers):
        """Test menus for a role come from the static configuration."""
        response = await client.get("/api/v1/menus/roles/cliente", headers=admin_headers)

        assert response.status_code == 200
        names = [menu["name"] for menu in response.json()]
        assert "Usuarios" not in names
        assert "Dashboard" in names

    async def test_list_roles(self, client, admin_headers):
        """Test the four roles are listed."""
        response = await client.get("/api/v1/roles", headers=admin_headers)

        assert response.status_code == 200
        assert len(response.json()) == 4
