"""
Integration tests for the authentication flow.

Tests cover:
- Login by username or email and unknown identifiers
- Lockout after repeated wrong passwords and retry once the lock expires
- Refresh token rotation and reuse of a rotated token
- Refresh closing the session of a user that can no longer log in
- Logout of the current session and of every session
- Resolving the principal from an access token
"""

from dataclasses import replace
from datetime import timedelta

import pytest

from auditoria.core.context import RequestContext
from auditoria.core.domain.base import utc_now
from auditoria.core.errors import UnauthorizedError
from auditoria.modules.identity.application.commands.auth import (
    LoginCommand,
    LoginCommandHandler,
    LogoutAllCommand,
    LogoutAllCommandHandler,
    LogoutCommand,
    LogoutCommandHandler,
    RefreshSessionCommand,
    RefreshSessionCommandHandler,
)
from auditoria.modules.identity.application.queries.session import (
    ResolvePrincipalQuery,
    ResolvePrincipalQueryHandler,
)
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.errors import (
    InvalidCredentialsError,
    InvalidSessionError,
    RoleNotAssignedError,
    UserInactiveError,
    UserLockedError,
)
from auditoria.modules.identity.domain.events import UserLocked
from auditoria.modules.identity.domain.policies.login_policy import LoginPolicy
from auditoria.tests.builders import UserBuilder
from auditoria.tests.integration.helpers import context_for

PASSWORD = "Secreta123"
ANONYMOUS = RequestContext(ip_address="10.0.0.9", user_agent="pytest")


@pytest.fixture
def create_account(create_user, password_hasher):
    """Persist a user whose password is ``PASSWORD``."""
    hashed = password_hasher.hash(PASSWORD)

    async def create(builder: UserBuilder | None = None):
        return await create_user((builder or UserBuilder()).with_password_hash(hashed))

    return create


@pytest.fixture
def login(identity_uow_factory, password_hasher, token_service):
    handler = LoginCommandHandler(
        identity_uow_factory, password_hasher, token_service, LoginPolicy.default()
    )

    async def login_(identifier: str, password: str = PASSWORD, role=None):
        return await handler(LoginCommand(identifier, password, role=role, context=ANONYMOUS))

    return login_


@pytest.fixture
def refresh(identity_uow_factory, token_service):
    handler = RefreshSessionCommandHandler(identity_uow_factory, token_service)

    async def refresh_(refresh_token: str):
        return await handler(RefreshSessionCommand(refresh_token, context=ANONYMOUS))

    return refresh_


@pytest.fixture
def resolve(identity_uow_factory, token_service):
    handler = ResolvePrincipalQueryHandler(identity_uow_factory, token_service)

    async def resolve_(access_token: str):
        return await handler(ResolvePrincipalQuery(access_token, context=ANONYMOUS))

    return resolve_


async def stored_user(uow_factory, user):
    async with uow_factory() as uow:
        return await uow.users.find_by_id_or_fail(user.id)


async def change_user(uow_factory, user, change) -> None:
    async with uow_factory() as uow:
        stored = await uow.users.find_by_id_or_fail(user.id)
        change(stored)
        await uow.users.save(stored)


@pytest.mark.integration
class TestLogin:
    """Test suite for LoginCommandHandler."""

    async def test_login_by_username(self, create_account, login):
        """Test a username and the right password open a session."""
        user = await create_account(UserBuilder().with_roles("gerente", "auditor"))

        result = await login(user.username.value)

        assert result.user.id == user.id
        assert result.session.user_id == user.id
        assert result.session.current_role == "gerente"
        assert result.session.access_token and result.session.refresh_token
        assert "users:read" in result.permissions

    async def test_login_by_email_with_role(self, create_account, login):
        """Test the identifier may be an email in any case and a held role may be requested."""
        user = await create_account(UserBuilder().with_roles("gerente", "auditor"))

        result = await login(user.email.value.upper(), role="auditor")

        assert result.session.current_role == "auditor"

    async def test_role_not_held(self, create_account, login):
        """Test requesting a role the user lacks is refused."""
        user = await create_account()

        with pytest.raises(RoleNotAssignedError):
            await login(user.username.value, role=Role.ADMINISTRADOR)

    async def test_unknown_user(self, login):
        """Test an unknown identifier is reported as bad credentials."""
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await login("nadie@auditoria.test")

        assert "remaining_attempts" not in exc_info.value.details

    async def test_inactive_user(self, identity_uow_factory, create_account, login):
        """Test a deactivated account cannot log in even with the right password."""
        user = await create_account()
        await change_user(identity_uow_factory, user, lambda u: u.deactivate())

        with pytest.raises(UserInactiveError):
            await login(user.username.value)


@pytest.mark.integration
class TestLockout:
    """Test suite for failed login counting during login."""

    async def test_locks_after_three_failures(
        self, identity_uow_factory, create_account, login, event_bus
    ):
        """Test each failure reports the remaining attempts and the third one locks."""
        user = await create_account()
        remaining = []

        for _ in range(2):
            with pytest.raises(InvalidCredentialsError) as exc_info:
                await login(user.username.value, "Incorrecta1")
            remaining.append(exc_info.value.details["remaining_attempts"])
        with pytest.raises(UserLockedError):
            await login(user.username.value, "Incorrecta1")

        stored = await stored_user(identity_uow_factory, user)
        assert remaining == [2, 1]
        assert stored.failed_login_attempts == 3
        assert stored.is_locked
        assert len(event_bus.of_type(UserLocked)) == 1

    async def test_right_password_while_locked(self, create_account, login):
        """Test a locked account is refused even with the right password."""
        user = await create_account()
        for _ in range(2):
            with pytest.raises(InvalidCredentialsError):
                await login(user.username.value, "Incorrecta1")
        with pytest.raises(UserLockedError):
            await login(user.username.value, "Incorrecta1")

        with pytest.raises(UserLockedError):
            await login(user.username.value)

    async def test_login_after_lock_expires(self, identity_uow_factory, create_account, login):
        """Test the user can log in again once the lock has expired."""
        user = await create_account()
        for _ in range(2):
            with pytest.raises(InvalidCredentialsError):
                await login(user.username.value, "Incorrecta1")
        with pytest.raises(UserLockedError):
            await login(user.username.value, "Incorrecta1")

        def expire_lock(stored):
            stored.lock_until = utc_now() - timedelta(minutes=1)

        await change_user(identity_uow_factory, user, expire_lock)
        result = await login(user.username.value)

        stored = await stored_user(identity_uow_factory, user)
        assert result.session.is_active
        assert stored.failed_login_attempts == 0
        assert stored.lock_until is None

    async def test_failure_after_expired_lock_starts_over(
        self, identity_uow_factory, create_account, login
    ):
        """Test a wrong password after an expired lock counts from one again."""
        user = await create_account()

        def expired_lock(stored):
            stored.failed_login_attempts = 3
            stored.lock_until = utc_now() - timedelta(minutes=1)

        await change_user(identity_uow_factory, user, expired_lock)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await login(user.username.value, "Incorrecta1")

        assert exc_info.value.details["remaining_attempts"] == 2

    async def test_success_resets_failures(self, identity_uow_factory, create_account, login):
        """Test a successful login clears earlier failures."""
        user = await create_account()
        with pytest.raises(InvalidCredentialsError):
            await login(user.username.value, "Incorrecta1")

        await login(user.username.value)

        stored = await stored_user(identity_uow_factory, user)
        assert stored.failed_login_attempts == 0


@pytest.mark.integration
class TestRefreshSession:
    """Test suite for RefreshSessionCommandHandler."""

    async def test_rotates_refresh_token(self, create_account, login, refresh, resolve):
        """Test refreshing issues a new pair and retires the old refresh token."""
        user = await create_account()
        tokens = (await login(user.username.value)).session

        renewed = await refresh(tokens.refresh_token)

        assert renewed.id == tokens.id
        assert renewed.refresh_token != tokens.refresh_token
        assert renewed.last_used_at is not None
        principal = await resolve(renewed.access_token)
        assert principal.session_id == tokens.id
        with pytest.raises(InvalidSessionError):
            await refresh(tokens.refresh_token)

    async def test_rejects_access_token(self, create_account, login, refresh):
        """Test an access token cannot be used as a refresh token."""
        user = await create_account()
        tokens = (await login(user.username.value)).session

        with pytest.raises(UnauthorizedError) as exc_info:
            await refresh(tokens.access_token)

        assert exc_info.value.code == "INVALID_TOKEN"

    async def test_deactivated_user_closes_session(
        self, identity_uow_factory, create_account, login, refresh
    ):
        """Test refreshing for a deactivated user fails and closes the session."""
        user = await create_account()
        tokens = (await login(user.username.value)).session
        await change_user(identity_uow_factory, user, lambda u: u.deactivate())

        with pytest.raises(InvalidSessionError):
            await refresh(tokens.refresh_token)

        async with identity_uow_factory() as uow:
            session = await uow.sessions.find_by_id(tokens.id)
        assert not session.is_active

    async def test_revoked_role_falls_back_to_primary(
        self, identity_uow_factory, create_account, login, refresh
    ):
        """Test a session whose role was revoked continues with the primary role."""
        user = await create_account(UserBuilder().with_roles("gerente", "auditor"))
        tokens = (await login(user.username.value, role="auditor")).session
        await change_user(identity_uow_factory, user, lambda u: u.update(roles=[Role.GERENTE]))

        renewed = await refresh(tokens.refresh_token)

        assert renewed.current_role == "gerente"


@pytest.mark.integration
class TestLogout:
    """Test suite for LogoutCommandHandler and LogoutAllCommandHandler."""

    async def test_logout_closes_current_session(
        self, identity_uow_factory, create_account, login, resolve
    ):
        """Test logging out twice closes the session once and never fails."""
        user = await create_account()
        tokens = (await login(user.username.value)).session
        context = replace(context_for(user), session_id=tokens.id)
        handler = LogoutCommandHandler(identity_uow_factory)

        await handler(LogoutCommand(context=context))
        await handler(LogoutCommand(context=context))

        with pytest.raises(InvalidSessionError):
            await resolve(tokens.access_token)

    async def test_logout_requires_session(self, create_account):
        """Test logout needs the session the request was authenticated with."""
        user = await create_account()

        with pytest.raises(UnauthorizedError):
            LogoutCommand(context=context_for(user))

    async def test_logout_all_counts_closed_sessions(
        self, identity_uow_factory, create_account, login
    ):
        """Test every open session of the caller is closed."""
        user = await create_account()
        other = await create_account()
        for _ in range(2):
            await login(user.username.value)
        await login(other.username.value)

        closed = await LogoutAllCommandHandler(identity_uow_factory)(
            LogoutAllCommand(context=context_for(user))
        )

        async with identity_uow_factory() as uow:
            assert await uow.sessions.find_active_by_user(user.id) == []
            assert len(await uow.sessions.find_active_by_user(other.id)) == 1
        assert closed == 2


@pytest.mark.integration
class TestResolvePrincipal:
    """Test suite for ResolvePrincipalQueryHandler."""

    async def test_role_comes_from_session(self, create_account, login, resolve):
        """Test the principal carries the session role and ids."""
        user = await create_account(UserBuilder().with_roles("gerente", "auditor"))
        tokens = (await login(user.username.value, role="auditor")).session

        principal = await resolve(tokens.access_token)

        assert principal.user_id == user.id
        assert principal.session_id == tokens.id
        assert principal.role is Role.AUDITOR

    async def test_locked_user_rejected(
        self, identity_uow_factory, create_account, login, resolve
    ):
        """Test a token stops working once its user is locked."""
        user = await create_account()
        tokens = (await login(user.username.value)).session

        def lock(stored):
            for _ in range(3):
                stored.increment_failed_attempts(LoginPolicy.default())

        await change_user(identity_uow_factory, user, lock)

        with pytest.raises(UserLockedError):
            await resolve(tokens.access_token)
