"""
Integration tests for user management use cases.

Tests cover:
- Partial updates and role changes per user type
- Soft delete and deactivation closing open sessions
- Lockout blocking new sessions and the administrative reset
- Detail and paged listing queries
- Avatar upload replacing the previous file
"""

from pathlib import Path
from uuid import uuid4

import pytest

from auditoria.modules.identity.application.commands.session import (
    CreateSessionCommand,
    CreateSessionCommandHandler,
)
from auditoria.modules.identity.application.commands.user import (
    ChangeUserStatusCommand,
    ChangeUserStatusCommandHandler,
    CreateInternalUserCommand,
    CreateInternalUserCommandHandler,
    DeleteUserCommand,
    DeleteUserCommandHandler,
    ResetLoginAttemptsCommand,
    ResetLoginAttemptsCommandHandler,
    UpdateUserCommand,
    UpdateUserCommandHandler,
    UploadAvatarCommand,
    UploadAvatarCommandHandler,
)
from auditoria.modules.identity.application.queries.user import (
    GetUserQuery,
    GetUserQueryHandler,
    ListUsersQuery,
    ListUsersQueryHandler,
)
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.errors import (
    DuplicateEmailError,
    ExclusiveRoleViolationError,
    InvalidUserStateError,
    InvalidUserTypeError,
    UserLockedError,
    UserNotFoundError,
)
from auditoria.modules.identity.domain.events import UserDeleted, UserUpdated
from auditoria.modules.identity.domain.policies.login_policy import LoginPolicy
from auditoria.shared.file_storage import InvalidUploadError
from auditoria.tests.builders import UserBuilder, unique_ci
from auditoria.tests.integration.helpers import context_for

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


async def open_session(uow_factory, token_service, user) -> None:
    await CreateSessionCommandHandler(uow_factory, token_service)(
        CreateSessionCommand(user.id, context=context_for(user))
    )


async def active_sessions(uow_factory, user) -> list:
    async with uow_factory() as uow:
        return await uow.sessions.find_active_by_user(user.id)


async def lock_user(uow_factory, user) -> None:
    policy = LoginPolicy.default()
    async with uow_factory() as uow:
        stored = await uow.users.find_by_id_or_fail(user.id)
        for _ in range(policy.max_attempts):
            stored.increment_failed_attempts(policy)
        await uow.users.save(stored)


@pytest.mark.integration
class TestUpdateUser:
    """Test suite for UpdateUserCommandHandler."""

    async def test_updates_only_given_fields(
        self, identity_uow_factory, admin_context, create_user, event_bus
    ):
        """Test untouched fields keep their value."""
        user = await create_user(UserBuilder().with_phone("70123456"))
        handler = UpdateUserCommandHandler(identity_uow_factory)

        result = await handler(
            UpdateUserCommand(user.id, {"names": "lucía"}, context=admin_context)
        )

        assert result.names == "Lucía"
        assert result.phone == "70123456"
        assert result.email == user.email.value
        assert len(event_bus.of_type(UserUpdated)) == 1

    async def test_role_change_mirrored_to_internal_profile(
        self, identity_uow_factory, password_hasher, admin_context
    ):
        """Test internal role changes reach the profile too."""
        created = await CreateInternalUserCommandHandler(identity_uow_factory, password_hasher)(
            CreateInternalUserCommand(
                names="Raúl",
                last_names="Choque",
                email="raul.choque@auditoria.test",
                username="rchoque",
                password="Secreta123",
                ci=unique_ci(),
                roles=["auditor"],
                context=admin_context,
            )
        )

        result = await UpdateUserCommandHandler(identity_uow_factory)(
            UpdateUserCommand(created.id, {"roles": ["gerente"]}, context=admin_context)
        )

        assert result.roles == ["gerente"]
        async with identity_uow_factory() as uow:
            profile = await uow.internal_profiles.find_by_user_id(created.id)
        assert profile.roles == (Role.GERENTE,)

    async def test_internal_user_rejects_cliente_mix(
        self, identity_uow_factory, admin_context, create_user
    ):
        """Test CLIENTE cannot be combined with staff roles."""
        user = await create_user()

        with pytest.raises(ExclusiveRoleViolationError):
            await UpdateUserCommandHandler(identity_uow_factory)(
                UpdateUserCommand(
                    user.id, {"roles": ["auditor", "cliente"]}, context=admin_context
                )
            )

    async def test_external_user_keeps_cliente(
        self, identity_uow_factory, admin_context, create_user
    ):
        """Test external users cannot receive staff roles."""
        user = await create_user(UserBuilder().external())

        with pytest.raises(InvalidUserTypeError):
            await UpdateUserCommandHandler(identity_uow_factory)(
                UpdateUserCommand(user.id, {"roles": ["auditor"]}, context=admin_context)
            )

    async def test_email_taken_by_other_user(
        self, identity_uow_factory, admin_context, create_user
    ):
        """Test changing to another user's email is a conflict."""
        first = await create_user()
        second = await create_user()

        with pytest.raises(DuplicateEmailError):
            await UpdateUserCommandHandler(identity_uow_factory)(
                UpdateUserCommand(
                    second.id, {"email": first.email.value}, context=admin_context
                )
            )

    async def test_unknown_user(self, identity_uow_factory, admin_context):
        """Test updating a missing user raises UserNotFoundError."""
        with pytest.raises(UserNotFoundError):
            await UpdateUserCommandHandler(identity_uow_factory)(
                UpdateUserCommand(uuid4(), {"names": "Ana"}, context=admin_context)
            )


@pytest.mark.integration
class TestDeleteAndStatus:
    """Test suite for deletion and activation."""

    async def test_delete_hides_user_and_closes_sessions(
        self, identity_uow_factory, admin_context, create_user, event_bus, token_service
    ):
        """Test a deleted user is no longer found and its sessions end."""
        user = await create_user()
        await open_session(identity_uow_factory, token_service, user)

        await DeleteUserCommandHandler(identity_uow_factory)(
            DeleteUserCommand(user.id, context=admin_context)
        )

        async with identity_uow_factory() as uow:
            assert await uow.users.find_by_id(user.id) is None
        assert await active_sessions(identity_uow_factory, user) == []
        assert len(event_bus.of_type(UserDeleted)) == 1

    async def test_delete_self_rejected(self, identity_uow_factory, create_user):
        """Test a user cannot delete its own account."""
        admin = await create_user(UserBuilder().with_roles("administrador"))

        with pytest.raises(InvalidUserStateError):
            await DeleteUserCommandHandler(identity_uow_factory)(
                DeleteUserCommand(admin.id, context=context_for(admin))
            )

    async def test_deactivate_closes_sessions(
        self, identity_uow_factory, admin_context, create_user, token_service
    ):
        """Test deactivation invalidates every open session."""
        user = await create_user()
        await open_session(identity_uow_factory, token_service, user)
        await open_session(identity_uow_factory, token_service, user)

        result = await ChangeUserStatusCommandHandler(identity_uow_factory)(
            ChangeUserStatusCommand(user.id, active=False, context=admin_context)
        )

        assert result.status == "INACTIVE"
        assert await active_sessions(identity_uow_factory, user) == []

    async def test_reactivate(self, identity_uow_factory, admin_context, create_user):
        """Test an inactive user can be activated again."""
        user = await create_user()
        handler = ChangeUserStatusCommandHandler(identity_uow_factory)
        await handler(ChangeUserStatusCommand(user.id, active=False, context=admin_context))

        result = await handler(ChangeUserStatusCommand(user.id, active=True, context=admin_context))

        assert result.status == "ACTIVE"

    async def test_deactivate_self_rejected(self, identity_uow_factory, create_user):
        """Test a user cannot deactivate itself."""
        admin = await create_user(UserBuilder().with_roles("administrador"))

        with pytest.raises(InvalidUserStateError):
            await ChangeUserStatusCommandHandler(identity_uow_factory)(
                ChangeUserStatusCommand(admin.id, active=False, context=context_for(admin))
            )


@pytest.mark.integration
class TestLoginAttempts:
    """Test suite for lockout state and the administrative reset."""

    async def test_locked_user_cannot_open_session(
        self, identity_uow_factory, create_user, token_service
    ):
        """Test a locked account is refused a new session."""
        user = await create_user()
        await lock_user(identity_uow_factory, user)

        with pytest.raises(UserLockedError):
            await open_session(identity_uow_factory, token_service, user)

    async def test_reset_unlocks(self, identity_uow_factory, admin_context, create_user):
        """Test resetting clears the counter and the lock."""
        user = await create_user()
        await lock_user(identity_uow_factory, user)

        result = await ResetLoginAttemptsCommandHandler(identity_uow_factory)(
            ResetLoginAttemptsCommand(user.id, context=admin_context)
        )

        assert not result.is_locked
        assert result.failed_login_attempts == 0
        assert result.lock_until is None

    async def test_session_resets_failed_attempts(
        self, identity_uow_factory, create_user, token_service
    ):
        """Test a successful session clears earlier failures."""
        user = await create_user()
        async with identity_uow_factory() as uow:
            stored = await uow.users.find_by_id_or_fail(user.id)
            stored.increment_failed_attempts(LoginPolicy.default())
            await uow.users.save(stored)

        await open_session(identity_uow_factory, token_service, user)

        async with identity_uow_factory() as uow:
            stored = await uow.users.find_by_id(user.id)
        assert stored.failed_login_attempts == 0
        assert stored.lock_until is None


@pytest.mark.integration
class TestUserQueries:
    """Test suite for GetUserQueryHandler and ListUsersQueryHandler."""

    async def test_get_internal_user_with_profile(
        self, identity_uow_factory, password_hasher, admin_context
    ):
        """Test the detail view includes the internal profile."""
        created = await CreateInternalUserCommandHandler(identity_uow_factory, password_hasher)(
            CreateInternalUserCommand(
                names="Elena",
                last_names="Rojas",
                email="elena.rojas@auditoria.test",
                username="erojas",
                password="Secreta123",
                ci=unique_ci(),
                roles=["administrador"],
                department="Sistemas",
                context=admin_context,
            )
        )

        result = await GetUserQueryHandler(identity_uow_factory)(
            GetUserQuery(created.id, context=admin_context)
        )

        assert result.id == created.id
        assert result.internal_profile.department == "Sistemas"
        assert result.external_profile is None

    async def test_list_filters_and_pages(
        self, identity_uow_factory, admin_context, create_user
    ):
        """Test search, type filters and paging totals."""
        for _ in range(3):
            await create_user()
        await create_user(UserBuilder().external().with_username("cliente_boliviano"))
        handler = ListUsersQueryHandler(identity_uow_factory)

        page = await handler(ListUsersQuery(page=1, page_size=2, context=admin_context))
        external = await handler(ListUsersQuery(user_type="EXTERNAL", context=admin_context))
        searched = await handler(ListUsersQuery(search="BOLIVIANO", context=admin_context))

        assert page.total == 4
        assert len(page.items) == 2
        assert page.total_pages == 2
        assert [user.type for user in external.items] == ["EXTERNAL"]
        assert [user.username for user in searched.items] == ["cliente_boliviano"]

    async def test_list_excludes_deleted(self, identity_uow_factory, admin_context, create_user):
        """Test soft-deleted users are not listed."""
        kept = await create_user()
        removed = await create_user()
        async with identity_uow_factory() as uow:
            await uow.users.delete(removed)

        result = await ListUsersQueryHandler(identity_uow_factory)(
            ListUsersQuery(context=admin_context)
        )

        assert [user.id for user in result.items] == [kept.id]


@pytest.mark.integration
class TestUploadAvatar:
    """Test suite for UploadAvatarCommandHandler."""

    async def test_upload_replaces_previous_file(
        self, identity_uow_factory, file_storage, admin_context, create_user, settings
    ):
        """Test the new avatar is stored and the old one removed."""
        user = await create_user()
        handler = UploadAvatarCommandHandler(identity_uow_factory, file_storage)
        upload_dir = Path(settings.storage.upload_dir)

        first = await handler(UploadAvatarCommand(user.id, PNG, "image/png", context=admin_context))
        second = await handler(
            UploadAvatarCommand(user.id, PNG + b"\x01", "image/png", context=admin_context)
        )

        assert first.image.startswith(f"/uploads/avatars/{user.id}_")
        assert first.image.endswith(".png")
        assert second.image != first.image
        assert not (upload_dir / file_storage.path_for_url(first.image)).exists()
        assert (upload_dir / file_storage.path_for_url(second.image)).read_bytes() == PNG + b"\x01"

    async def test_rejects_non_image(self, identity_uow_factory, file_storage, admin_context):
        """Test non-image uploads are refused before touching the disk."""
        handler = UploadAvatarCommandHandler(identity_uow_factory, file_storage)

        with pytest.raises(InvalidUploadError):
            await handler(
                UploadAvatarCommand(uuid4(), b"%PDF", "application/pdf", context=admin_context)
            )

    async def test_unknown_user_removes_new_file(
        self, identity_uow_factory, file_storage, admin_context, settings
    ):
        """Test the stored file is cleaned up when the user does not exist."""
        handler = UploadAvatarCommandHandler(identity_uow_factory, file_storage)

        with pytest.raises(UserNotFoundError):
            await handler(UploadAvatarCommand(uuid4(), PNG, "image/png", context=admin_context))

        avatars = Path(settings.storage.upload_dir) / "avatars"
        assert not avatars.exists() or list(avatars.iterdir()) == []
