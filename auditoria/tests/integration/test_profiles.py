"""
Integration tests for external profile and internal user use cases.

Tests cover:
- Updating job data, moving between organizations and ending a membership
- Deleting a client user with its profile and sessions
- Reading and paging external profiles by organization and state
- Updating staff data and employee code uniqueness
- Paging internal users by role and department
- Changing passwords
"""

from datetime import date
from uuid import uuid4

import pytest

from auditoria.core.errors import ValidationError
from auditoria.modules.identity.application.commands.profile import (
    DeleteExternalProfileCommand,
    DeleteExternalProfileCommandHandler,
    UpdateExternalProfileCommand,
    UpdateExternalProfileCommandHandler,
    UpdateInternalUserCommand,
    UpdateInternalUserCommandHandler,
)
from auditoria.modules.identity.application.commands.session import (
    CreateSessionCommand,
    CreateSessionCommandHandler,
)
from auditoria.modules.identity.application.commands.user import (
    ChangePasswordCommand,
    ChangePasswordCommandHandler,
)
from auditoria.modules.identity.application.queries.profile import (
    GetExternalProfileQuery,
    GetExternalProfileQueryHandler,
    ListExternalProfilesQuery,
    ListExternalProfilesQueryHandler,
    ListInternalUsersQuery,
    ListInternalUsersQueryHandler,
)
from auditoria.modules.identity.domain.aggregates.external_profile import ExternalProfile
from auditoria.modules.identity.domain.aggregates.internal_profile import InternalProfile
from auditoria.modules.identity.domain.errors import (
    DuplicateEmployeeCodeError,
    InvalidCredentialsError,
    InvalidUserDataError,
    InvalidUserTypeError,
    MissingUserProfileError,
    UserNotFoundError,
)
from auditoria.modules.identity.domain.events import UserDeleted
from auditoria.modules.identity.domain.policies.login_policy import LoginPolicy
from auditoria.modules.organizations.domain.errors import OrganizationNotFoundError
from auditoria.tests.builders import UserBuilder
from auditoria.tests.integration.helpers import context_for


@pytest.fixture
def create_client(identity_uow_factory, create_user):
    """Persist an external user attached to ``organization``."""

    async def create(organization, **profile_fields):
        user = await create_user(UserBuilder().external())
        profile = ExternalProfile.create(
            user_id=user.id, organization_id=organization.id, **profile_fields
        )
        async with identity_uow_factory() as uow:
            await uow.external_profiles.save(profile)
        return user

    return create


@pytest.fixture
def create_staff(identity_uow_factory, create_user):
    """Persist an internal user holding ``roles`` with its internal profile."""

    async def create(*roles: str, **profile_fields):
        roles = roles or ("auditor",)
        user = await create_user(UserBuilder().with_roles(*roles))
        profile = InternalProfile.create(user_id=user.id, roles=roles, **profile_fields)
        async with identity_uow_factory() as uow:
            await uow.internal_profiles.save(profile)
        return user

    return create


@pytest.mark.integration
class TestUpdateExternalProfile:
    """Test suite for UpdateExternalProfileCommandHandler."""

    async def test_updates_job_data(
        self, identity_uow_factory, admin_context, create_organization, create_client
    ):
        """Test only the given fields change and the email is normalized."""
        organization = await create_organization()
        client = await create_client(organization, job_title="Contador", department="Finanzas")

        result = await UpdateExternalProfileCommandHandler(identity_uow_factory)(
            UpdateExternalProfileCommand(
                client.id,
                {"job_title": "Gerente de Riesgos", "organizational_email": "J.Perez@Banco.bo"},
                context=admin_context,
            )
        )

        profile = result.external_profile
        assert profile.job_title == "Gerente de Riesgos"
        assert profile.department == "Finanzas"
        assert profile.organizational_email == "j.perez@banco.bo"

    async def test_moves_to_another_organization(
        self, identity_uow_factory, admin_context, create_organization, create_client
    ):
        """Test changing organization checks it exists and restarts the membership date."""
        origin = await create_organization("Banco Unión")
        target = await create_organization("Banco Sol")
        client = await create_client(origin)
        async with identity_uow_factory() as uow:
            joined_before = (await uow.external_profiles.find_by_user_id(client.id)).joined_at

        result = await UpdateExternalProfileCommandHandler(identity_uow_factory)(
            UpdateExternalProfileCommand(
                client.id, {"organization_id": str(target.id)}, context=admin_context
            )
        )

        async with identity_uow_factory() as uow:
            moved = await uow.external_profiles.find_by_organization(target.id)
            remaining = await uow.external_profiles.find_by_organization(origin.id)
        assert result.external_profile.organization_id == target.id
        assert result.external_profile.joined_at >= joined_before
        assert [profile.user_id for profile in moved] == [client.id]
        assert remaining == []

    async def test_unknown_organization(
        self, identity_uow_factory, admin_context, create_organization, create_client
    ):
        """Test moving to a missing organization fails and keeps the profile."""
        organization = await create_organization()
        client = await create_client(organization)

        with pytest.raises(OrganizationNotFoundError):
            await UpdateExternalProfileCommandHandler(identity_uow_factory)(
                UpdateExternalProfileCommand(
                    client.id, {"organization_id": uuid4()}, context=admin_context
                )
            )

        async with identity_uow_factory() as uow:
            profile = await uow.external_profiles.find_by_user_id(client.id)
        assert profile.organization_id == organization.id

    async def test_ends_and_restores_membership(
        self, identity_uow_factory, admin_context, create_organization, create_client
    ):
        """Test deactivation records when the membership ended and activation clears it."""
        organization = await create_organization()
        client = await create_client(organization)
        handler = UpdateExternalProfileCommandHandler(identity_uow_factory)

        ended = await handler(
            UpdateExternalProfileCommand(client.id, {"is_active": False}, context=admin_context)
        )
        restored = await handler(
            UpdateExternalProfileCommand(client.id, {"is_active": "true"}, context=admin_context)
        )

        assert not ended.external_profile.is_active
        assert ended.external_profile.left_at is not None
        assert restored.external_profile.is_active
        assert restored.external_profile.left_at is None

    async def test_internal_user_rejected(self, identity_uow_factory, admin_context, create_staff):
        """Test an internal user has no external profile to update."""
        staff = await create_staff()

        with pytest.raises(InvalidUserTypeError):
            await UpdateExternalProfileCommandHandler(identity_uow_factory)(
                UpdateExternalProfileCommand(
                    staff.id, {"job_title": "Analista"}, context=admin_context
                )
            )

    def test_unknown_field_rejected(self, admin_context):
        """Test account fields cannot be changed through the profile."""
        with pytest.raises(InvalidUserDataError):
            UpdateExternalProfileCommand(uuid4(), {"email": "x@y.bo"}, context=admin_context)


@pytest.mark.integration
class TestDeleteExternalProfile:
    """Test suite for DeleteExternalProfileCommandHandler."""

    async def test_deletes_client_and_closes_sessions(
        self,
        identity_uow_factory,
        token_service,
        admin_context,
        create_organization,
        create_client,
        event_bus,
    ):
        """Test the user and profile disappear and open sessions end."""
        organization = await create_organization()
        client = await create_client(organization)
        await CreateSessionCommandHandler(identity_uow_factory, token_service)(
            CreateSessionCommand(client.id, context=context_for(client))
        )

        await DeleteExternalProfileCommandHandler(identity_uow_factory)(
            DeleteExternalProfileCommand(client.id, context=admin_context)
        )

        async with identity_uow_factory() as uow:
            assert await uow.users.find_by_id(client.id) is None
            assert await uow.external_profiles.find_by_user_id(client.id) is None
            assert await uow.sessions.find_active_by_user(client.id) == []
        assert len(event_bus.of_type(UserDeleted)) == 1

    async def test_missing_profile(self, identity_uow_factory, admin_context, create_user):
        """Test an external user without a profile is reported as such."""
        client = await create_user(UserBuilder().external())

        with pytest.raises(MissingUserProfileError):
            await DeleteExternalProfileCommandHandler(identity_uow_factory)(
                DeleteExternalProfileCommand(client.id, context=admin_context)
            )


@pytest.mark.integration
class TestExternalProfileQueries:
    """Test suite for GetExternalProfileQueryHandler and ListExternalProfilesQueryHandler."""

    async def test_get_external_profile(
        self, identity_uow_factory, admin_context, create_organization, create_client
    ):
        """Test the detail view carries the membership."""
        organization = await create_organization()
        client = await create_client(organization, job_title="Contador")

        result = await GetExternalProfileQueryHandler(identity_uow_factory)(
            GetExternalProfileQuery(client.id, context=admin_context)
        )

        assert result.id == client.id
        assert result.external_profile.organization_id == organization.id
        assert result.external_profile.job_title == "Contador"

    async def test_get_unknown_user(self, identity_uow_factory, admin_context):
        """Test a missing user is a not-found error."""
        with pytest.raises(UserNotFoundError):
            await GetExternalProfileQueryHandler(identity_uow_factory)(
                GetExternalProfileQuery(uuid4(), context=admin_context)
            )

    async def test_list_filters_by_organization_and_state(
        self, identity_uow_factory, admin_context, create_organization, create_client
    ):
        """Test filters combine and deleted clients are left out."""
        bank = await create_organization("Banco Unión")
        coop = await create_organization("Cooperativa Jesús Nazareno")
        active = await create_client(bank)
        inactive = await create_client(bank)
        deleted = await create_client(bank)
        await create_client(coop)
        await UpdateExternalProfileCommandHandler(identity_uow_factory)(
            UpdateExternalProfileCommand(inactive.id, {"is_active": False}, context=admin_context)
        )
        await DeleteExternalProfileCommandHandler(identity_uow_factory)(
            DeleteExternalProfileCommand(deleted.id, context=admin_context)
        )
        handler = ListExternalProfilesQueryHandler(identity_uow_factory)

        of_bank = await handler(
            ListExternalProfilesQuery(organization_id=bank.id, context=admin_context)
        )
        active_of_bank = await handler(
            ListExternalProfilesQuery(
                organization_id=bank.id, is_active=True, context=admin_context
            )
        )
        everyone = await handler(ListExternalProfilesQuery(page_size=1, context=admin_context))

        assert of_bank.total == 2
        assert {item.id for item in of_bank.items} == {active.id, inactive.id}
        assert [item.id for item in active_of_bank.items] == [active.id]
        assert everyone.total == 3
        assert len(everyone.items) == 1


@pytest.mark.integration
class TestUpdateInternalUser:
    """Test suite for UpdateInternalUserCommandHandler."""

    async def test_updates_staff_data(self, identity_uow_factory, admin_context, create_staff):
        """Test profile fields change and omitted ones are kept."""
        staff = await create_staff(department="Auditoría Interna", employee_code="EMP-001")

        result = await UpdateInternalUserCommandHandler(identity_uow_factory)(
            UpdateInternalUserCommand(
                staff.id,
                {"department": "Riesgos", "hire_date": date(2024, 3, 1)},
                context=admin_context,
            )
        )

        profile = result.internal_profile
        assert profile.department == "Riesgos"
        assert profile.hire_date == date(2024, 3, 1)
        assert profile.employee_code == "EMP-001"
        assert profile.roles == ["auditor"]

    async def test_employee_code_taken(self, identity_uow_factory, admin_context, create_staff):
        """Test an employee code held by someone else is a conflict."""
        await create_staff(employee_code="EMP-001")
        other = await create_staff(employee_code="EMP-002")

        with pytest.raises(DuplicateEmployeeCodeError):
            await UpdateInternalUserCommandHandler(identity_uow_factory)(
                UpdateInternalUserCommand(
                    other.id, {"employee_code": "EMP-001"}, context=admin_context
                )
            )

    async def test_external_user_rejected(
        self, identity_uow_factory, admin_context, create_organization, create_client
    ):
        """Test a client user has no internal profile to update."""
        client = await create_client(await create_organization())

        with pytest.raises(InvalidUserTypeError):
            await UpdateInternalUserCommandHandler(identity_uow_factory)(
                UpdateInternalUserCommand(
                    client.id, {"department": "Riesgos"}, context=admin_context
                )
            )

    def test_roles_not_accepted(self, admin_context):
        """Test roles are not staff data and are refused here."""
        with pytest.raises(InvalidUserDataError):
            UpdateInternalUserCommand(uuid4(), {"roles": ["gerente"]}, context=admin_context)


@pytest.mark.integration
class TestListInternalUsers:
    """Test suite for ListInternalUsersQueryHandler."""

    async def test_filters_by_role_and_department(
        self, identity_uow_factory, admin_context, create_staff
    ):
        """Test role and case-insensitive department filters."""
        manager = await create_staff("gerente", "auditor", department="Riesgos")
        auditor = await create_staff("auditor", department="Sistemas")
        await create_staff("administrador", department="Riesgos")
        handler = ListInternalUsersQueryHandler(identity_uow_factory)

        auditors = await handler(ListInternalUsersQuery(role="auditor", context=admin_context))
        risk = await handler(ListInternalUsersQuery(department="riesgos", context=admin_context))
        risk_auditors = await handler(
            ListInternalUsersQuery(role="auditor", department="Riesgos", context=admin_context)
        )

        assert {item.id for item in auditors.items} == {manager.id, auditor.id}
        assert risk.total == 2
        assert [item.id for item in risk_auditors.items] == [manager.id]
        assert risk_auditors.items[0].internal_profile.roles == ["gerente", "auditor"]

    def test_client_role_rejected(self, admin_context):
        """Test filtering by the client role is invalid."""
        with pytest.raises(ValidationError):
            ListInternalUsersQuery(role="cliente", context=admin_context)


@pytest.mark.integration
class TestChangePassword:
    """Test suite for ChangePasswordCommandHandler."""

    async def test_own_password_requires_current(
        self, identity_uow_factory, password_hasher, create_user
    ):
        """Test the owner must confirm the current password."""
        user = await create_user(
            UserBuilder().with_password_hash(password_hasher.hash("Secreta123"))
        )
        handler = ChangePasswordCommandHandler(identity_uow_factory, password_hasher)

        for current in (None, "Incorrecta1"):
            with pytest.raises(InvalidCredentialsError):
                await handler(
                    ChangePasswordCommand(
                        user.id, "NuevaClave9", current_password=current, context=context_for(user)
                    )
                )
        await handler(
            ChangePasswordCommand(
                user.id, "NuevaClave9", current_password="Secreta123", context=context_for(user)
            )
        )

        async with identity_uow_factory() as uow:
            stored = await uow.users.find_by_id(user.id)
        assert password_hasher.verify("NuevaClave9", stored.password.value)

    async def test_admin_reset_unlocks_and_closes_sessions(
        self, identity_uow_factory, password_hasher, token_service, admin_context, create_user
    ):
        """Test an administrator sets a password, which clears the lock and ends sessions."""
        user = await create_user()
        await CreateSessionCommandHandler(identity_uow_factory, token_service)(
            CreateSessionCommand(user.id, context=context_for(user))
        )
        async with identity_uow_factory() as uow:
            stored = await uow.users.find_by_id_or_fail(user.id)
            for _ in range(3):
                stored.increment_failed_attempts(LoginPolicy.default())
            await uow.users.save(stored)

        result = await ChangePasswordCommandHandler(identity_uow_factory, password_hasher)(
            ChangePasswordCommand(user.id, "NuevaClave9", context=admin_context)
        )

        async with identity_uow_factory() as uow:
            assert await uow.sessions.find_active_by_user(user.id) == []
        assert not result.is_locked
        assert result.failed_login_attempts == 0

    def test_short_password_rejected(self, admin_context):
        """Test the new password must have at least 8 characters."""
        with pytest.raises(ValidationError):
            ChangePasswordCommand(uuid4(), "corta", context=admin_context)
