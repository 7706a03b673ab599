"""
Unit tests for the User aggregate.

Tests cover:
- Role assignment rules and their evaluation order
- Creation, update and deletion events
- Immutable user type
- Failed login counting and locking
- Password change unlocking the account
"""

from datetime import timedelta

import pytest

from auditoria.core.domain.base import utc_now
from auditoria.modules.identity.domain.aggregates.user import validate_user_roles
from auditoria.modules.identity.domain.enums import Role, UserStatus, UserType
from auditoria.modules.identity.domain.errors import (
    ExclusiveRoleViolationError,
    ImmutableUserTypeError,
    InvalidEmailFormatError,
    InvalidUserDataError,
    MissingRolesError,
)
from auditoria.modules.identity.domain.events import (
    UserCreated,
    UserDeleted,
    UserLocked,
    UserStatusChanged,
    UserUpdated,
)
from auditoria.modules.identity.domain.policies.login_policy import LoginPolicy
from auditoria.tests.builders import UserBuilder


@pytest.mark.unit
class TestRoleAssignment:
    """Test suite for validate_user_roles."""

    @pytest.mark.parametrize(
        ("roles", "error"),
        [
            ([], MissingRolesError),
            (None, MissingRolesError),
            (["cliente", "auditor"], ExclusiveRoleViolationError),
            (["auditor", "cliente"], ExclusiveRoleViolationError),
            (["auditor", "auditor"], InvalidUserDataError),
            (["superuser"], InvalidUserDataError),
        ],
    )
    def test_invalid_assignments(self, roles, error):
        """Test each broken assignment raises its specific error."""
        with pytest.raises(error):
            validate_user_roles(roles)

    def test_exclusivity_checked_before_duplicates(self):
        """Test CLIENTE mixing wins over duplicated roles."""
        with pytest.raises(ExclusiveRoleViolationError):
            validate_user_roles(["cliente", "auditor", "auditor"])

    def test_accepts_case_insensitive_names(self):
        """Test role names parse regardless of case."""
        assert validate_user_roles(["ADMINISTRADOR", " Gerente "]) == [
            Role.ADMINISTRADOR,
            Role.GERENTE,
        ]

    def test_cliente_alone_is_valid(self):
        """Test CLIENTE on its own passes."""
        assert validate_user_roles([Role.CLIENTE]) == [Role.CLIENTE]

    def test_three_internal_roles_allowed(self):
        """Test the maximum of three distinct internal roles."""
        assert len(validate_user_roles(["administrador", "gerente", "auditor"])) == 3


@pytest.mark.unit
class TestUserCreation:
    """Test suite for User.create."""

    def test_create_normalizes_and_emits_nothing_until_persisted(self):
        """Test raw input is normalized and events wait for mark_as_created."""
        user = UserBuilder().with_email(" ANA@Example.com ").with_phone("70123456").build()

        assert user.email.value == "ana@example.com"
        assert user.status == UserStatus.ACTIVE
        assert user.type == UserType.INTERNAL
        assert user.phone.carrier == "Entel"
        assert user.domain_events == []

    def test_mark_as_created_emits_user_created(self):
        """Test the creation event carries identifying data."""
        user = UserBuilder().with_roles("administrador", "auditor").build()

        user.mark_as_created()

        [event] = user.clear_domain_events()
        assert isinstance(event, UserCreated)
        assert event.aggregate_id == user.id
        assert event.roles == ("administrador", "auditor")
        assert user.primary_role == Role.ADMINISTRADOR

    def test_invalid_value_object_aborts_creation(self):
        """Test a malformed email prevents the aggregate from existing."""
        with pytest.raises(InvalidEmailFormatError):
            UserBuilder().with_email("not-an-email").build()

    def test_role_queries(self):
        """Test has_role and the role shortcuts."""
        user = UserBuilder().with_roles(Role.GERENTE, Role.AUDITOR).build()

        assert user.has_role(Role.GERENTE)
        assert user.is_manager and user.is_auditor
        assert not user.is_admin
        assert user.has_any_role([Role.ADMINISTRADOR, Role.AUDITOR])
        assert not user.has_all_roles([Role.ADMINISTRADOR, Role.AUDITOR])


@pytest.mark.unit
class TestUserUpdate:
    """Test suite for User.update."""

    def test_update_emits_changed_fields(self):
        """Test update assigns values and records field names."""
        user = UserBuilder().build()

        user.update(names="luis alberto", phone="71234567")

        assert user.names.value == "Luis Alberto"
        assert user.phone.value == "71234567"
        [event] = user.clear_domain_events()
        assert isinstance(event, UserUpdated)
        assert set(event.updated_fields) == {"names", "phone"}

    @pytest.mark.parametrize("field", ["type", "user_type"])
    def test_type_is_immutable(self, field):
        """Test changing the user type is refused."""
        user = UserBuilder().build()

        with pytest.raises(ImmutableUserTypeError):
            user.update(**{field: "EXTERNAL"})
        with pytest.raises(ImmutableUserTypeError):
            user.change_type(UserType.EXTERNAL)

    def test_unknown_fields_rejected(self):
        """Test non-updatable fields raise."""
        with pytest.raises(InvalidUserDataError):
            UserBuilder().build().update(status="INACTIVE")

    def test_failed_update_leaves_user_untouched(self):
        """Test validation happens before any assignment."""
        user = UserBuilder().build()
        original_names = user.names

        with pytest.raises(InvalidEmailFormatError):
            user.update(names="Carlos", email="broken")

        assert user.names == original_names
        assert user.domain_events == []

    def test_update_roles_applies_rules(self):
        """Test role updates go through the same validation."""
        user = UserBuilder().build()

        with pytest.raises(ExclusiveRoleViolationError):
            user.update(roles=["cliente", "gerente"])

        user.update(roles=["gerente"])
        assert user.roles == (Role.GERENTE,)


@pytest.mark.unit
class TestUserLifecycle:
    """Test suite for status, deletion and login lockout."""

    def test_deactivate_then_activate_emits_status_changes(self):
        """Test status transitions are recorded once each."""
        user = UserBuilder().build()

        user.deactivate()
        user.deactivate()
        user.activate()

        events = user.clear_domain_events()
        assert [event.status for event in events if isinstance(event, UserStatusChanged)] == [
            "INACTIVE",
            "ACTIVE",
        ]

    def test_mark_as_deleted_is_idempotent(self):
        """Test a second delete emits nothing."""
        user = UserBuilder().build()

        user.mark_as_deleted()
        user.mark_as_deleted()

        assert user.is_deleted
        assert user.status == UserStatus.INACTIVE
        assert len([e for e in user.clear_domain_events() if isinstance(e, UserDeleted)]) == 1

    def test_lock_after_policy_threshold(self):
        """Test the account locks when max attempts is reached."""
        user = UserBuilder().build()
        policy = LoginPolicy(max_attempts=2, lock_duration_minutes=15)

        user.increment_failed_attempts(policy)
        assert not user.is_locked

        user.increment_failed_attempts(policy)
        assert user.is_locked
        assert not user.can_attempt_login()
        assert user.lock_until - utc_now() <= timedelta(minutes=15)
        assert any(isinstance(e, UserLocked) for e in user.clear_domain_events())

    def test_expired_lock_counts_as_unlocked(self):
        """Test a lock in the past does not block login."""
        user = UserBuilder().build()
        user.lock_until = utc_now() - timedelta(minutes=1)

        assert not user.is_locked
        assert user.can_attempt_login()

    def test_failure_after_expired_lock_starts_fresh_count(self):
        """Test one failure after the lock expired does not lock again."""
        user = UserBuilder().build()
        for _ in range(3):
            user.increment_failed_attempts()
        user.lock_until = utc_now() - timedelta(seconds=1)

        user.increment_failed_attempts()

        assert user.failed_login_attempts == 1
        assert user.lock_until is None
        assert user.can_attempt_login()

    def test_update_password_clears_lock(self):
        """Test a new password replaces the hash and unlocks the account."""
        user = UserBuilder().build()
        for _ in range(3):
            user.increment_failed_attempts()
        new_hash = "$2b$04$" + "b" * 53

        user.update_password(new_hash)

        assert user.password.value == new_hash
        assert user.failed_login_attempts == 0
        assert user.lock_until is None
        assert user.can_attempt_login()

    def test_reset_login_attempts(self):
        """Test reset clears counter and lock."""
        user = UserBuilder().build()
        for _ in range(3):
            user.increment_failed_attempts()

        user.reset_login_attempts()

        assert user.failed_login_attempts == 0
        assert user.lock_until is None


@pytest.mark.unit
class TestLoginPolicy:
    """Test suite for LoginPolicy presets."""

    @pytest.mark.parametrize(
        ("policy", "attempts", "minutes"),
        [
            (LoginPolicy.default(), 3, 30),
            (LoginPolicy.strict(), 2, 60),
            (LoginPolicy.relaxed(), 5, 15),
        ],
    )
    def test_presets(self, policy, attempts, minutes):
        """Test preset thresholds."""
        assert policy.should_lock_account(attempts)
        assert not policy.should_lock_account(attempts - 1)
        assert policy.lock_duration == timedelta(minutes=minutes)
