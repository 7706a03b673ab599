"""
User Aggregate

A person who can sign in: internal staff or a member of a client
organization. The user type is fixed at creation. Passwords arrive already
hashed; hashing belongs to the infrastructure layer.

State machine:
- status ACTIVE or INACTIVE
- orthogonal lock state: ``lock_until`` in the future means locked; an
  expired lock counts as unlocked
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any
from uuid import UUID

from auditoria.core.domain.base import AggregateRoot, ensure_utc, utc_now
from auditoria.modules.identity.domain.enums import Role, UserStatus, UserType
from auditoria.modules.identity.domain.errors import (
    EmptyFieldError,
    ExclusiveRoleViolationError,
    ImmutableUserTypeError,
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
from auditoria.modules.identity.domain.value_objects import (
    CI,
    Address,
    Email,
    HashedPassword,
    ImageUrl,
    PersonName,
    Phone,
    Username,
)

MAX_ROLES_PER_USER = 3

UPDATABLE_FIELDS = frozenset({
    "names", "last_names", "email", "username", "ci", "phone", "address", "image", "roles",
})


def validate_user_roles(roles: Iterable[Role | str] | None) -> list[Role]:
    """
    Parse and check a role assignment.

    Rules, in evaluation order:
    1. at least one role
    2. CLIENTE cannot be combined with any other role
    3. no duplicated roles
    4. at most three roles
    """
    raw_roles = list(roles or [])
    if not raw_roles:
        raise MissingRolesError()

    parsed: list[Role] = []
    for raw in raw_roles:
        if isinstance(raw, Role):
            parsed.append(raw)
            continue
        try:
            parsed.append(Role(str(raw).strip().lower()))
        except ValueError as e:
            raise InvalidUserDataError(f"Rol inválido: {raw}") from e

    if Role.CLIENTE in parsed and any(role != Role.CLIENTE for role in parsed):
        raise ExclusiveRoleViolationError(Role.CLIENTE.value)

    if len(set(parsed)) != len(parsed):
        raise InvalidUserDataError("El usuario no puede tener roles duplicados")

    if len(parsed) > MAX_ROLES_PER_USER:
        raise InvalidUserDataError(
            f"El usuario no puede tener más de {MAX_ROLES_PER_USER} roles"
        )

    return parsed


def _parse_user_type(value: UserType | str | None) -> UserType:
    if value is None or value == "":
        raise EmptyFieldError("tipo de usuario")
    if isinstance(value, UserType):
        return value
    try:
        return UserType(str(value).upper())
    except ValueError as e:
        raise InvalidUserDataError(f"Tipo de usuario inválido: {value}") from e


class User(AggregateRoot):
    """User aggregate root."""

    def __init__(
        self,
        *,
        user_type: UserType,
        names: PersonName,
        last_names: PersonName,
        email: Email,
        username: Username,
        password: HashedPassword,
        ci: CI,
        roles: list[Role],
        status: UserStatus = UserStatus.ACTIVE,
        failed_login_attempts: int = 0,
        lock_until: datetime | None = None,
        phone: Phone | None = None,
        image: ImageUrl | None = None,
        address: Address | None = None,
        entity_id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        super().__init__(entity_id, created_at, updated_at, deleted_at)
        self._type = user_type
        self.names = names
        self.last_names = last_names
        self.email = email
        self.username = username
        self.password = password
        self.ci = ci
        self._roles = list(roles)
        self.status = status
        self.failed_login_attempts = failed_login_attempts
        self.lock_until = ensure_utc(lock_until)
        self.phone = phone
        self.image = image
        self.address = address

    # =================================================================================
    # FACTORIES
    # =================================================================================

    @classmethod
    def create(
        cls,
        *,
        user_type: UserType | str,
        names: str,
        last_names: str,
        email: str,
        username: str,
        password: str,
        ci: str,
        roles: Iterable[Role | str],
        phone: str | None = None,
        address: str | None = None,
        image: str | None = None,
    ) -> "User":
        """
        Build a new active user from raw input.

        Every value object and the role assignment are validated before the
        aggregate exists. Call ``mark_as_created`` once the user is persisted.
        """
        if not password:
            raise EmptyFieldError("contraseña")

        parsed_type = _parse_user_type(user_type)
        parsed_roles = validate_user_roles(roles)

        return cls(
            user_type=parsed_type,
            names=PersonName.create(names, "nombres"),
            last_names=PersonName.create(last_names, "apellidos"),
            email=Email.create(email),
            username=Username.create(username),
            password=HashedPassword.create(password),
            ci=CI.create(ci),
            roles=parsed_roles,
            phone=Phone.create_optional(phone),
            image=ImageUrl.create(image),
            address=Address.create(address),
        )

    @classmethod
    def from_persistence(
        cls,
        *,
        id: UUID,
        user_type: str,
        names: str,
        last_names: str,
        email: str,
        username: str,
        password: str,
        ci: str,
        roles: list[str],
        status: str,
        failed_login_attempts: int,
        lock_until: datetime | None,
        phone: str | None,
        image: str | None,
        address: str | None,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: datetime | None,
    ) -> "User":
        return cls(
            entity_id=id,
            user_type=UserType(user_type),
            names=PersonName.create(names, "nombres"),
            last_names=PersonName.create(last_names, "apellidos"),
            email=Email.create(email),
            username=Username.create(username),
            password=HashedPassword.create(password),
            ci=CI.create(ci),
            roles=[Role(role) for role in roles],
            status=UserStatus(status),
            failed_login_attempts=failed_login_attempts,
            lock_until=lock_until,
            phone=Phone.create_optional(phone),
            image=ImageUrl.create(image),
            address=Address.create(address),
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )

    # =================================================================================
    # DERIVED STATE
    # =================================================================================

    @property
    def type(self) -> UserType:
        return self._type

    @property
    def roles(self) -> tuple[Role, ...]:
        return tuple(self._roles)

    @property
    def full_name(self) -> str:
        return f"{self.names.value} {self.last_names.value}"

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_locked(self) -> bool:
        return self.lock_until is not None and self.lock_until > utc_now()

    @property
    def is_internal(self) -> bool:
        return self._type == UserType.INTERNAL

    @property
    def is_external(self) -> bool:
        return self._type == UserType.EXTERNAL

    @property
    def primary_role(self) -> Role | None:
        return self._roles[0] if self._roles else None

    def has_role(self, role: Role) -> bool:
        return role in self._roles

    def has_any_role(self, roles: Iterable[Role]) -> bool:
        return any(role in self._roles for role in roles)

    def has_all_roles(self, roles: Iterable[Role]) -> bool:
        return all(role in self._roles for role in roles)

    @property
    def is_admin(self) -> bool:
        return self.has_role(Role.ADMINISTRADOR)

    @property
    def is_manager(self) -> bool:
        return self.has_role(Role.GERENTE)

    @property
    def is_auditor(self) -> bool:
        return self.has_role(Role.AUDITOR)

    @property
    def is_client(self) -> bool:
        return self.has_role(Role.CLIENTE)

    # =================================================================================
    # BEHAVIOR
    # =================================================================================

    def activate(self) -> None:
        was_active = self.is_active
        self.status = UserStatus.ACTIVE
        self.reset_login_attempts()
        if not was_active:
            self.add_domain_event(
                UserStatusChanged(aggregate_id=self.id, status=self.status.value)
            )

    def deactivate(self) -> None:
        if not self.is_active:
            self.touch()
            return
        self.status = UserStatus.INACTIVE
        self.touch()
        self.add_domain_event(UserStatusChanged(aggregate_id=self.id, status=self.status.value))

    def update_password(self, hashed_password: str) -> None:
        self.password = HashedPassword.create(hashed_password)
        self.reset_login_attempts()

    def increment_failed_attempts(self, policy: LoginPolicy | None = None) -> None:
        """
        Count a failed login; lock the account once the policy threshold is hit.

        An expired lock starts a fresh count.
        """
        policy = policy or LoginPolicy.default()
        if self.lock_until is not None and not self.is_locked:
            self.failed_login_attempts = 0
            self.lock_until = None
        self.failed_login_attempts += 1

        if policy.should_lock_account(self.failed_login_attempts):
            self.lock_until = policy.calculate_lock_until()
            self.add_domain_event(
                UserLocked(
                    aggregate_id=self.id,
                    lock_until=self.lock_until,
                    failed_attempts=self.failed_login_attempts,
                )
            )
        self.touch()

    def reset_login_attempts(self) -> None:
        self.failed_login_attempts = 0
        self.lock_until = None
        self.touch()

    def can_attempt_login(self) -> bool:
        return self.is_active and not self.is_locked

    def change_type(self, new_type: UserType) -> None:
        raise ImmutableUserTypeError()

    def update(self, **fields: Any) -> None:
        """
        Change profile fields and/or roles.

        All values are validated before anything is assigned, so a failing
        update leaves the user untouched. Emits ``UserUpdated`` with the names
        of the fields supplied.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if "type" in unknown or "user_type" in unknown:
            raise ImmutableUserTypeError()
        if unknown:
            raise InvalidUserDataError(
                f"Campos no actualizables: {', '.join(sorted(unknown))}"
            )
        if not fields:
            return

        changes: dict[str, Any] = {}
        if "names" in fields:
            changes["names"] = PersonName.create(fields["names"], "nombres")
        if "last_names" in fields:
            changes["last_names"] = PersonName.create(fields["last_names"], "apellidos")
        if "email" in fields:
            changes["email"] = Email.create(fields["email"])
        if "username" in fields:
            changes["username"] = Username.create(fields["username"])
        if "ci" in fields:
            changes["ci"] = CI.create(fields["ci"])
        if "phone" in fields:
            changes["phone"] = Phone.create_optional(fields["phone"])
        if "address" in fields:
            changes["address"] = Address.create(fields["address"])
        if "image" in fields:
            changes["image"] = ImageUrl.create(fields["image"])
        if "roles" in fields:
            changes["_roles"] = validate_user_roles(fields["roles"])

        for attribute, value in changes.items():
            setattr(self, attribute, value)

        self.touch()
        self.add_domain_event(
            UserUpdated(aggregate_id=self.id, updated_fields=tuple(fields))
        )

    def mark_as_created(self) -> None:
        self.add_domain_event(
            UserCreated(
                aggregate_id=self.id,
                email=self.email.value,
                username=self.username.value,
                user_type=self._type.value,
                roles=tuple(role.value for role in self._roles),
            )
        )

    def mark_as_deleted(self) -> None:
        """Deactivate and soft delete; a second call emits nothing."""
        if self.is_deleted:
            return
        self.status = UserStatus.INACTIVE
        self.soft_delete()
        self.add_domain_event(UserDeleted(aggregate_id=self.id, email=self.email.value))
