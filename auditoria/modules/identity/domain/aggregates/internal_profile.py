"""Internal staff profile, one per INTERNAL user."""

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any
from uuid import UUID

from auditoria.core.domain.base import AggregateRoot
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.errors import InvalidUserDataError

MAX_INTERNAL_ROLES = 3


def validate_system_roles(roles: Iterable[Role | str] | None) -> list[Role]:
    """1 to 3 distinct roles taken from administrador, gerente and auditor."""
    raw_roles = list(roles or [])
    if not raw_roles:
        raise InvalidUserDataError("El perfil interno debe tener al menos un rol")
    if len(raw_roles) > MAX_INTERNAL_ROLES:
        raise InvalidUserDataError(
            f"El perfil interno no puede tener más de {MAX_INTERNAL_ROLES} roles"
        )

    parsed = []
    for raw in raw_roles:
        try:
            role = raw if isinstance(raw, Role) else Role(str(raw).strip().lower())
        except ValueError as e:
            raise InvalidUserDataError(f"Rol inválido: {raw}") from e
        if not role.is_internal:
            raise InvalidUserDataError(f"Rol inválido: {role.value}")
        parsed.append(role)

    if len(set(parsed)) != len(parsed):
        raise InvalidUserDataError("No se permiten roles duplicados")
    return parsed


class InternalProfile(AggregateRoot):
    PROFILE_FIELDS = frozenset({"department", "employee_code", "hire_date"})

    def __init__(
        self,
        *,
        user_id: UUID,
        roles: list[Role],
        department: str | None = None,
        employee_code: str | None = None,
        hire_date: date | None = None,
        entity_id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        super().__init__(entity_id, created_at, updated_at, deleted_at)
        self.user_id = user_id
        self._roles = list(roles)
        self.department = department
        self.employee_code = employee_code
        self.hire_date = hire_date

    @classmethod
    def create(
        cls,
        *,
        user_id: UUID,
        roles: Iterable[Role | str],
        department: str | None = None,
        employee_code: str | None = None,
        hire_date: date | None = None,
    ) -> "InternalProfile":
        if user_id is None:
            raise InvalidUserDataError("El ID de usuario es requerido")
        return cls(
            user_id=user_id,
            roles=validate_system_roles(roles),
            department=department or None,
            employee_code=employee_code or None,
            hire_date=hire_date,
        )

    @property
    def roles(self) -> tuple[Role, ...]:
        return tuple(self._roles)

    @property
    def primary_role(self) -> Role:
        return self._roles[0]

    def has_role(self, role: Role) -> bool:
        return role in self._roles

    def has_any_role(self, *roles: Role) -> bool:
        return any(role in self._roles for role in roles)

    def has_all_roles(self, *roles: Role) -> bool:
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

    def update_roles(self, roles: Iterable[Role | str]) -> None:
        self._roles = validate_system_roles(roles)
        self.touch()

    def update_profile(self, **changes: Any) -> None:
        """Set any of department, employee_code, hire_date; omitted keys are kept."""
        unknown = set(changes) - self.PROFILE_FIELDS
        if unknown:
            raise InvalidUserDataError(
                f"Campos no actualizables: {', '.join(sorted(unknown))}"
            )
        for name, value in changes.items():
            setattr(self, name, value)
        self.touch()
