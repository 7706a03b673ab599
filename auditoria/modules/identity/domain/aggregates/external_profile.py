"""External (client organization) profile, one per EXTERNAL user."""

from datetime import datetime
from typing import Any
from uuid import UUID

from auditoria.core.domain.base import AggregateRoot, ensure_utc, utc_now
from auditoria.modules.identity.domain.errors import InvalidUserDataError
from auditoria.modules.identity.domain.value_objects import Email


def _optional_email(value: str | None) -> Email | None:
    return Email.create(value) if value else None


class ExternalProfile(AggregateRoot):
    PROFILE_FIELDS = frozenset({"job_title", "department", "organizational_email"})

    def __init__(
        self,
        *,
        user_id: UUID,
        organization_id: UUID,
        job_title: str | None = None,
        department: str | None = None,
        organizational_email: Email | None = None,
        is_active: bool = True,
        joined_at: datetime | None = None,
        left_at: datetime | None = None,
        entity_id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        super().__init__(entity_id, created_at, updated_at, deleted_at)
        self.user_id = user_id
        self.organization_id = organization_id
        self.job_title = job_title
        self.department = department
        self.organizational_email = organizational_email
        self.is_active = is_active
        self.joined_at = ensure_utc(joined_at) or self.created_at
        self.left_at = ensure_utc(left_at)

    @classmethod
    def create(
        cls,
        *,
        user_id: UUID,
        organization_id: UUID,
        job_title: str | None = None,
        department: str | None = None,
        organizational_email: str | None = None,
    ) -> "ExternalProfile":
        if user_id is None:
            raise InvalidUserDataError("El ID de usuario es requerido")
        if organization_id is None:
            raise InvalidUserDataError("El ID de organización es requerido")

        return cls(
            user_id=user_id,
            organization_id=organization_id,
            job_title=job_title or None,
            department=department or None,
            organizational_email=_optional_email(organizational_email),
        )

    def activate(self) -> None:
        self.is_active = True
        self.left_at = None
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.left_at = utc_now()
        self.touch()

    def update_profile(self, **changes: Any) -> None:
        """Set any of job_title, department, organizational_email."""
        unknown = set(changes) - self.PROFILE_FIELDS
        if unknown:
            raise InvalidUserDataError(
                f"Campos no actualizables: {', '.join(sorted(unknown))}"
            )
        if "organizational_email" in changes:
            changes["organizational_email"] = _optional_email(changes["organizational_email"])
        for name, value in changes.items():
            setattr(self, name, value)
        self.touch()

    def change_organization(self, organization_id: UUID) -> None:
        if not organization_id:
            raise InvalidUserDataError("El ID de la nueva organización es requerido")
        self.organization_id = organization_id
        self.joined_at = utc_now()
        self.touch()
