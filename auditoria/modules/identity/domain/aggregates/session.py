"""
Session Aggregate

An authenticated login of a user, bound to a refresh token and the role the
user is currently acting as. Token issuance lives outside the domain.
"""

from datetime import datetime
from uuid import UUID

from auditoria.core.domain.base import AggregateRoot, ensure_utc, utc_now
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.errors import InvalidSessionDataError
from auditoria.modules.identity.domain.events import (
    SessionCreated,
    SessionInvalidated,
    SessionRoleSwitched,
)


def _parse_role(value: Role | str | None) -> Role:
    if value is None or value == "":
        raise InvalidSessionDataError("El rol activo es requerido", field="current_role")
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip().lower())
    except ValueError as e:
        raise InvalidSessionDataError(f"Rol inválido: {value}", field="current_role") from e


class Session(AggregateRoot):
    def __init__(
        self,
        *,
        user_id: UUID,
        refresh_token: str,
        current_role: Role,
        expires_at: datetime,
        ip_address: str | None = None,
        user_agent: str | None = None,
        is_active: bool = True,
        last_used_at: datetime | None = None,
        entity_id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        super().__init__(entity_id, created_at, updated_at, deleted_at)
        self.user_id = user_id
        self.refresh_token = refresh_token
        self.current_role = current_role
        self.expires_at = ensure_utc(expires_at)
        self.ip_address = ip_address
        self.user_agent = user_agent
        self.is_active = is_active
        self.last_used_at = ensure_utc(last_used_at)

    @classmethod
    def create(
        cls,
        *,
        user_id: UUID | None,
        refresh_token: str | None,
        current_role: Role | str | None,
        expires_at: datetime | None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> "Session":
        """Open an active session and emit ``SessionCreated``."""
        if user_id is None:
            raise InvalidSessionDataError("El ID de usuario es requerido", field="user_id")
        if not refresh_token or not refresh_token.strip():
            raise InvalidSessionDataError(
                "El refresh token es requerido", field="refresh_token"
            )
        role = _parse_role(current_role)
        expires_at = ensure_utc(expires_at)
        if expires_at is None or expires_at <= utc_now():
            raise InvalidSessionDataError(
                "La fecha de expiración debe ser futura", field="expires_at"
            )

        now = utc_now()
        session = cls(
            user_id=user_id,
            refresh_token=refresh_token,
            current_role=role,
            expires_at=expires_at,
            ip_address=ip_address or None,
            user_agent=user_agent or None,
            is_active=True,
            last_used_at=now,
            created_at=now,
        )
        session.add_domain_event(
            SessionCreated(
                aggregate_id=session.id,
                user_id=user_id,
                role=role.value,
                ip_address=session.ip_address,
            )
        )
        return session

    @property
    def is_expired(self) -> bool:
        return self.expires_at < utc_now()

    @property
    def is_valid(self) -> bool:
        return self.is_active and not self.is_expired

    def belongs_to(self, user_id: UUID) -> bool:
        return self.user_id == user_id

    def invalidate(self) -> None:
        self.is_active = False
        self.touch()
        self.add_domain_event(SessionInvalidated(aggregate_id=self.id, user_id=self.user_id))

    def update_last_used(self) -> None:
        self.last_used_at = utc_now()
        self.touch()

    def switch_role(self, new_role: Role | str) -> None:
        role = _parse_role(new_role)
        previous = self.current_role
        self.current_role = role
        self.touch()
        self.add_domain_event(
            SessionRoleSwitched(
                aggregate_id=self.id,
                user_id=self.user_id,
                previous_role=previous.value,
                new_role=role.value,
            )
        )

    def update_refresh_token(self, new_token: str, new_expires_at: datetime) -> None:
        if not new_token or not new_token.strip():
            raise InvalidSessionDataError(
                "El nuevo refresh token es requerido", field="refresh_token"
            )
        new_expires_at = ensure_utc(new_expires_at)
        if new_expires_at is None or new_expires_at <= utc_now():
            raise InvalidSessionDataError(
                "La nueva fecha de expiración debe ser futura", field="expires_at"
            )
        self.refresh_token = new_token
        self.expires_at = new_expires_at
        self.touch()
