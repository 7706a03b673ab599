"""
Identity Unit of Work

One transaction over users, profiles, sessions and the authorization catalog.
Organizations are readable here so external users can be attached to an
existing organization in the same transaction.
"""

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError

from auditoria.core.errors import AuditoriaError
from auditoria.core.infrastructure.integrity import parse_unique_violation
from auditoria.core.infrastructure.unit_of_work import SqlUnitOfWork
from auditoria.core.logging import get_logger
from auditoria.modules.identity.domain.errors import (
    DuplicateCiError,
    DuplicateEmailError,
    DuplicateUsernameError,
)
from auditoria.modules.identity.infrastructure.repositories import (
    SqlExternalProfileRepository,
    SqlInternalProfileRepository,
    SqlMenuRepository,
    SqlPermissionRepository,
    SqlRoleRepository,
    SqlSessionRepository,
    SqlUserRepository,
)
from auditoria.modules.organizations.infrastructure.repositories import (
    SqlOrganizationRepository,
)

logger = get_logger(__name__)

_USER_DUPLICATES = {
    "email": DuplicateEmailError,
    "username": DuplicateUsernameError,
    "ci": DuplicateCiError,
}


class IdentityUnitOfWork(SqlUnitOfWork):
    users: SqlUserRepository
    sessions: SqlSessionRepository
    internal_profiles: SqlInternalProfileRepository
    external_profiles: SqlExternalProfileRepository
    permissions: SqlPermissionRepository
    roles: SqlRoleRepository
    menus: SqlMenuRepository
    organizations: SqlOrganizationRepository

    def _init_repositories(self) -> None:
        self.users = SqlUserRepository(self.session)
        self.sessions = SqlSessionRepository(self.session)
        self.internal_profiles = SqlInternalProfileRepository(self.session)
        self.external_profiles = SqlExternalProfileRepository(self.session)
        self.permissions = SqlPermissionRepository(self.session)
        self.roles = SqlRoleRepository(self.session)
        self.menus = SqlMenuRepository(self.session)
        self.organizations = SqlOrganizationRepository(self.session)

    def translate_integrity_error(self, error: IntegrityError) -> AuditoriaError | None:
        violation = parse_unique_violation(error)
        if violation is None or violation.table not in (None, "users"):
            return None

        error_class = _USER_DUPLICATES.get(violation.column)
        if error_class is None:
            return None

        logger.info(
            "Unique constraint violated on commit",
            table="users",
            column=violation.column,
        )
        return error_class(violation.value)


IdentityUnitOfWorkFactory = Callable[[], IdentityUnitOfWork]


__all__ = ["IdentityUnitOfWork", "IdentityUnitOfWorkFactory"]
