"""Organizations Unit of Work."""

from collections.abc import Callable

from sqlalchemy.exc import IntegrityError

from auditoria.core.errors import AuditoriaError
from auditoria.core.infrastructure.integrity import parse_unique_violation
from auditoria.core.infrastructure.unit_of_work import SqlUnitOfWork
from auditoria.modules.organizations.domain.errors import DuplicateOrganizationError
from auditoria.modules.organizations.infrastructure.repositories import (
    SqlOrganizationRepository,
)

_UNIQUE_COLUMNS = ("name", "tax_id")


class OrganizationsUnitOfWork(SqlUnitOfWork):
    organizations: SqlOrganizationRepository

    def _init_repositories(self) -> None:
        self.organizations = SqlOrganizationRepository(self.session)

    def translate_integrity_error(self, error: IntegrityError) -> AuditoriaError | None:
        violation = parse_unique_violation(error)
        if violation is None or violation.table not in (None, "organizations"):
            return None
        if violation.column not in _UNIQUE_COLUMNS:
            return None
        return DuplicateOrganizationError(violation.column, violation.value)


OrganizationsUnitOfWorkFactory = Callable[[], OrganizationsUnitOfWork]


__all__ = ["OrganizationsUnitOfWork", "OrganizationsUnitOfWorkFactory"]
