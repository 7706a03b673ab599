"""Persistence infrastructure."""

from auditoria.core.infrastructure.repository import RepositoryError, SqlRepository
from auditoria.core.infrastructure.unit_of_work import (
    SqlUnitOfWork,
    TransactionError,
    UnitOfWorkError,
)

__all__ = [
    "RepositoryError",
    "SqlRepository",
    "SqlUnitOfWork",
    "TransactionError",
    "UnitOfWorkError",
]
