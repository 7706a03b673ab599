"""Unique-constraint violation parsing.

Drivers report the violated constraint differently:

- SQLite: ``UNIQUE constraint failed: users.email``
- PostgreSQL: ``duplicate key value violates unique constraint "ix_users_email"``
  followed by ``DETAIL:  Key (email)=(ana@example.com) already exists.``
"""

import re
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (\w+)\.(\w+)")
_POSTGRES_DETAIL = re.compile(r"Key \((?:lower\()?(\w+)\)?\)=\((.*?)\) already exists")
_POSTGRES_CONSTRAINT = re.compile(r'unique constraint "(?:ix_|uq_)?(\w+?)_(\w+?)(?:_key)?"')
_FOREIGN_KEY = re.compile(
    r"FOREIGN KEY constraint failed|violates foreign key constraint", re.IGNORECASE
)


@dataclass(frozen=True)
class UniqueViolation:
    table: str | None
    column: str
    value: str | None = None


def is_foreign_key_violation(error: IntegrityError) -> bool:
    message = str(error.orig) if error.orig is not None else str(error)
    return _FOREIGN_KEY.search(message) is not None


def parse_unique_violation(error: IntegrityError) -> UniqueViolation | None:
    """Return the violated table/column (and value when reported), or None."""
    message = str(error.orig) if error.orig is not None else str(error)

    match = _SQLITE_UNIQUE.search(message)
    if match:
        return UniqueViolation(table=match.group(1), column=match.group(2))

    detail = _POSTGRES_DETAIL.search(message)
    constraint = _POSTGRES_CONSTRAINT.search(message)
    if detail:
        table = constraint.group(1) if constraint else None
        return UniqueViolation(table=table, column=detail.group(1), value=detail.group(2))
    if constraint:
        return UniqueViolation(table=constraint.group(1), column=constraint.group(2))
    return None


__all__ = ["UniqueViolation", "is_foreign_key_violation", "parse_unique_violation"]
