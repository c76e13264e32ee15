"""Translate database integrity errors into driver-independent signals."""
import re

from sqlalchemy import Table, UniqueConstraint
from sqlalchemy.exc import IntegrityError

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"

_SQLITE_UNIQUE_PATTERN = re.compile(r"UNIQUE constraint failed: ([\w.]+)")


def unique_violation_field(exc: IntegrityError, table: Table) -> str | None:
    """
    Return the column whose unique constraint `exc` violated, or None.

    PostgreSQL (asyncpg) reports SQLSTATE 23505 and the constraint name, which
    is mapped back to its column through the table's declared constraints.
    SQLite reports `UNIQUE constraint failed: <table>.<column>`.
    Returns None for any other kind of integrity error (e.g. foreign key).
    """
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == UNIQUE_VIOLATION_SQLSTATE:
        constraint_name = getattr(orig.__cause__, "constraint_name", None)
        message = str(orig)
        for constraint in table.constraints:
            if not isinstance(constraint, UniqueConstraint) or constraint.name is None:
                continue
            if constraint.name == constraint_name or f'"{constraint.name}"' in message:
                return next(iter(constraint.columns)).name
        return None

    match = _SQLITE_UNIQUE_PATTERN.search(str(orig))
    if match:
        qualified = match.group(1)
        table_name, _, column = qualified.rpartition(".")
        if table_name == table.name:
            return column
    return None
