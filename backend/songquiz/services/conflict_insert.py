"""Conflict-aware INSERT — upserts that survive concurrent identical requests.

Invariants:
    - Only PostgreSQL (production) and SQLite (tests) are supported; any other
      dialect raises RuntimeError instead of silently losing the ON CONFLICT
    - Statements target the Core Table, so rowcount reports 1 for a fresh row
      and 0 for a skipped duplicate

Design Decisions:
    - ON CONFLICT over check-then-insert: two simultaneous joins by one user
      both pass the "not yet a member" read, and the unique index decides
"""

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def conflict_insert(db: AsyncSession, table: Table):
    """INSERT for table in db's dialect, with on_conflict_do_* available."""
    dialect = db.get_bind().dialect.name
    try:
        return _INSERTS[dialect](table)
    except KeyError:
        raise RuntimeError(f"No ON CONFLICT insert for dialect {dialect!r}") from None
