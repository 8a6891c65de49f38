"""Dialect-specific statement helpers.

``INSERT ... ON CONFLICT`` is not part of SQLAlchemy's generic ``insert``;
it lives on the PostgreSQL and SQLite dialect constructs, which share the
same ``on_conflict_do_nothing`` / ``on_conflict_do_update`` API.
"""

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def upsert_insert(session: AsyncSession, table: Table):
    """Return an insert construct for ``table`` that supports ON CONFLICT.

    Raises
    ------
    RuntimeError
        If the session is bound to a database without ON CONFLICT support
    """
    dialect_name = session.get_bind().dialect.name
    try:
        insert = _INSERT_BY_DIALECT[dialect_name]
    except KeyError:
        msg = f"Atomic upsert is not supported for database dialect: {dialect_name}"
        raise RuntimeError(msg) from None
    return insert(table)
