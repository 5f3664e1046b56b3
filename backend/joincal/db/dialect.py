"""
Dialect-aware "insert unless it already exists".

PostgreSQL and SQLite get a native INSERT ... ON CONFLICT DO NOTHING, so the
existence check and the write are one statement. Other backends fall back to a
plain INSERT inside a savepoint and treat a unique-constraint violation as "already there".
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from sqlalchemy import insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_ON_CONFLICT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def insert_ignore(db: Session, model: Any, values: dict[str, Any], index_elements: Sequence[str]) -> bool:
    """
    Insert one row unless a row with the same index_elements exists.
    Returns True when a row was written. Does not commit.
    """
    dialect = db.get_bind().dialect.name
    dialect_insert = _ON_CONFLICT_INSERTS.get(dialect)
    if dialect_insert is not None:
        stmt = dialect_insert(model).values(**values).on_conflict_do_nothing(index_elements=list(index_elements))
        result = db.execute(stmt)
        return bool(result.rowcount)

    try:
        with db.begin_nested():
            db.execute(insert(model).values(**values))
    except IntegrityError as e:
        logger.debug("insert_ignore(%s): row exists on %s (%s)", model.__tablename__, dialect, e.orig)
        return False
    return True
