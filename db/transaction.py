"""
db/transaction.py
-----------------
Scoped transaction bound to one borrowed connection.

psycopg2 opens a transaction implicitly on the first statement, so the
block either reaches `commit()` or leaves through the single `rollback()`
below. A failed rollback is logged and the error from the block is
re-raised.
"""

from contextlib import contextmanager
from typing import Iterator

from utils.logger import get_logger

logger = get_logger(__name__)


@contextmanager
def transaction(conn) -> Iterator:
    """
    Commit everything executed inside the block, or roll it all back.

    Usage:
        with connection() as conn, transaction(conn):
            ...
    """
    if conn.autocommit:
        conn.autocommit = False
    try:
        yield conn
    except BaseException:
        logger.warning("Rolling back transaction.")
        try:
            conn.rollback()
        except Exception as e:
            logger.error(f"Rollback failed: {e}")
        raise
    conn.commit()
