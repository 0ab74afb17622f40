"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's SimpleConnectionPool for connection reuse; every
repository call borrows one connection through `connection()` and hands it
back before returning.
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL
from utils.errors import StoreError, StoreUnavailable
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(min_conn: int = 1, max_conn: int = 5) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Raises:
        StoreUnavailable: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, DATABASE_URL)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise StoreUnavailable(f"database unavailable: {e}") from e


def get_connection():
    """
    Get a connection from the pool, creating the pool on first use.

    Returns:
        A psycopg2 connection object.

    Raises:
        StoreUnavailable: If no connection can be handed out.
    """
    if _pool is None:
        init_pool()
    try:
        return _pool.getconn()
    except (pool.PoolError, psycopg2.OperationalError) as e:
        logger.error(f"Failed to acquire database connection: {e}")
        raise StoreUnavailable(f"database unavailable: {e}") from e


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    Args:
        conn: The psycopg2 connection to release.

    Raises:
        StoreError: If the pool refuses the connection.
    """
    if _pool is None:
        conn.close()
        return
    try:
        _pool.putconn(conn)
    except pool.PoolError as e:
        raise StoreError(f"failed to release connection: {e}") from e


def _discard(conn) -> None:
    """Roll back and release after a failure; cleanup errors are only logged."""
    try:
        conn.rollback()
    except Exception as e:
        logger.warning(f"Rollback during cleanup failed: {e}")
    try:
        release_connection(conn)
    except Exception as e:
        logger.error(f"Release during cleanup failed: {e}")


@contextmanager
def connection() -> Iterator:
    """
    Borrow a connection for the duration of one repository call.

    Driver errors raised inside the block surface as StoreError with the
    original exception chained. The connection is released on every path.
    """
    conn = get_connection()
    try:
        yield conn
    except psycopg2.Error as e:
        logger.error(f"Statement failed: {e}")
        _discard(conn)
        raise StoreError(str(e).strip() or e.__class__.__name__) from e
    except BaseException:
        _discard(conn)
        raise
    release_connection(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
