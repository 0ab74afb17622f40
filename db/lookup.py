"""
db/lookup.py
------------
Translates a human-readable key into a primary key for any table.
"""

from typing import Any

from psycopg2 import extras, sql

from utils.errors import NotFound


def get_id(conn, key: str, value: Any, table: str) -> int:
    """
    Return the ``id`` of the row in ``table`` whose ``key`` column equals ``value``.

    Args:
        conn: A borrowed psycopg2 connection.
        key: Column to match on (e.g. ``"name"``).
        value: Value to look for.
        table: Table to search (e.g. ``"franchise"``).

    Raises:
        NotFound: If no row matches. Missing rows are never created here.
    """
    query = sql.SQL("SELECT id FROM {} WHERE {} = %s;").format(
        sql.Identifier(table), sql.Identifier(key)
    )
    with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
        cur.execute(query, (value,))
        row = cur.fetchone()
    if not row:
        raise NotFound(f"No ID found for {table}.{key}={value!r}")
    return row["id"]
