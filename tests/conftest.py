"""tests/conftest.py – shared fixtures: a mocked psycopg2 connection and cursor."""
from unittest.mock import MagicMock, patch

import pytest

from models.user import DinerRole, User


@pytest.fixture
def release():
    """Patched pool release; every repository call must hit it exactly once."""
    with patch("db.connection.release_connection") as m:
        yield m


@pytest.fixture
def conn(release):
    """A fake connection handed out by `db.connection.get_connection`."""
    connection = MagicMock(name="connection")
    connection.autocommit = False
    with patch("db.connection.get_connection", return_value=connection):
        yield connection


@pytest.fixture
def cur(conn):
    """The cursor every `conn.cursor(...)` context manager yields."""
    return conn.cursor.return_value.__enter__.return_value


@pytest.fixture
def executed(cur):
    """Return the statements run on `cur` as (whitespace-normalized sql, params)."""
    def _executed() -> list[tuple]:
        calls = []
        for c in cur.execute.call_args_list:
            query = c.args[0]
            params = c.args[1] if len(c.args) > 1 else None
            text = " ".join(query.split()) if isinstance(query, str) else "<lookup>"
            calls.append((text, params))
        return calls
    return _executed


@pytest.fixture
def diner() -> User:
    return User(id=1, name="Diner", email="d@jwt.com", roles=[DinerRole()])
