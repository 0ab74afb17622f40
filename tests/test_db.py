"""
tests/test_db.py – connection provisioning, scoped transactions, id lookup.
"""
from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from psycopg2 import pool

from db import connection as db_connection
from db.connection import connection, get_connection, init_pool
from db.lookup import get_id
from db.transaction import transaction
from utils.errors import NotFound, StoreError, StoreUnavailable


# ── connection() ───────────────────────────────────────────────────────────────

class TestConnectionScope:
    def test_releases_on_success(self, conn, release):
        with connection() as c:
            assert c is conn
        release.assert_called_once_with(conn)

    def test_driver_error_becomes_store_error(self, conn, release):
        with pytest.raises(StoreError, match="Database error") as info:
            with connection():
                raise psycopg2.Error("Database error")
        assert isinstance(info.value.__cause__, psycopg2.Error)
        conn.rollback.assert_called_once()
        release.assert_called_once_with(conn)

    def test_other_errors_pass_through_unchanged(self, conn, release):
        with pytest.raises(NotFound):
            with connection():
                raise NotFound("missing")
        release.assert_called_once_with(conn)

    def test_release_failure_does_not_mask_original(self, conn, release):
        release.side_effect = StoreError("pool refused connection")
        with pytest.raises(StoreError, match="Database error"):
            with connection():
                raise psycopg2.Error("Database error")

    def test_release_failure_alone_is_surfaced(self, conn, release):
        release.side_effect = StoreError("pool refused connection")
        with pytest.raises(StoreError, match="pool refused"):
            with connection():
                pass


class TestProvisioner:
    def test_unreachable_database(self, monkeypatch):
        monkeypatch.setattr(db_connection, "_pool", None)
        with patch.object(
            db_connection.pool, "SimpleConnectionPool",
            side_effect=psycopg2.OperationalError("could not connect"),
        ):
            with pytest.raises(StoreUnavailable):
                init_pool()
        assert db_connection._pool is None

    def test_exhausted_pool(self, monkeypatch):
        fake_pool = MagicMock()
        fake_pool.getconn.side_effect = pool.PoolError("connection pool exhausted")
        monkeypatch.setattr(db_connection, "_pool", fake_pool)
        with pytest.raises(StoreUnavailable, match="exhausted"):
            get_connection()

    def test_hands_out_pooled_connection(self, monkeypatch):
        fake_pool = MagicMock()
        monkeypatch.setattr(db_connection, "_pool", fake_pool)
        assert get_connection() is fake_pool.getconn.return_value


# ── transaction() ──────────────────────────────────────────────────────────────

class TestTransaction:
    def test_commits_on_success(self):
        conn = MagicMock(autocommit=False)
        with transaction(conn):
            pass
        conn.commit.assert_called_once()
        conn.rollback.assert_not_called()

    def test_rolls_back_on_failure(self):
        conn = MagicMock(autocommit=False)
        with pytest.raises(RuntimeError):
            with transaction(conn):
                raise RuntimeError("boom")
        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()

    def test_failed_rollback_keeps_original_error(self):
        conn = MagicMock(autocommit=False)
        conn.rollback.side_effect = psycopg2.InterfaceError("connection already closed")
        with pytest.raises(NotFound, match="franchise"):
            with transaction(conn):
                raise NotFound("franchise not found")
        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()

    def test_turns_off_autocommit(self):
        conn = MagicMock(autocommit=True)
        with transaction(conn):
            pass
        assert conn.autocommit is False


# ── get_id() ───────────────────────────────────────────────────────────────────

class TestGetId:
    def test_returns_matching_id(self, conn, cur):
        cur.fetchone.return_value = {"id": 42}
        assert get_id(conn, "name", "pizzaPocket", "franchise") == 42
        assert cur.execute.call_args.args[1] == ("pizzaPocket",)

    def test_missing_row_raises_not_found(self, conn, cur):
        cur.fetchone.return_value = None
        with pytest.raises(NotFound, match="franchise"):
            get_id(conn, "name", "nope", "franchise")
        cur.execute.assert_called_once()
