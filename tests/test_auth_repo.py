"""
tests/test_auth_repo.py – session registry backed by the auth table.
"""
from unittest.mock import patch

import psycopg2
import pytest

from repositories.auth_repo import AuthRepository
from utils.errors import InvalidToken, StoreError

TOKEN = "header.payload.signedToken"


@pytest.fixture
def repo() -> AuthRepository:
    return AuthRepository()


class TestLogin:
    def test_inserts_signature_not_token(self, repo, conn, executed):
        repo.login_user(1, TOKEN)
        assert executed() == [
            ("INSERT INTO auth (token, user_id) VALUES (%s, %s);", ("signedToken", 1)),
        ]
        conn.commit.assert_called_once()

    def test_releases_connection_when_insert_fails(self, repo, conn, cur, release):
        cur.execute.side_effect = psycopg2.Error("Database error")
        with pytest.raises(StoreError, match="Database error"):
            repo.login_user(1, TOKEN)
        release.assert_called_once_with(conn)
        conn.commit.assert_not_called()

    def test_rejects_token_without_signature(self, repo):
        with patch("repositories.auth_repo.connection") as m_connection:
            with pytest.raises(InvalidToken) as info:
                repo.login_user(1, "opaque-token")
        assert info.value.status_code == 401
        m_connection.assert_not_called()


class TestIsLoggedIn:
    def test_true_when_row_exists(self, repo, conn, cur, executed, release):
        cur.fetchall.return_value = [{"user_id": 1}]
        assert repo.is_logged_in(TOKEN) is True
        assert executed() == [
            ("SELECT user_id FROM auth WHERE token = %s;", ("signedToken",)),
        ]
        release.assert_called_once_with(conn)

    def test_false_when_no_row(self, repo, cur):
        cur.fetchall.return_value = []
        assert repo.is_logged_in(TOKEN) is False

    def test_false_for_malformed_token_without_query(self, repo, cur):
        assert repo.is_logged_in("not-a-jwt") is False
        cur.execute.assert_not_called()

    def test_query_failure_surfaces(self, repo, conn, cur, release):
        cur.execute.side_effect = psycopg2.Error("Database error")
        with pytest.raises(StoreError):
            repo.is_logged_in(TOKEN)
        release.assert_called_once_with(conn)


class TestLogout:
    def test_deletes_matching_row(self, repo, conn, executed):
        repo.logout_user(TOKEN)
        assert executed() == [("DELETE FROM auth WHERE token = %s;", ("signedToken",))]
        conn.commit.assert_called_once()

    def test_unknown_token_is_not_an_error(self, repo, cur):
        cur.rowcount = 0
        repo.logout_user("h.p.neverRecorded")

    def test_releases_connection_when_delete_fails(self, repo, conn, cur, release):
        cur.execute.side_effect = psycopg2.Error("Database error")
        with pytest.raises(StoreError):
            repo.logout_user(TOKEN)
        release.assert_called_once_with(conn)


class TestSessionLifecycle:
    """Record → active → revoke → inactive, against an in-memory auth table."""

    def test_record_check_revoke(self, repo, cur):
        table: dict[str, int] = {}
        result: list = []

        def execute(sql, params=None):
            result.clear()
            if sql.startswith("INSERT"):
                table[params[0]] = params[1]
            elif sql.startswith("SELECT"):
                if params[0] in table:
                    result.append({"user_id": table[params[0]]})
            elif sql.startswith("DELETE"):
                cur.rowcount = 1 if table.pop(params[0], None) is not None else 0

        cur.execute.side_effect = execute
        cur.fetchall.side_effect = lambda: list(result)

        repo.login_user(7, TOKEN)
        assert "signedToken" in table and TOKEN not in table
        assert repo.is_logged_in(TOKEN) is True
        repo.logout_user(TOKEN)
        assert repo.is_logged_in(TOKEN) is False
        repo.logout_user(TOKEN)
