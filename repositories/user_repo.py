"""
repositories/user_repo.py
--------------------------
Data access layer for users and their role assignments.
Password digests are written and compared here and never returned.
"""

from typing import Iterable, Optional

from psycopg2 import extras

from config import DB_LIST_PER_PAGE
from db.connection import connection
from db.lookup import get_id
from db.pagination import get_offset
from db.transaction import transaction
from models.user import FranchiseeRole, RoleAssignment, User, role_from_row
from security.passwords import hash_password, verify_password
from utils.errors import InvalidCredentials, NotFound
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for CRUD operations on the users and user_role tables."""

    # ── CREATE ────────────────────────────────────────────

    def add_user(
        self, name: str, email: str, password: str, roles: Iterable[RoleAssignment]
    ) -> User:
        """
        Insert a user and one user_role row per assignment.

        Franchisee assignments are resolved against the franchise table
        first, by name or by id; the franchise must already exist.

        Returns:
            The created User with `id` populated and roles as stored.

        Raises:
            NotFound: If a franchisee role references an unknown franchise.
        """
        digest = hash_password(password)
        stored_roles: list[RoleAssignment] = []
        with connection() as conn, transaction(conn):
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(
                    "INSERT INTO users (name, email, password) VALUES (%s, %s, %s) RETURNING id;",
                    (name, email, digest),
                )
                user_id = cur.fetchone()["id"]
            for role in roles:
                object_id = None
                if isinstance(role, FranchiseeRole):
                    if role.object_id is None:
                        object_id = get_id(conn, "name", role.franchise, "franchise")
                    else:
                        object_id = get_id(conn, "id", role.object_id, "franchise")
                    role = FranchiseeRole(object_id=object_id)
                with conn.cursor() as cur:
                    cur.execute(
                        "INSERT INTO user_role (user_id, role, object_id) VALUES (%s, %s, %s);",
                        (user_id, role.kind.value, object_id),
                    )
                stored_roles.append(role)
        logger.info(f"Added user #{user_id} with {len(stored_roles)} role(s)")
        return User(id=user_id, name=name, email=email, roles=stored_roles)

    # ── READ ──────────────────────────────────────────────

    def get_user(self, email: str, password: str) -> User:
        """
        Authenticate and load a user with their roles.

        Raises:
            InvalidCredentials: Unknown email or wrong password.
        """
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute("SELECT * FROM users WHERE email = %s;", (email,))
                row = cur.fetchone()
                if not row or not verify_password(password, row["password"]):
                    raise InvalidCredentials()
                roles = self._fetch_roles(cur, row["id"])
        return User(id=row["id"], name=row["name"], email=row["email"], roles=roles)

    def get_user_by_id(self, user_id: int) -> User:
        """Load a user and their roles without checking a password."""
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute("SELECT id, name, email FROM users WHERE id = %s;", (user_id,))
                row = cur.fetchone()
                if not row:
                    raise NotFound(f"unknown user {user_id}")
                roles = self._fetch_roles(cur, user_id)
        return User(id=row["id"], name=row["name"], email=row["email"], roles=roles)

    def list_users(self, page: int = 1, per_page: int = DB_LIST_PER_PAGE) -> list[User]:
        """One page of users ordered by id, each with their roles."""
        offset = get_offset(page, per_page)
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(
                    "SELECT id, name, email FROM users ORDER BY id LIMIT %s OFFSET %s;",
                    (per_page, offset),
                )
                rows = cur.fetchall()
                return [
                    User(id=r["id"], name=r["name"], email=r["email"],
                         roles=self._fetch_roles(cur, r["id"]))
                    for r in rows
                ]

    # ── UPDATE ────────────────────────────────────────────

    def update_user(
        self,
        user_id: int,
        email: Optional[str],
        password: Optional[str],
        old_password: str,
    ) -> User:
        """
        Change a user's email and/or password after re-checking the old password.

        Returns:
            The user re-fetched through `get_user` with the new credentials.

        Raises:
            NotFound: If the user does not exist.
            InvalidCredentials: If `old_password` does not match.
        """
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute("SELECT email, password FROM users WHERE id = %s;", (user_id,))
                row = cur.fetchone()
                if not row:
                    raise NotFound(f"unknown user {user_id}")
                if not verify_password(old_password, row["password"]):
                    raise InvalidCredentials()

                assignments, params = [], []
                if email:
                    assignments.append("email = %s")
                    params.append(email)
                if password:
                    assignments.append("password = %s")
                    params.append(hash_password(password))
                if assignments:
                    cur.execute(
                        f"UPDATE users SET {', '.join(assignments)} WHERE id = %s;",
                        (*params, user_id),
                    )
            conn.commit()
            current_email = row["email"]
        logger.info(f"Updated user #{user_id}")
        return self.get_user(email or current_email, password or old_password)

    # ── DELETE ────────────────────────────────────────────

    def delete_user(self, user_id: int) -> bool:
        """
        Delete a user together with their sessions and role assignments.

        Returns:
            True if the user row was deleted, False if it did not exist.
        """
        with connection() as conn, transaction(conn):
            with conn.cursor() as cur:
                cur.execute("DELETE FROM auth WHERE user_id = %s;", (user_id,))
                cur.execute("DELETE FROM user_role WHERE user_id = %s;", (user_id,))
                cur.execute("DELETE FROM users WHERE id = %s;", (user_id,))
                deleted = cur.rowcount > 0
        if deleted:
            logger.info(f"Deleted user #{user_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _fetch_roles(cur, user_id: int) -> list[RoleAssignment]:
        """Load every role assignment of a user using an open dict cursor."""
        cur.execute("SELECT role, object_id FROM user_role WHERE user_id = %s;", (user_id,))
        return [role_from_row(r["role"], r["object_id"]) for r in cur.fetchall()]
