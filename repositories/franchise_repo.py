"""
repositories/franchise_repo.py
-------------------------------
Data access layer for franchises and their stores.

Creating and deleting a franchise touch several tables; both run inside a
single transaction so no partial franchise is ever visible.
"""

from typing import Optional

import psycopg2
from psycopg2 import extras

from db.connection import connection
from db.transaction import transaction
from models.franchise import Franchise, FranchiseAdmin, Store
from models.user import Role, User
from utils.errors import FranchiseDeletionFailed, NotFound
from utils.logger import get_logger

logger = get_logger(__name__)

_ADMINS_SQL = """
    SELECT u.id, u.name, u.email
    FROM user_role AS ur
    JOIN users AS u ON u.id = ur.user_id
    WHERE ur.object_id = %s AND ur.role = 'franchisee';
"""

_STORES_WITH_REVENUE_SQL = """
    SELECT s.id, s.name, COALESCE(SUM(oi.price), 0) AS total_revenue
    FROM store AS s
    LEFT JOIN diner_order AS o ON o.store_id = s.id
    LEFT JOIN order_item AS oi ON oi.order_id = o.id
    WHERE s.franchise_id = %s
    GROUP BY s.id, s.name
    ORDER BY s.id;
"""


class FranchiseRepository:
    """Repository for the franchise and store tables."""

    # ── CREATE ────────────────────────────────────────────

    def create_franchise(self, franchise: Franchise) -> Franchise:
        """
        Create a franchise and make each listed admin a franchisee of it.

        Every admin is resolved by email before anything is written.

        Returns:
            The same Franchise with `id` set and admins enriched with `id` and `name`.

        Raises:
            NotFound: If an admin email has no matching user.
        """
        with connection() as conn, transaction(conn):
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                for admin in franchise.admins:
                    cur.execute("SELECT id, name FROM users WHERE email = %s;", (admin.email,))
                    row = cur.fetchone()
                    if not row:
                        raise NotFound(f"admin user must already exist: {admin.email}")
                    admin.id = row["id"]
                    admin.name = row["name"]

                cur.execute(
                    "INSERT INTO franchise (name) VALUES (%s) RETURNING id;",
                    (franchise.name,),
                )
                franchise.id = cur.fetchone()["id"]

                for admin in franchise.admins:
                    cur.execute(
                        "INSERT INTO user_role (user_id, role, object_id) VALUES (%s, %s, %s);",
                        (admin.id, Role.FRANCHISEE.value, franchise.id),
                    )
        logger.info(
            f"Created franchise '{franchise.name}' #{franchise.id} "
            f"with {len(franchise.admins)} admin(s)"
        )
        return franchise

    def create_store(self, franchise_id: int, store: Store) -> Store:
        """Insert a store under a franchise and return it with `id` populated."""
        sql = "INSERT INTO store (franchise_id, name) VALUES (%s, %s) RETURNING id;"
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (franchise_id, store.name))
                store.id = cur.fetchone()["id"]
            conn.commit()
        store.franchise_id = franchise_id
        logger.info(f"Created store '{store.name}' #{store.id} in franchise #{franchise_id}")
        return store

    # ── READ ──────────────────────────────────────────────

    def get_franchises(self, auth_user: Optional[User] = None) -> list[Franchise]:
        """
        List every franchise with its stores.

        Global admins get each franchise fully enriched (admins and store
        revenue); every other caller gets the plain store list.
        """
        is_admin = auth_user is not None and auth_user.is_role(Role.ADMIN)
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute("SELECT id, name FROM franchise ORDER BY id;")
                franchises = [Franchise(id=r["id"], name=r["name"]) for r in cur.fetchall()]
                for franchise in franchises:
                    if is_admin:
                        self._enrich(cur, franchise)
                    else:
                        cur.execute(
                            "SELECT id, name FROM store WHERE franchise_id = %s ORDER BY id;",
                            (franchise.id,),
                        )
                        franchise.stores = [
                            Store(id=s["id"], name=s["name"], franchise_id=franchise.id)
                            for s in cur.fetchall()
                        ]
        return franchises

    def get_user_franchises(self, user_id: int) -> list[Franchise]:
        """Every franchise the user is a franchisee of, fully enriched."""
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(
                    "SELECT object_id FROM user_role WHERE role = 'franchisee' AND user_id = %s;",
                    (user_id,),
                )
                franchise_ids = [r["object_id"] for r in cur.fetchall()]
                if not franchise_ids:
                    return []
                cur.execute(
                    "SELECT id, name FROM franchise WHERE id = ANY(%s) ORDER BY id;",
                    (franchise_ids,),
                )
                franchises = [Franchise(id=r["id"], name=r["name"]) for r in cur.fetchall()]
                for franchise in franchises:
                    self._enrich(cur, franchise)
        return franchises

    def get_franchise(self, franchise: Franchise) -> Franchise:
        """Attach admins and per-store revenue to a franchise that has an `id`."""
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                self._enrich(cur, franchise)
        return franchise

    # ── DELETE ────────────────────────────────────────────

    def delete_franchise(self, franchise_id: int) -> None:
        """
        Delete a franchise with its stores and role assignments, atomically.

        Raises:
            FranchiseDeletionFailed: If any statement fails. Everything is
                rolled back and the underlying error is only logged.
        """
        with connection() as conn:
            try:
                with transaction(conn):
                    with conn.cursor() as cur:
                        cur.execute("DELETE FROM store WHERE franchise_id = %s;", (franchise_id,))
                        cur.execute("DELETE FROM user_role WHERE object_id = %s;", (franchise_id,))
                        cur.execute("DELETE FROM franchise WHERE id = %s;", (franchise_id,))
            except psycopg2.Error as e:
                logger.error(f"Failed to delete franchise #{franchise_id}: {e}")
                raise FranchiseDeletionFailed() from e
        logger.info(f"Deleted franchise #{franchise_id}")

    def delete_store(self, franchise_id: int, store_id: int) -> bool:
        """
        Delete a store, scoped to its owning franchise.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM store WHERE franchise_id = %s AND id = %s;"
        with connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (franchise_id, store_id))
                deleted = cur.rowcount > 0
            conn.commit()
        if deleted:
            logger.info(f"Deleted store #{store_id} from franchise #{franchise_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _enrich(cur, franchise: Franchise) -> None:
        """Load admins and stores with revenue into `franchise` using an open dict cursor."""
        cur.execute(_ADMINS_SQL, (franchise.id,))
        franchise.admins = [
            FranchiseAdmin(id=r["id"], name=r["name"], email=r["email"])
            for r in cur.fetchall()
        ]
        cur.execute(_STORES_WITH_REVENUE_SQL, (franchise.id,))
        franchise.stores = [
            Store(
                id=r["id"],
                name=r["name"],
                franchise_id=franchise.id,
                total_revenue=float(r["total_revenue"]),
            )
            for r in cur.fetchall()
        ]
