"""
repositories/order_repo.py
---------------------------
Data access layer for diner orders and their line items.
All SQL queries related to the `diner_order` and `order_item` tables live here.
"""

from psycopg2 import extras

from config import DB_LIST_PER_PAGE
from db.connection import connection
from db.lookup import get_id
from db.pagination import get_offset
from db.transaction import transaction
from models.order import Order, OrderItem, OrderPage
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


class OrderRepository:
    """Repository for creating and listing diner orders."""

    # ── CREATE ────────────────────────────────────────────

    def add_diner_order(self, user: User, order: Order) -> Order:
        """
        Insert an order and its items, in the order the items were given.

        Every item's `menu_id` must reference an existing menu row.

        Returns:
            The same Order with `id` and server-assigned `date` populated.

        Raises:
            NotFound: If an item references an unknown menu id.
        """
        with connection() as conn, transaction(conn):
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(
                    """
                    INSERT INTO diner_order (diner_id, franchise_id, store_id, date)
                    VALUES (%s, %s, %s, now())
                    RETURNING id, date;
                    """,
                    (user.id, order.franchise_id, order.store_id),
                )
                row = cur.fetchone()
            order.id = row["id"]
            order.date = row["date"]
            for item in order.items:
                menu_id = get_id(conn, "id", item.menu_id, "menu")
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO order_item (order_id, menu_id, description, price)
                        VALUES (%s, %s, %s, %s);
                        """,
                        (order.id, menu_id, item.description, item.price),
                    )
        logger.info(f"Added order #{order.id} with {len(order.items)} item(s) for user {user.id}")
        return order

    # ── READ ──────────────────────────────────────────────

    def get_orders(
        self, user: User, page: int = 1, per_page: int = DB_LIST_PER_PAGE
    ) -> OrderPage:
        """
        Fetch one page of a diner's orders, each with its line items.

        Args:
            user: The diner.
            page: 1-based page number.
            per_page: Page size.
        """
        offset = get_offset(page, per_page)
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(
                    """
                    SELECT id, franchise_id, store_id, date FROM diner_order
                    WHERE diner_id = %s
                    ORDER BY id
                    LIMIT %s OFFSET %s;
                    """,
                    (user.id, per_page, offset),
                )
                orders = [
                    Order(
                        id=r["id"],
                        franchise_id=r["franchise_id"],
                        store_id=r["store_id"],
                        date=r["date"],
                    )
                    for r in cur.fetchall()
                ]
                for order in orders:
                    cur.execute(
                        "SELECT id, menu_id, description, price FROM order_item WHERE order_id = %s;",
                        (order.id,),
                    )
                    order.items = [
                        OrderItem(
                            id=i["id"],
                            menu_id=i["menu_id"],
                            description=i["description"],
                            price=float(i["price"]),
                        )
                        for i in cur.fetchall()
                    ]
        return OrderPage(diner_id=user.id, orders=orders, page=page)
