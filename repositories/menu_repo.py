"""
repositories/menu_repo.py
--------------------------
Data access layer for the pizza menu.
"""

from psycopg2 import extras

from db.connection import connection
from models.menu import MenuItem
from utils.logger import get_logger

logger = get_logger(__name__)


class MenuRepository:
    """Repository for the menu table. The catalog is small, so nothing is paginated."""

    def get_menu(self) -> list[MenuItem]:
        """Return every menu item."""
        sql = "SELECT id, title, description, image, price FROM menu;"
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql)
                return [self._row_to_item(r) for r in cur.fetchall()]

    def add_menu_item(self, item: MenuItem) -> MenuItem:
        """
        Insert a menu item.

        Returns:
            The same MenuItem with its `id` populated.
        """
        sql = """
            INSERT INTO menu (title, description, image, price)
            VALUES (%s, %s, %s, %s)
            RETURNING id;
        """
        with connection() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (item.title, item.description, item.image, item.price))
                item.id = cur.fetchone()["id"]
            conn.commit()
        logger.info(f"Added menu item '{item.title}' #{item.id}")
        return item

    @staticmethod
    def _row_to_item(row: dict) -> MenuItem:
        return MenuItem(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            image=row["image"],
            price=float(row["price"]),
        )
