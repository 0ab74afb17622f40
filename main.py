"""
main.py
-------
Entry point that prepares the database for the pizza service.

Responsibilities:
    - Initialize the database connection pool.
    - Create the schema.
    - Seed the default admin on a fresh database.
"""

from db.connection import close_pool, init_pool
from db.init_db import create_tables, seed_default_admin
from utils.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Initialize the database and exit."""
    logger.info("Initializing database...")
    init_pool()
    try:
        create_tables()
        if seed_default_admin():
            logger.info("Default admin created.")
        else:
            logger.info("Admin already present, nothing seeded.")
    finally:
        close_pool()
    logger.info("Database ready.")


if __name__ == "__main__":
    main()
