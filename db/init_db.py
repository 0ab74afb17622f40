"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist and
seeds a default admin on a fresh database.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from config import DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_NAME, DEFAULT_ADMIN_PASSWORD
from db.connection import connection
from models.user import AdminRole, Role
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users: email is the login key, password holds a bcrypt digest
CREATE TABLE IF NOT EXISTS users (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(255) NOT NULL,
    email           VARCHAR(255) UNIQUE NOT NULL,
    password        VARCHAR(255) NOT NULL
);

-- Active sessions: token holds the signature segment only
CREATE TABLE IF NOT EXISTS auth (
    token           VARCHAR(512) PRIMARY KEY,
    user_id         INT NOT NULL REFERENCES users(id) ON DELETE CASCADE
);

-- Role assignments: object_id points at a franchise for franchisees
CREATE TABLE IF NOT EXISTS user_role (
    id              SERIAL PRIMARY KEY,
    user_id         INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    role            VARCHAR(20) NOT NULL CHECK (role IN ('diner', 'franchisee', 'admin')),
    object_id       INT,
    CHECK (role <> 'diner' OR object_id IS NULL)
);

CREATE TABLE IF NOT EXISTS menu (
    id              SERIAL PRIMARY KEY,
    title           VARCHAR(255) NOT NULL,
    description     TEXT NOT NULL DEFAULT '',
    image           VARCHAR(1024) NOT NULL DEFAULT '',
    price           NUMERIC(10,4) NOT NULL CHECK (price >= 0)
);

CREATE TABLE IF NOT EXISTS franchise (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(255) UNIQUE NOT NULL
);

CREATE TABLE IF NOT EXISTS store (
    id              SERIAL PRIMARY KEY,
    franchise_id    INT NOT NULL REFERENCES franchise(id),
    name            VARCHAR(255) NOT NULL
);

-- Orders: date is assigned by the server at insert time
CREATE TABLE IF NOT EXISTS diner_order (
    id              SERIAL PRIMARY KEY,
    diner_id        INT NOT NULL REFERENCES users(id),
    franchise_id    INT NOT NULL,
    store_id        INT NOT NULL,
    date            TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Line items: price is captured when the order is placed
CREATE TABLE IF NOT EXISTS order_item (
    id              SERIAL PRIMARY KEY,
    order_id        INT NOT NULL REFERENCES diner_order(id),
    menu_id         INT NOT NULL REFERENCES menu(id),
    description     VARCHAR(255) NOT NULL,
    price           NUMERIC(10,4) NOT NULL
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_user_role_user ON user_role(user_id);
CREATE INDEX IF NOT EXISTS idx_user_role_object ON user_role(object_id);
CREATE INDEX IF NOT EXISTS idx_store_franchise ON store(franchise_id);
CREATE INDEX IF NOT EXISTS idx_diner_order_diner ON diner_order(diner_id);
CREATE INDEX IF NOT EXISTS idx_order_item_order ON order_item(order_id);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    with connection() as conn:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
    logger.info("Database schema initialized successfully.")


def seed_default_admin() -> bool:
    """
    Create the default admin user unless an admin already exists.

    Returns:
        True if the admin was created.
    """
    from repositories.user_repo import UserRepository

    with connection() as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1 FROM user_role WHERE role = %s LIMIT 1;", (Role.ADMIN.value,))
            has_admin = cur.fetchone() is not None
    if has_admin:
        return False
    user = UserRepository().add_user(
        DEFAULT_ADMIN_NAME, DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_PASSWORD, [AdminRole()]
    )
    logger.info(f"Seeded default admin {user.email} (#{user.id})")
    return True


if __name__ == "__main__":
    create_tables()
    seed_default_admin()
    print("Database schema created successfully.")
