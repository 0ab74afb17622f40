"""
repositories/auth_repo.py
--------------------------
Session registry. Only the token signature is stored, so the `auth` table
never holds a usable credential.
"""

from db.connection import connection
from security.tokens import get_token_signature
from utils.errors import InvalidToken
from utils.logger import get_logger

logger = get_logger(__name__)


class AuthRepository:
    """Records, checks and revokes active sessions in the auth table."""

    def login_user(self, user_id: int, token: str) -> None:
        """
        Record an active session for a user.

        Raises:
            InvalidToken: If the token has no signature segment.
            StoreError: If the insert fails.
        """
        signature = get_token_signature(token)
        if not signature:
            raise InvalidToken()
        sql = "INSERT INTO auth (token, user_id) VALUES (%s, %s);"
        with connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (signature, user_id))
            conn.commit()
        logger.info(f"Recorded session for user {user_id}")

    def is_logged_in(self, token: str) -> bool:
        """True iff a session row exists for the token's signature."""
        signature = get_token_signature(token)
        if not signature:
            return False
        sql = "SELECT user_id FROM auth WHERE token = %s;"
        with connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (signature,))
                return len(cur.fetchall()) > 0

    def logout_user(self, token: str) -> None:
        """Revoke the session. Revoking an unknown token is a no-op."""
        signature = get_token_signature(token)
        if not signature:
            return
        sql = "DELETE FROM auth WHERE token = %s;"
        with connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (signature,))
                deleted = cur.rowcount
            conn.commit()
        if deleted:
            logger.info("Revoked session.")
