"""
security/passwords.py
---------------------
One-way password hashing with bcrypt (cost factor 10).
"""

from passlib.context import CryptContext

BCRYPT_ROUNDS = 10

_pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Return a salted bcrypt digest of `password`."""
    return _pwd_context.hash(password)


def verify_password(password: str, digest: str | None) -> bool:
    """
    Check `password` against a stored digest.

    Returns False for an empty or unrecognized digest instead of raising.
    """
    if not digest:
        return False
    try:
        return _pwd_context.verify(password, digest)
    except ValueError:
        return False
