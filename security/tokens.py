"""
security/tokens.py
------------------
Derives the signature stored in the `auth` table from a session token.
"""


def get_token_signature(token: str) -> str:
    """
    Return the segment after the final dot of a ``header.payload.signature`` token.

    Tokens with fewer than three parts yield an empty string, which the
    session registry treats as "no session".
    """
    parts = (token or "").split(".")
    if len(parts) > 2:
        return parts[-1]
    return ""
