"""
db/pagination.py
----------------
LIMIT/OFFSET arithmetic shared by the paginated repository reads.
"""


def get_offset(page: int, per_page: int) -> int:
    """
    Row offset of the first entry on a 1-based page.

    Pages below 1 are read as page 1, so the offset is never negative.
    """
    return max(page - 1, 0) * per_page
