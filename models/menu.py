"""
models/menu.py
--------------
Domain model for menu items.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class MenuItem:
    """
    A pizza on the menu.

    Attributes:
        id: Database primary key (None for new records).
        title: Display name.
        description: Short description.
        image: Image file name or URL.
        price: Non-negative unit price.
    """
    title: str
    description: str
    image: str
    price: float
    id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"price must be non-negative, got {self.price}")
