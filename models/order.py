"""
models/order.py
---------------
Domain models for diner orders and their line items.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class OrderItem:
    """One pizza on an order. `price` is frozen at order time."""
    menu_id: int
    description: str
    price: float
    id: Optional[int] = None


@dataclass
class Order:
    """
    A diner's order.

    Attributes:
        franchise_id: Franchise the order was placed with.
        store_id: Store fulfilling the order.
        items: Line items, in the order the diner gave them.
        id: Database primary key (None for new records).
        date: Set by the database when the order is inserted.
    """
    franchise_id: int
    store_id: int
    items: list[OrderItem] = field(default_factory=list)
    id: Optional[int] = None
    date: Optional[datetime] = None


@dataclass
class OrderPage:
    """One page of a diner's order history."""
    diner_id: int
    orders: list[Order]
    page: int
