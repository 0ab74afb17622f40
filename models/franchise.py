"""
models/franchise.py
-------------------
Domain models for franchises, their stores and their admins.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class FranchiseAdmin:
    """A franchisee. Callers supply `email`; `id` and `name` are resolved."""
    email: str
    id: Optional[int] = None
    name: Optional[str] = None


@dataclass
class Store:
    name: str
    id: Optional[int] = None
    franchise_id: Optional[int] = None
    total_revenue: Optional[float] = None


@dataclass
class Franchise:
    """
    A franchise and, once enriched, its admins and stores.

    Attributes:
        name: Unique franchise name.
        admins: Users holding the franchisee role for this franchise.
        stores: Stores owned by this franchise.
        id: Database primary key (None for new records).
    """
    name: str
    admins: list[FranchiseAdmin] = field(default_factory=list)
    stores: list[Store] = field(default_factory=list)
    id: Optional[int] = None
