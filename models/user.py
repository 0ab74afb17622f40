"""
models/user.py
--------------
Domain model for platform users and their role assignments.

A role assignment is one of three shapes:
    DinerRole        - no scoping object.
    FranchiseeRole   - scoped to one franchise.
    AdminRole        - global, no scoping object.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class Role(str, Enum):
    DINER = "diner"
    FRANCHISEE = "franchisee"
    ADMIN = "admin"


@dataclass(frozen=True)
class DinerRole:
    kind: Role = field(default=Role.DINER, init=False)


@dataclass(frozen=True)
class FranchiseeRole:
    """
    Franchise-scoped role.

    Attributes:
        object_id: Primary key of the franchise, once resolved.
        franchise: Franchise name supplied by a caller creating the user;
            resolved to `object_id` before the role row is written.
    """
    object_id: Optional[int] = None
    franchise: Optional[str] = None
    kind: Role = field(default=Role.FRANCHISEE, init=False)


@dataclass(frozen=True)
class AdminRole:
    kind: Role = field(default=Role.ADMIN, init=False)


RoleAssignment = Union[DinerRole, FranchiseeRole, AdminRole]


def role_from_row(role: str, object_id: Optional[int]) -> RoleAssignment:
    """Build a role assignment from a `user_role` row."""
    kind = Role(role)
    if kind is Role.FRANCHISEE:
        return FranchiseeRole(object_id=object_id)
    if kind is Role.ADMIN:
        return AdminRole()
    return DinerRole()


@dataclass
class User:
    """
    A registered user as seen outside the data layer.

    Has no password attribute; digests never leave the database.
    """
    name: str
    email: str
    roles: list[RoleAssignment] = field(default_factory=list)
    id: Optional[int] = None

    def is_role(self, role: Role) -> bool:
        """Returns True if any assignment has the given kind."""
        return any(r.kind is role for r in self.roles)
