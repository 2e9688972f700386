"""Roles, sessions and the permission flags derived from them.

Authorization itself is enforced by the backend's row-level security; the
flags here only decide what staff tooling is offered.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AppRole(Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    ORDER_HANDLER = "order_handler"
    CUSTOMER = "customer"


STAFF_ROLES = frozenset({AppRole.ADMIN, AppRole.MANAGER, AppRole.ORDER_HANDLER})


@dataclass(frozen=True)
class Permissions:
    is_admin: bool = False
    is_staff: bool = False

    @staticmethod
    def for_role(role: AppRole | None) -> Permissions:
        if role is None:
            return Permissions()
        return Permissions(is_admin=role is AppRole.ADMIN, is_staff=role in STAFF_ROLES)


@dataclass(frozen=True)
class AuthSession:
    """The part of a backend auth session the storefront cares about."""

    user_id: str
    access_token: str | None = None
    email: str | None = None
