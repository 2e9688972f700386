"""Abstract repository for the Coupon aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.coupon import Coupon


class CouponRepository(ABC):

    @abstractmethod
    def get_by_id(self, coupon_id: str) -> Coupon | None:
        """Return a coupon by its ID, or None if not found."""

    @abstractmethod
    def get_active_by_code(self, code: str) -> Coupon | None:
        """Return the active coupon with this (upper-cased) code, or None."""

    @abstractmethod
    def list_all(self) -> list[Coupon]:
        """Return every coupon, newest first."""

    @abstractmethod
    def save(self, coupon: Coupon) -> None:
        """Persist a new or updated coupon."""

    @abstractmethod
    def delete(self, coupon_id: str) -> None:
        """Remove a coupon."""
