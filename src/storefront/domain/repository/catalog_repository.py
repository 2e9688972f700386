"""Abstract repositories for catalog-side records.

One method per query shape the storefront actually issues.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.catalog import (
    ProductVariant,
    Review,
    ShippingMethod,
    ShippingZone,
    WishlistItem,
    WishlistOwner,
)
from storefront.domain.model.payment import PaymentMethod


class ProductVariantRepository(ABC):

    @abstractmethod
    def list_for_product(self, product_id: str) -> list[ProductVariant]:
        """Return the variants of a product in creation order."""


class ShippingMethodRepository(ABC):

    @abstractmethod
    def get_by_id(self, method_id: str) -> ShippingMethod | None:
        """Return a shipping method by ID, or None."""

    @abstractmethod
    def list_active(self) -> list[ShippingMethod]:
        """Return active shipping methods in display order."""


class ShippingZoneRepository(ABC):

    @abstractmethod
    def list_active(self) -> list[ShippingZone]:
        """Return active shipping zones in display order."""


class PaymentMethodRepository(ABC):

    @abstractmethod
    def get_by_id(self, method_id: str) -> PaymentMethod | None:
        """Return a payment method by ID, or None."""

    @abstractmethod
    def list_enabled(self) -> list[PaymentMethod]:
        """Return enabled payment methods in display order."""


class ReviewRepository(ABC):

    @abstractmethod
    def get_by_id(self, review_id: str) -> Review | None:
        """Return a review by ID, or None."""

    @abstractmethod
    def list_for_product(self, product_id: str, approved_only: bool) -> list[Review]:
        """Return a product's reviews, newest first."""

    @abstractmethod
    def save(self, review: Review) -> None:
        """Persist a new or updated review."""


class WishlistRepository(ABC):

    @abstractmethod
    def list_for_owner(self, owner: WishlistOwner) -> list[WishlistItem]:
        """Return everything on the owner's wishlist."""

    @abstractmethod
    def add(self, owner: WishlistOwner, product_id: str) -> WishlistItem:
        """Add a product to the owner's wishlist."""

    @abstractmethod
    def remove(self, owner: WishlistOwner, product_id: str) -> None:
        """Remove a product from the owner's wishlist."""
