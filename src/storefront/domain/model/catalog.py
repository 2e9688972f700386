"""Catalog-side entities: product variants, shipping options, reviews and
wishlist entries.

These are thin records; the only rules are the variant selection helpers,
the shipping-zone lookup and review validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass
class ProductVariant:
    id: str | None
    product_id: str
    sku: str
    size: str | None = None
    color: str | None = None
    price_adjustment: Decimal = Decimal("0")
    stock: int = 0
    is_active: bool = True

    @property
    def is_selectable(self) -> bool:
        return self.stock > 0 and self.is_active

    def unit_price(self, base_price: Money) -> Money:
        return Money(base_price.amount + self.price_adjustment, base_price.currency)

    def matches(self, size: str | None, color: str | None) -> bool:
        return (not size or self.size == size) and (not color or self.color == color)


def is_available(
    variants: list[ProductVariant], size: str | None = None, color: str | None = None
) -> bool:
    """True if some selectable variant matches the (partial) choice."""
    return any(v.matches(size, color) and v.is_selectable for v in variants)


def find_variant(
    variants: list[ProductVariant], size: str | None = None, color: str | None = None
) -> ProductVariant | None:
    """First variant matching the choice; unset attributes match anything."""
    for variant in variants:
        if variant.matches(size, color):
            return variant
    return None


# ---------------------------------------------------------------------------
# Shipping
# ---------------------------------------------------------------------------


@dataclass
class ShippingMethod:
    id: str | None
    name: str
    base_rate: Money
    is_active: bool = True
    estimated_days: str | None = None
    sort_order: int = 0


@dataclass
class ShippingZone:
    id: str | None
    name: str
    cities: list[str]
    rate: Money
    delivery_days: str | None = None
    is_active: bool = True
    sort_order: int = 0

    def covers(self, city: str) -> bool:
        wanted = city.strip().lower()
        return any(c.strip().lower() == wanted for c in self.cities)


def rate_for_city(zones: list[ShippingZone], city: str) -> ShippingZone | None:
    """Zone covering ``city``; falls back to the most expensive active zone."""
    active = [z for z in zones if z.is_active]
    for zone in active:
        if zone.covers(city):
            return zone
    if not active:
        return None
    return max(active, key=lambda z: z.rate.amount)


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------

MIN_RATING = 1
MAX_RATING = 5


@dataclass
class Review:
    id: str | None
    product_id: str | None
    name: str
    rating: int
    text: str
    is_approved: bool = False
    verified_purchase: bool = False
    user_id: str | None = None
    order_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def submit(
        product_id: str,
        name: str,
        rating: int,
        text: str,
        user_id: str | None = None,
        order_id: str | None = None,
    ) -> Review:
        """New reviews wait for moderation before they are shown."""
        if not name or not name.strip():
            raise ValidationError("Name is required")
        if not text or not text.strip():
            raise ValidationError("Review text is required")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}"
            )
        return Review(
            id=None,
            product_id=product_id,
            name=name.strip(),
            rating=rating,
            text=text.strip(),
            user_id=user_id,
            order_id=order_id,
            verified_purchase=order_id is not None,
        )

    def approve(self) -> None:
        self.is_approved = True


# ---------------------------------------------------------------------------
# Wishlist
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WishlistOwner:
    """Signed-in user or anonymous browser session; exactly one is set."""

    user_id: str | None = None
    session_id: str | None = None

    def __post_init__(self) -> None:
        if bool(self.user_id) == bool(self.session_id):
            raise ValidationError("Wishlist owner needs a user id or a session id")


@dataclass(frozen=True)
class WishlistItem:
    id: str | None
    product_id: str
    owner: WishlistOwner
