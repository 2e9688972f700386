"""Coupon aggregate and the discount evaluation rules.

A coupon is owned and persisted by the backend; the storefront only reads
it, decides whether it applies to a cart, and bumps ``used_count`` after a
successful checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from storefront.domain.exceptions import (
    CouponExpiredError,
    CouponNotYetActiveError,
    CouponUsageLimitError,
    MinimumOrderNotMetError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    FREE_SHIPPING = "free_shipping"


@dataclass(frozen=True)
class CouponEvaluation:
    """Outcome of a successful evaluation."""

    coupon: Coupon
    discount_amount: Money
    valid: bool = True

    @property
    def waives_shipping(self) -> bool:
        return self.coupon.discount_type is DiscountType.FREE_SHIPPING


def normalize_code(code: str) -> str:
    return code.strip().upper()


@dataclass
class Coupon:
    """Aggregate root for discount codes.

    ``__init__`` does no validation so repositories can reconstitute rows
    as they are; ``Coupon.create()`` and ``revise()`` enforce the rules for
    coupons written by this application.
    """

    id: str | None
    code: str
    discount_type: DiscountType
    discount_value: Decimal
    min_order_amount: Money
    starts_at: datetime
    max_uses: int | None = None
    used_count: int = 0
    expires_at: datetime | None = None
    is_active: bool = True
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        code: str,
        discount_type: DiscountType,
        discount_value: Decimal,
        min_order_amount: Money,
        starts_at: datetime | None = None,
        max_uses: int | None = None,
        expires_at: datetime | None = None,
        description: str | None = None,
        is_active: bool = True,
    ) -> Coupon:
        coupon = Coupon(
            id=None,
            code=normalize_code(code or ""),
            discount_type=discount_type,
            discount_value=discount_value,
            min_order_amount=min_order_amount,
            starts_at=starts_at or datetime.now(timezone.utc),
            max_uses=max_uses,
            expires_at=expires_at,
            description=description,
            is_active=is_active,
        )
        coupon._check_rules()
        return coupon

    def revise(self, **changes) -> Coupon:
        """Return a copy with ``changes`` applied, re-checking the rules."""
        if "code" in changes:
            changes["code"] = normalize_code(changes["code"] or "")
        revised = replace(self, **changes)
        revised._check_rules()
        return revised

    # --- Evaluation -----------------------------------------------------------

    def evaluate(self, subtotal: Money, now: datetime) -> CouponEvaluation:
        """Decide whether the coupon applies to ``subtotal`` at ``now``.

        Checks run in a fixed order and the first failure wins:
        expiry, start date, usage cap, minimum order.
        """
        if self.expires_at is not None and self.expires_at < now:
            raise CouponExpiredError("This coupon has expired")

        if self.starts_at > now:
            raise CouponNotYetActiveError("This coupon is not yet active")

        if self.max_uses is not None and self.used_count >= self.max_uses:
            raise CouponUsageLimitError("This coupon has reached its usage limit")

        if subtotal < self.min_order_amount:
            raise MinimumOrderNotMetError(
                f"Minimum order amount is {self.min_order_amount}"
            )

        return CouponEvaluation(coupon=self, discount_amount=self.discount_for(subtotal))

    def discount_for(self, subtotal: Money) -> Money:
        if self.discount_type is DiscountType.PERCENTAGE:
            return subtotal.percent(self.discount_value)
        if self.discount_type is DiscountType.FIXED:
            # Deliberately not capped at the subtotal.
            return Money(self.discount_value, subtotal.currency)
        return Money.zero(subtotal.currency)

    def record_use(self) -> None:
        self.used_count += 1

    # --- Internal helpers -----------------------------------------------------

    def _check_rules(self) -> None:
        if not self.code:
            raise ValidationError("Coupon code is required")
        if self.discount_value < 0:
            raise ValidationError("Discount value cannot be negative")
        if (
            self.discount_type is DiscountType.PERCENTAGE
            and self.discount_value > Decimal("100")
        ):
            raise ValidationError("Percentage discount cannot exceed 100")
        if self.max_uses is not None and self.max_uses < 0:
            raise ValidationError("Max uses cannot be negative")
        if self.expires_at is not None and self.expires_at <= self.starts_at:
            raise ValidationError("Expiry date must be after the start date")
