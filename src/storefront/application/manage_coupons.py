"""Application services: coupon administration.

Create, revise, delete and count usage of coupons. Codes are always
stored upper-cased so lookups at checkout are case-insensitive.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.coupon import Coupon, DiscountType
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.coupon_repository import CouponRepository


class CreateCouponHandler:

    def __init__(self, coupon_repo: CouponRepository, currency: str = DEFAULT_CURRENCY) -> None:
        self._coupon_repo = coupon_repo
        self._currency = currency

    def handle(
        self,
        code: str,
        discount_type: str,
        discount_value: str,
        min_order_amount: str = "0",
        max_uses: int | None = None,
        starts_at: datetime | None = None,
        expires_at: datetime | None = None,
        description: str | None = None,
    ) -> Coupon:
        try:
            kind = DiscountType(discount_type)
        except ValueError as exc:
            raise ValidationError(f"Unknown discount type: {discount_type!r}") from exc

        coupon = Coupon.create(
            code=code,
            discount_type=kind,
            discount_value=Money.of(discount_value).amount,
            min_order_amount=Money.of(min_order_amount, self._currency),
            starts_at=starts_at,
            max_uses=max_uses,
            expires_at=expires_at,
            description=description,
        )

        if self._coupon_repo.get_active_by_code(coupon.code) is not None:
            raise ValidationError(f"Coupon '{coupon.code}' already exists")

        self._coupon_repo.save(coupon)
        return coupon


class UpdateCouponHandler:

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def handle(self, coupon_id: str, **changes) -> Coupon:
        """Apply field changes (e.g. ``is_active=False``) to a coupon."""
        coupon = self._coupon_repo.get_by_id(coupon_id)
        if coupon is None:
            raise EntityNotFoundError(f"Coupon '{coupon_id}' not found")

        if "discount_value" in changes:
            changes["discount_value"] = Decimal(str(changes["discount_value"]))
        if "min_order_amount" in changes:
            changes["min_order_amount"] = Money.of(
                changes["min_order_amount"], coupon.min_order_amount.currency
            )

        revised = coupon.revise(**changes)
        self._coupon_repo.save(revised)
        return revised


class DeleteCouponHandler:

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def handle(self, coupon_id: str) -> None:
        if self._coupon_repo.get_by_id(coupon_id) is None:
            raise EntityNotFoundError(f"Coupon '{coupon_id}' not found")
        self._coupon_repo.delete(coupon_id)


class IncrementCouponUsageHandler:
    """Counts one use of a coupon after an order went through.

    A coupon that has disappeared in the meantime is ignored.
    """

    def __init__(self, coupon_repo: CouponRepository) -> None:
        self._coupon_repo = coupon_repo

    def handle(self, coupon_id: str) -> None:
        coupon = self._coupon_repo.get_by_id(coupon_id)
        if coupon is None:
            return
        coupon.record_use()
        self._coupon_repo.save(coupon)
