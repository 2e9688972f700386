"""Application service: Validate Coupon use case (query).

Looks the code up among active coupons and evaluates it against the
cart subtotal. Nothing is written; usage is counted only after the
order is placed.
"""

from __future__ import annotations

from storefront.application.clock import Clock, utc_now
from storefront.application.dto import CouponDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.coupon import CouponEvaluation, normalize_code
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.coupon_repository import CouponRepository


class ValidateCouponHandler:

    def __init__(self, coupon_repo: CouponRepository, clock: Clock = utc_now) -> None:
        self._coupon_repo = coupon_repo
        self._clock = clock

    def handle(self, code: str, subtotal: Money) -> CouponDTO:
        return CouponDTO.from_evaluation(self.evaluate(code, subtotal))

    def evaluate(self, code: str, subtotal: Money) -> CouponEvaluation:
        """Return the evaluation, raising ValidationError when it fails."""
        normalized = normalize_code(code or "")
        if not normalized:
            raise ValidationError("Please enter a coupon code")

        coupon = self._coupon_repo.get_active_by_code(normalized)
        if coupon is None:
            raise ValidationError("Invalid coupon code")

        return coupon.evaluate(subtotal, self._clock())
