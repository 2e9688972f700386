"""Integration tests for the ValidateCoupon use case."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from storefront.application.validate_coupon import ValidateCouponHandler
from storefront.domain.exceptions import CouponUsageLimitError, ValidationError
from storefront.domain.model.coupon import Coupon, DiscountType
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCouponRepository

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _handler(*coupons: Coupon) -> ValidateCouponHandler:
    return ValidateCouponHandler(FakeCouponRepository(list(coupons)), clock=lambda: NOW)


def _save10(**overrides) -> Coupon:
    fields = dict(
        id=None,
        code="SAVE10",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=Decimal("10"),
        min_order_amount=Money.of("500"),
        starts_at=NOW - timedelta(days=1),
        max_uses=100,
        used_count=99,
    )
    fields.update(overrides)
    return Coupon(**fields)


class TestValidateCoupon:

    def test_code_is_case_insensitive(self):
        dto = _handler(_save10()).handle(" save10 ", Money.of("1000"))
        assert dto.valid
        assert dto.code == "SAVE10"
        assert dto.discount_amount == "৳100.00"
        assert dto.waives_shipping is False

    def test_blank_code(self):
        with pytest.raises(ValidationError, match="Please enter a coupon code"):
            _handler().handle("   ", Money.of("1000"))

    def test_unknown_code(self):
        with pytest.raises(ValidationError, match="Invalid coupon code"):
            _handler(_save10()).handle("SAVE20", Money.of("1000"))

    def test_inactive_coupon_is_invalid(self):
        with pytest.raises(ValidationError, match="Invalid coupon code"):
            _handler(_save10(is_active=False)).handle("SAVE10", Money.of("1000"))

    def test_usage_limit(self):
        with pytest.raises(CouponUsageLimitError):
            _handler(_save10(used_count=100)).handle("SAVE10", Money.of("1000"))
