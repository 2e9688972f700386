"""Integration tests for coupon administration."""

from decimal import Decimal

import pytest

from storefront.application.manage_coupons import (
    CreateCouponHandler,
    DeleteCouponHandler,
    IncrementCouponUsageHandler,
    UpdateCouponHandler,
)
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.coupon import DiscountType
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCouponRepository


class TestCreateCoupon:

    def test_creates_upper_cased_coupon(self):
        repo = FakeCouponRepository()
        coupon = CreateCouponHandler(repo).handle(
            code="eid25", discount_type="percentage", discount_value="25", min_order_amount="1000"
        )
        assert coupon.id is not None
        stored = repo.get_by_id(coupon.id)
        assert stored.code == "EID25"
        assert stored.discount_type is DiscountType.PERCENTAGE
        assert stored.min_order_amount == Money.of("1000")

    def test_uses_configured_currency(self):
        coupon = CreateCouponHandler(FakeCouponRepository(), currency="USD").handle(
            code="X", discount_type="fixed", discount_value="5", min_order_amount="20"
        )
        assert coupon.min_order_amount.currency == "USD"

    def test_unknown_type(self):
        with pytest.raises(ValidationError, match="Unknown discount type"):
            CreateCouponHandler(FakeCouponRepository()).handle(
                code="X", discount_type="bogus", discount_value="5"
            )

    def test_duplicate_code(self):
        repo = FakeCouponRepository()
        handler = CreateCouponHandler(repo)
        handler.handle(code="DUP", discount_type="fixed", discount_value="5")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle(code="dup", discount_type="fixed", discount_value="10")


class TestUpdateAndDelete:

    def _seed(self):
        repo = FakeCouponRepository()
        coupon = CreateCouponHandler(repo).handle(
            code="SALE", discount_type="fixed", discount_value="50"
        )
        return repo, coupon.id

    def test_update_fields(self):
        repo, coupon_id = self._seed()
        UpdateCouponHandler(repo).handle(coupon_id, discount_value="75", is_active=False)
        stored = repo.get_by_id(coupon_id)
        assert stored.discount_value == Decimal("75")
        assert stored.is_active is False

    def test_update_missing(self):
        with pytest.raises(EntityNotFoundError, match="not found"):
            UpdateCouponHandler(FakeCouponRepository()).handle("nope", is_active=False)

    def test_delete(self):
        repo, coupon_id = self._seed()
        DeleteCouponHandler(repo).handle(coupon_id)
        assert repo.get_by_id(coupon_id) is None

    def test_increment_usage(self):
        repo, coupon_id = self._seed()
        IncrementCouponUsageHandler(repo).handle(coupon_id)
        IncrementCouponUsageHandler(repo).handle(coupon_id)
        assert repo.get_by_id(coupon_id).used_count == 2

    def test_increment_ignores_missing_coupon(self):
        IncrementCouponUsageHandler(FakeCouponRepository()).handle("gone")
