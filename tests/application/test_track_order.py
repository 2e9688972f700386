"""Integration tests for order tracking and admin status changes."""

from decimal import Decimal

import pytest

from storefront.application.track_order import TrackOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import EntityNotFoundError, PhoneMismatchError, ValidationError
from storefront.domain.model.order import (
    CustomerDetails,
    Order,
    OrderLineItem,
    OrderStatus,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.checkout_pricing import quote_checkout
from tests.fakes import FakeOrderRepository


def _seeded_repo() -> FakeOrderRepository:
    order = Order.create(
        customer=CustomerDetails(
            name="Rahim", phone="+880 1712-345678", address="House 1", city="Dhaka"
        ),
        items=[
            OrderLineItem(
                product_id="p1",
                product_name="T-Shirt",
                quantity=Quantity(2),
                unit_price=Money.of("450"),
            )
        ],
        quote=quote_checkout(Money.of("900"), Money.of("60")),
        order_number="ORD-12345678",
    )
    return FakeOrderRepository([order])


class TestTrackOrder:

    def test_found_with_last_four_digits(self):
        dto = TrackOrderHandler(_seeded_repo()).handle("ORD-12345678", "5678")
        assert dto.order_number == "ORD-12345678"
        assert dto.total == "৳960.00"
        assert dto.items[0].line_total == "৳900.00"

    def test_found_with_full_number(self):
        dto = TrackOrderHandler(_seeded_repo()).handle("ORD-12345678", "+8801712345678")
        assert dto.customer_name == "Rahim"

    def test_not_found(self):
        with pytest.raises(EntityNotFoundError, match="Order not found"):
            TrackOrderHandler(_seeded_repo()).handle("ORD-00000000", "5678")

    def test_phone_mismatch(self):
        with pytest.raises(PhoneMismatchError, match="does not match this order"):
            TrackOrderHandler(_seeded_repo()).handle("ORD-12345678", "01700000000")

    @pytest.mark.parametrize("number, phone", [("ORD", "5678"), ("ORD-12345678", "567")])
    def test_inputs_too_short(self, number, phone):
        with pytest.raises(ValidationError, match="Enter your order number and phone number"):
            TrackOrderHandler(_seeded_repo()).handle(number, phone)


class TestUpdateOrderStatus:

    def test_any_transition_is_allowed(self):
        repo = _seeded_repo()
        order_id = repo.list_all()[0].id
        handler = UpdateOrderStatusHandler(repo)

        handler.handle(order_id, "delivered")
        handler.handle(order_id, "processing")

        assert repo.get_by_id(order_id).status == OrderStatus.PROCESSING
        assert repo.get_by_id(order_id).total == Decimal("960")

    def test_unknown_status(self):
        with pytest.raises(ValidationError, match="Unknown order status"):
            UpdateOrderStatusHandler(_seeded_repo()).handle("order-1", "lost")

    def test_missing_order(self):
        with pytest.raises(EntityNotFoundError, match="not found"):
            UpdateOrderStatusHandler(_seeded_repo()).handle("order-99", "shipped")
