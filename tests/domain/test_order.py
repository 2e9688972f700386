"""Unit tests for the Order aggregate and its business rules."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.courier import CourierStatus
from storefront.domain.model.order import (
    CustomerDetails,
    Order,
    OrderLineItem,
    OrderStatus,
    generate_order_number,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.checkout_pricing import quote_checkout

AT = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _make_item(name: str = "T-Shirt", qty: int = 1, price: str = "500.00") -> OrderLineItem:
    """Helper to build a valid line item."""
    return OrderLineItem(
        product_id="p1",
        product_name=name,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


def _customer(**overrides) -> CustomerDetails:
    fields = dict(name="Rahim", phone="01712-345678", address="House 1, Road 2", city="Dhaka")
    fields.update(overrides)
    return CustomerDetails(**fields)


def _order(**overrides) -> Order:
    items = [_make_item(qty=2)]
    quote = quote_checkout(Money.of("1000"), Money.of("60"))
    return Order.create(customer=_customer(**overrides), items=items, quote=quote)


class TestOrderCreation:

    def test_happy_path(self):
        order = _order()
        assert order.id is None  # assigned by repository
        assert order.status == OrderStatus.PENDING
        assert order.total == Decimal("1060")
        assert order.order_number.startswith("ORD-")

    @pytest.mark.parametrize(
        "field, label",
        [("name", "Customer name"), ("phone", "Phone"), ("address", "Address"), ("city", "City")],
    )
    def test_required_customer_fields(self, field, label):
        with pytest.raises(ValidationError, match=f"{label} is required"):
            _order(**{field: "  "})

    def test_empty_cart_rejected(self):
        quote = quote_checkout(Money.zero(), Money.zero())
        with pytest.raises(ValidationError, match="Cart is empty"):
            Order.create(customer=_customer(), items=[], quote=quote)

    def test_line_total(self):
        assert _make_item(qty=3, price="15.50").line_total == Money.of("46.50")


class TestOrderNumber:

    def test_last_eight_digits_of_millisecond_clock(self):
        now = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)  # 1717243200000 ms
        assert generate_order_number(now) == "ORD-43200000"


class TestCourierUpdates:

    def test_record_parcel(self):
        order = _order()
        order.record_parcel("steadfast", "TRK1", "123", "ORD-1", AT)
        assert order.courier.status is CourierStatus.CREATED
        assert order.courier.tracking_id == "TRK1"
        assert order.courier.created_at == AT

    def test_in_transit_ships_the_order(self):
        order = _order()
        order.apply_courier_status(CourierStatus.IN_TRANSIT, AT)
        assert order.status == OrderStatus.SHIPPED
        assert order.courier.updated_at == AT

    def test_delivered_delivers_the_order(self):
        order = _order()
        order.apply_courier_status(CourierStatus.DELIVERED, AT)
        assert order.status == OrderStatus.DELIVERED

    def test_pending_leaves_order_status_alone(self):
        order = _order()
        order.change_status(OrderStatus.PROCESSING)
        order.apply_courier_status(CourierStatus.PENDING, AT)
        assert order.status == OrderStatus.PROCESSING
        assert order.courier.status is CourierStatus.PENDING


class TestPhoneMatching:

    def test_full_match_ignoring_separators(self):
        assert _order().phone_matches("(01712) 345 678")

    def test_last_four_digits(self):
        assert _order().phone_matches("5678")

    def test_stored_suffix_of_given(self):
        assert _order(phone="5678").phone_matches("+8801712345678")

    def test_mismatch(self):
        assert not _order().phone_matches("01712349999")
