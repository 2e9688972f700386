"""Order aggregate.

The Order is an aggregate root that owns its line items. Prices and
totals are snapshotted at checkout; later status changes come from the
admin panel or from courier tracking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.courier import CourierStatus
from storefront.domain.model.payment import PaymentStatus
from storefront.domain.model.value_objects import Money, Quantity, normalize_phone
from storefront.domain.service.checkout_pricing import CheckoutQuote


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Courier states that also move the order along. Others leave it alone.
ORDER_STATUS_FOR_COURIER = {
    CourierStatus.DELIVERED: OrderStatus.DELIVERED,
    CourierStatus.IN_TRANSIT: OrderStatus.SHIPPED,
}


@dataclass
class OrderLineItem:
    """Captures the price snapshot of a product at checkout time."""

    product_id: str | None
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at checkout
    product_image: str | None = None
    variant_id: str | None = None
    variant_info: dict | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class CustomerDetails:
    name: str
    phone: str
    address: str
    city: str
    email: str | None = None


@dataclass
class CourierFields:
    """Courier bookkeeping stored on the order row."""

    provider: str | None = None
    status: CourierStatus | None = None
    tracking_id: str | None = None
    consignment_id: str | None = None
    reference: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def generate_order_number(now: datetime | None = None) -> str:
    """``ORD-`` followed by the last 8 digits of the millisecond clock."""
    now = now or datetime.now(timezone.utc)
    millis = str(int(now.timestamp() * 1000))
    return f"ORD-{millis[-8:]}"


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces the
    checkout rules. ``__init__`` stays simple so repositories can
    reconstitute persisted orders without re-validating.
    """

    id: str | None
    order_number: str
    customer: CustomerDetails
    items: list[OrderLineItem]
    subtotal: Money
    discount: Money
    shipping_cost: Money
    total: Decimal
    shipping_method: str = "Standard"
    payment_method: str = "cod"
    payment_method_id: str | None = None
    payment_method_name: str = "Cash on Delivery"
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    paid_amount: Decimal = Decimal("0")
    due_amount: Decimal = Decimal("0")
    transaction_id: str | None = None
    partial_rule_snapshot: dict | None = None
    notes: str | None = None
    user_id: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    courier: CourierFields = field(default_factory=CourierFields)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer: CustomerDetails,
        items: list[OrderLineItem],
        quote: CheckoutQuote,
        order_number: str | None = None,
        shipping_method: str = "Standard",
        payment_method: str = "cod",
        payment_method_id: str | None = None,
        payment_method_name: str = "Cash on Delivery",
        transaction_id: str | None = None,
        notes: str | None = None,
        user_id: str | None = None,
    ) -> Order:
        """Create a new order, enforcing the checkout rules."""
        for label, value in (
            ("Customer name", customer.name),
            ("Phone", customer.phone),
            ("Address", customer.address),
            ("City", customer.city),
        ):
            if not value or not value.strip():
                raise ValidationError(f"{label} is required")

        if not items:
            raise ValidationError("Cart is empty")

        return Order(
            id=None,
            order_number=order_number or generate_order_number(),
            customer=customer,
            items=list(items),
            subtotal=quote.subtotal,
            discount=quote.discount,
            shipping_cost=quote.shipping_cost,
            total=quote.total,
            shipping_method=shipping_method,
            payment_method=payment_method,
            payment_method_id=payment_method_id,
            payment_method_name=payment_method_name,
            payment_status=quote.payment_status,
            paid_amount=quote.advance_amount,
            due_amount=quote.due_amount,
            transaction_id=(transaction_id or "").strip() or None,
            partial_rule_snapshot=quote.partial_rule_snapshot,
            notes=notes or None,
            user_id=user_id,
        )

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> None:
        """Admin-driven status change; any target state is allowed."""
        self.status = new_status

    def record_parcel(
        self,
        provider: str,
        tracking_id: str | None,
        consignment_id: str | None,
        reference: str,
        at: datetime,
    ) -> None:
        """Store the consignment the courier created for this order."""
        self.courier = CourierFields(
            provider=provider,
            status=CourierStatus.CREATED,
            tracking_id=tracking_id,
            consignment_id=consignment_id,
            reference=reference,
            created_at=at,
            updated_at=at,
        )

    def apply_courier_status(self, status: CourierStatus, at: datetime) -> OrderStatus | None:
        """Record the courier state and move the order along if it implies so.

        Returns the order status the courier state implied, if any.
        """
        self.courier.status = status
        self.courier.updated_at = at
        mapped = ORDER_STATUS_FOR_COURIER.get(status)
        if mapped is not None:
            self.status = mapped
        return mapped

    # --- Queries --------------------------------------------------------------

    def phone_matches(self, phone: str) -> bool:
        """Full match, or either number ends with the other's last 4 digits."""
        given = normalize_phone(phone)
        own = normalize_phone(self.customer.phone)
        if not given or not own:
            return False
        return own == given or own.endswith(given[-4:]) or given.endswith(own[-4:])
