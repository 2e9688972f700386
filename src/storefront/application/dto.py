"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.coupon import CouponEvaluation
from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import format_amount


@dataclass(frozen=True)
class CartItemSpec:
    """Input: one cart line as submitted at checkout."""

    product_id: str | None
    product_name: str
    quantity: int
    unit_price: str
    product_image: str | None = None
    variant_id: str | None = None
    variant_info: dict | None = None


@dataclass(frozen=True)
class CheckoutSpec:
    """Input: the checkout form."""

    customer_name: str
    phone: str
    address: str
    city: str
    items: list[CartItemSpec]
    email: str | None = None
    coupon_code: str | None = None
    shipping_method_id: str | None = None
    payment_method_id: str | None = None
    transaction_id: str | None = None
    notes: str | None = None
    user_id: str | None = None


@dataclass(frozen=True)
class CouponDTO:
    """Output: a coupon evaluation as displayed to the customer."""

    coupon_id: str | None
    code: str
    discount_type: str
    valid: bool
    discount_amount: str  # formatted, e.g. "৳100.00"
    waives_shipping: bool

    @staticmethod
    def from_evaluation(evaluation: CouponEvaluation) -> CouponDTO:
        return CouponDTO(
            coupon_id=evaluation.coupon.id,
            code=evaluation.coupon.code,
            discount_type=evaluation.coupon.discount_type.value,
            valid=evaluation.valid,
            discount_amount=str(evaluation.discount_amount),
            waives_shipping=evaluation.waives_shipping,
        )


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_name: str
    quantity: int
    unit_price: str
    line_total: str
    variant_info: dict | None = None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the customer or admin."""

    id: str | None
    order_number: str
    customer_name: str
    status: str
    payment_status: str
    courier_status: str | None
    items: list[OrderLineItemDTO]
    subtotal: str
    discount: str
    shipping_cost: str
    total: str
    paid_amount: str
    due_amount: str
    created_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        currency = order.subtotal.currency
        return OrderDTO(
            id=order.id,
            order_number=order.order_number,
            customer_name=order.customer.name,
            status=order.status.value,
            payment_status=order.payment_status.value,
            courier_status=order.courier.status.value if order.courier.status else None,
            items=[
                OrderLineItemDTO(
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                    variant_info=item.variant_info,
                )
                for item in order.items
            ],
            subtotal=str(order.subtotal),
            discount=str(order.discount),
            shipping_cost=str(order.shipping_cost),
            total=format_amount(order.total, currency),
            paid_amount=format_amount(order.paid_amount, currency),
            due_amount=format_amount(order.due_amount, currency),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
