"""Domain service: checkout pricing.

Combines the cart subtotal, an optional coupon evaluation, the selected
shipping rate and the payment method's partial-payment rule into the
amounts that get written on the order.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.model.coupon import CouponEvaluation
from storefront.domain.model.payment import PaymentMethod, PaymentStatus
from storefront.domain.model.value_objects import Money, format_amount


@dataclass(frozen=True)
class CheckoutQuote:
    """Amounts for one checkout.

    ``total``, ``advance_amount`` and ``due_amount`` are plain Decimals
    because an uncapped fixed discount can push them below zero.
    """

    subtotal: Money
    discount: Money
    shipping_cost: Money
    total: Decimal
    advance_amount: Decimal
    due_amount: Decimal
    payment_status: PaymentStatus
    partial_rule_snapshot: dict | None = None

    @property
    def currency(self) -> str:
        return self.subtotal.currency

    def formatted_total(self) -> str:
        return format_amount(self.total, self.currency)


def quote_checkout(
    subtotal: Money,
    shipping_rate: Money,
    evaluation: CouponEvaluation | None = None,
    payment_method: PaymentMethod | None = None,
) -> CheckoutQuote:
    """Price a checkout.

    ``total = subtotal - discount + shipping``; a free-shipping coupon
    zeroes the shipping component.
    """
    discount = Money.zero(subtotal.currency)
    shipping = shipping_rate
    if evaluation is not None:
        discount = evaluation.discount_amount
        if evaluation.waives_shipping:
            shipping = Money.zero(subtotal.currency)

    total = subtotal.amount - discount.amount + shipping.amount

    advance = Decimal("0")
    snapshot = None
    status = PaymentStatus.UNPAID
    if payment_method is not None and payment_method.allows_partial_payment:
        advance = payment_method.advance_for(total, shipping.amount)
        status = PaymentStatus.PARTIAL_PAID
        snapshot = {
            "partial_type": payment_method.partial_type.value,
            "fixed_partial_amount": (
                str(payment_method.fixed_partial_amount)
                if payment_method.fixed_partial_amount is not None
                else None
            ),
            "advance_amount": str(advance),
            "due_on_delivery": str(total - advance),
        }

    return CheckoutQuote(
        subtotal=subtotal,
        discount=discount,
        shipping_cost=shipping,
        total=total,
        advance_amount=advance,
        due_amount=total - advance,
        payment_status=status,
        partial_rule_snapshot=snapshot,
    )
