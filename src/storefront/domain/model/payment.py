"""Payment methods and their partial (advance) payment rules."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class PaymentStatus(Enum):
    UNPAID = "unpaid"
    PARTIAL_PAID = "partial_paid"
    PAID = "paid"


class PartialType(Enum):
    DELIVERY_CHARGE = "delivery_charge"
    FIXED_AMOUNT = "fixed_amount"


@dataclass
class PaymentMethod:
    """A payment option offered at checkout (cash on delivery, mobile wallet...).

    When ``allow_partial_delivery_payment`` is set the customer pays an
    advance up front and the rest on delivery.
    """

    id: str | None
    name: str
    code: str
    is_enabled: bool = True
    sort_order: int = 0
    allow_partial_delivery_payment: bool = False
    partial_type: PartialType | None = None
    fixed_partial_amount: Decimal | None = None
    require_transaction_id: bool = False
    instructions: str | None = None

    @property
    def allows_partial_payment(self) -> bool:
        return self.allow_partial_delivery_payment and self.partial_type is not None

    def advance_for(self, total: Decimal, shipping_cost: Decimal) -> Decimal:
        """Amount collected up front for an order of ``total``."""
        if not self.allows_partial_payment:
            return Decimal("0")
        if self.partial_type is PartialType.DELIVERY_CHARGE:
            return shipping_cost
        return min(self.fixed_partial_amount or Decimal("0"), total)


CASH_ON_DELIVERY = PaymentMethod(id=None, name="Cash on Delivery", code="cod")
