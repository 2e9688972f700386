"""Application service: Place Order use case.

Orchestrates the flow between repositories and the domain model: prices
the cart (coupon, shipping, partial payment), creates the order and counts
the coupon use. This is the only place that coordinates coupons, payment
and shipping configuration with the Order aggregate.
"""

from __future__ import annotations

import structlog

from storefront.application.clock import Clock, utc_now
from storefront.application.dto import CheckoutSpec, OrderDTO
from storefront.application.manage_coupons import IncrementCouponUsageHandler
from storefront.application.validate_coupon import ValidateCouponHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.catalog import rate_for_city
from storefront.domain.model.order import (
    CustomerDetails,
    Order,
    OrderLineItem,
    generate_order_number,
)
from storefront.domain.model.payment import CASH_ON_DELIVERY, PaymentMethod
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from storefront.domain.repository.catalog_repository import (
    PaymentMethodRepository,
    ShippingMethodRepository,
    ShippingZoneRepository,
)
from storefront.domain.repository.coupon_repository import CouponRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.checkout_pricing import quote_checkout

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        coupon_repo: CouponRepository,
        payment_method_repo: PaymentMethodRepository,
        shipping_method_repo: ShippingMethodRepository,
        shipping_zone_repo: ShippingZoneRepository,
        currency: str = DEFAULT_CURRENCY,
        clock: Clock = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._coupon_repo = coupon_repo
        self._payment_method_repo = payment_method_repo
        self._shipping_method_repo = shipping_method_repo
        self._shipping_zone_repo = shipping_zone_repo
        self._currency = currency
        self._clock = clock

    def handle(self, spec: CheckoutSpec) -> OrderDTO:
        """Place an order.

        Steps:
        1. Snapshot each cart line at its current price.
        2. Resolve payment method and shipping rate.
        3. Evaluate the coupon, if any, and price the checkout.
        4. Let the Order aggregate validate the checkout form.
        5. Persist, count the coupon use and return a DTO.
        """
        line_items = [
            OrderLineItem(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=Quantity(item.quantity),
                unit_price=Money.of(item.unit_price, self._currency),
                product_image=item.product_image,
                variant_id=item.variant_id,
                variant_info=item.variant_info,
            )
            for item in spec.items
        ]
        subtotal = Money.zero(self._currency)
        for line in line_items:
            subtotal = subtotal + line.line_total

        payment_method = self._resolve_payment_method(spec)
        shipping_name, shipping_rate = self._resolve_shipping(spec)

        evaluation = None
        if spec.coupon_code:
            evaluation = ValidateCouponHandler(self._coupon_repo, self._clock).evaluate(
                spec.coupon_code, subtotal
            )

        quote = quote_checkout(subtotal, shipping_rate, evaluation, payment_method)
        if quote.total < 0:
            logger.warning(
                "Discount exceeds order value",
                coupon=evaluation.coupon.code if evaluation else None,
                total=str(quote.total),
            )

        order = Order.create(
            customer=CustomerDetails(
                name=spec.customer_name,
                phone=spec.phone,
                address=spec.address,
                city=spec.city,
                email=spec.email or None,
            ),
            items=line_items,
            quote=quote,
            order_number=generate_order_number(self._clock()),
            shipping_method=shipping_name,
            payment_method=payment_method.code,
            payment_method_id=payment_method.id,
            payment_method_name=payment_method.name,
            transaction_id=spec.transaction_id,
            notes=spec.notes,
            user_id=spec.user_id,
        )
        self._order_repo.save(order)
        logger.info(
            "Order placed",
            order_number=order.order_number,
            total=quote.formatted_total(),
            payment_status=order.payment_status.value,
        )

        if evaluation is not None and evaluation.coupon.id is not None:
            IncrementCouponUsageHandler(self._coupon_repo).handle(evaluation.coupon.id)

        return OrderDTO.from_order(order)

    # --- Helpers --------------------------------------------------------------

    def _resolve_payment_method(self, spec: CheckoutSpec) -> PaymentMethod:
        if not spec.payment_method_id:
            return CASH_ON_DELIVERY

        method = self._payment_method_repo.get_by_id(spec.payment_method_id)
        if method is None or not method.is_enabled:
            raise EntityNotFoundError(
                f"Payment method '{spec.payment_method_id}' not available"
            )
        if method.require_transaction_id and not (spec.transaction_id or "").strip():
            raise ValidationError("Transaction ID is required for this payment method")
        return method

    def _resolve_shipping(self, spec: CheckoutSpec) -> tuple[str, Money]:
        """Chosen shipping method, else the zone rate for the city."""
        if spec.shipping_method_id:
            method = self._shipping_method_repo.get_by_id(spec.shipping_method_id)
            if method is None or not method.is_active:
                raise EntityNotFoundError(
                    f"Shipping method '{spec.shipping_method_id}' not available"
                )
            return method.name, method.base_rate

        zone = rate_for_city(self._shipping_zone_repo.list_active(), spec.city or "")
        if zone is None:
            return "Standard", Money.zero(self._currency)
        return zone.name, zone.rate
