"""Application service: Checkout Options use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.catalog import ShippingMethod, ShippingZone, rate_for_city
from storefront.domain.model.payment import PaymentMethod
from storefront.domain.repository.catalog_repository import (
    PaymentMethodRepository,
    ShippingMethodRepository,
    ShippingZoneRepository,
)


@dataclass(frozen=True)
class CheckoutOptions:
    payment_methods: list[PaymentMethod]
    shipping_methods: list[ShippingMethod]
    zone: ShippingZone | None


class CheckoutOptionsHandler:

    def __init__(
        self,
        payment_method_repo: PaymentMethodRepository,
        shipping_method_repo: ShippingMethodRepository,
        shipping_zone_repo: ShippingZoneRepository,
    ) -> None:
        self._payment_method_repo = payment_method_repo
        self._shipping_method_repo = shipping_method_repo
        self._shipping_zone_repo = shipping_zone_repo

    def handle(self, city: str | None = None) -> CheckoutOptions:
        """Enabled payment methods, active shipping methods and the city's zone."""
        zone = None
        if city:
            zone = rate_for_city(self._shipping_zone_repo.list_active(), city)
        return CheckoutOptions(
            payment_methods=self._payment_method_repo.list_enabled(),
            shipping_methods=self._shipping_method_repo.list_active(),
            zone=zone,
        )
