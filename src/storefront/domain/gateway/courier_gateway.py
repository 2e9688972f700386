"""Courier port: the carrier HTTP API as seen by the application layer.

Adapters never raise for carrier-side rejections; they hand back a
``CarrierResponse`` so the caller can log it. Transport failures raise
``UpstreamError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.courier import CarrierResponse, CourierSettings, ParcelRequest


class CourierGateway(ABC):

    @abstractmethod
    def get_balance(self, settings: CourierSettings) -> CarrierResponse:
        """Fetch the merchant account balance (used as a connection test)."""

    @abstractmethod
    def create_order(self, settings: CourierSettings, parcel: ParcelRequest) -> CarrierResponse:
        """Create a consignment for a parcel."""

    @abstractmethod
    def status_by_consignment(
        self, settings: CourierSettings, consignment_id: str
    ) -> CarrierResponse:
        """Fetch the current delivery status of a consignment."""
