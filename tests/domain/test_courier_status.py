"""Unit tests for the carrier delivery-status mapping."""

import pytest

from storefront.domain.model.courier import (
    CarrierResponse,
    CourierSettings,
    CourierStatus,
    map_delivery_status,
)


class TestMapDeliveryStatus:

    @pytest.mark.parametrize("raw", ["Delivered", "DELIVERED", "delivered"])
    def test_case_insensitive(self, raw):
        assert map_delivery_status(raw) is CourierStatus.DELIVERED

    def test_in_review_is_pending(self):
        assert map_delivery_status("in_review") is CourierStatus.PENDING

    def test_pending(self):
        assert map_delivery_status("Pending") is CourierStatus.PENDING

    def test_cancelled(self):
        assert map_delivery_status("cancelled") is CourierStatus.CANCELLED

    def test_anything_else_is_in_transit(self):
        assert map_delivery_status("out_for_delivery") is CourierStatus.IN_TRANSIT
        assert map_delivery_status("hold") is CourierStatus.IN_TRANSIT

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing_status_stays_created(self, raw):
        assert map_delivery_status(raw) is CourierStatus.CREATED


class TestCarrierResponse:

    def test_ok_needs_http_ok_and_carrier_status(self):
        assert CarrierResponse(http_ok=True, data={"status": 200}).ok
        assert not CarrierResponse(http_ok=True, data={"status": 400}).ok
        assert not CarrierResponse(http_ok=False, data={"status": 200}).ok

    def test_log_status_follows_transport(self):
        assert CarrierResponse(http_ok=True, data={"status": 400}).log_status == "success"
        assert CarrierResponse(http_ok=False, data={}).log_status == "failed"


class TestCourierSettings:

    def test_public_view_hides_secrets(self):
        settings = CourierSettings(
            provider="steadfast",
            enabled=True,
            api_base_url="https://carrier.test",
            api_key="key",
            api_secret=None,
        )
        view = settings.public_view()
        assert view["has_api_key"] is True
        assert view["has_api_secret"] is False
        assert "api_key" not in view
        assert "api_secret" not in view
