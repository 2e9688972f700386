"""Integration tests for the courier relay actions."""

import copy
from datetime import datetime, timezone

import pytest

from storefront.application.courier_actions import (
    CourierConnectionCheckHandler,
    CreateParcelHandler,
    GetCourierSettingsHandler,
    TrackParcelHandler,
)
from storefront.domain.exceptions import EntityNotFoundError, UpstreamError, ValidationError
from storefront.domain.model.courier import (
    CarrierResponse,
    CourierSettings,
    CourierStatus,
    ParcelRequest,
)
from storefront.domain.model.order import CustomerDetails, Order, OrderLineItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.checkout_pricing import quote_checkout
from tests.fakes import (
    FakeCourierGateway,
    FakeCourierLogRepository,
    FakeCourierSettingsRepository,
    FakeOrderRepository,
)

AT = datetime(2024, 6, 2, 9, 30, tzinfo=timezone.utc)

PARCEL = ParcelRequest(
    invoice="ORD-12345678",
    recipient_name="Rahim",
    recipient_phone="01712345678",
    recipient_address="House 1, Dhaka",
    cod_amount=1060,
)


def _settings(enabled: bool = True) -> FakeCourierSettingsRepository:
    return FakeCourierSettingsRepository(
        CourierSettings(
            provider="steadfast",
            enabled=enabled,
            api_base_url="https://carrier.test/api/v1",
            api_key="key",
            api_secret="secret",
        )
    )


def _orders() -> FakeOrderRepository:
    order = Order.create(
        customer=CustomerDetails(name="Rahim", phone="01712345678", address="House 1", city="Dhaka"),
        items=[
            OrderLineItem(
                product_id="p1", product_name="T-Shirt", quantity=Quantity(1), unit_price=Money.of("1000")
            )
        ],
        quote=quote_checkout(Money.of("1000"), Money.of("60")),
        order_number="ORD-12345678",
    )
    return FakeOrderRepository([order])


class _CancelledWhileInFlight(FakeOrderRepository):
    """Hands out a snapshot, then an admin cancels the stored order."""

    def get_by_id(self, order_id):
        stored = super().get_by_id(order_id)
        if stored is None:
            return None
        snapshot = copy.deepcopy(stored)
        stored.status = OrderStatus.CANCELLED
        return snapshot


def _logged(handler_cls, gateway, orders=None, settings=None):
    orders = orders or _orders()
    logs = FakeCourierLogRepository()
    handler = handler_cls(
        settings_repo=settings or _settings(),
        gateway=gateway,
        order_repo=orders,
        log_repo=logs,
        clock=lambda: AT,
    )
    return handler, orders, logs


class TestConnectionCheck:

    def test_returns_balance(self):
        gateway = FakeCourierGateway(
            balance=CarrierResponse(http_ok=True, data={"status": 200, "current_balance": 1520})
        )
        result = CourierConnectionCheckHandler(_settings(), gateway).handle()
        assert result.to_dict() == {"success": True, "balance": 1520}

    def test_disabled_makes_no_call(self):
        gateway = FakeCourierGateway()
        result = CourierConnectionCheckHandler(_settings(enabled=False), gateway).handle()
        assert result.to_dict() == {"success": False, "error": "Steadfast not enabled"}
        assert gateway.calls == []

    def test_missing_settings_is_disabled(self):
        result = CourierConnectionCheckHandler(
            FakeCourierSettingsRepository(None), FakeCourierGateway()
        ).handle()
        assert result.error == "Steadfast not enabled"

    def test_rejected_credentials(self):
        gateway = FakeCourierGateway(
            balance=CarrierResponse(http_ok=False, data={"status": 401, "message": "Unauthorized"})
        )
        result = CourierConnectionCheckHandler(_settings(), gateway).handle()
        assert result.success is False
        assert result.error == "Unauthorized"


class TestGetSettings:

    def test_secrets_are_reduced_to_flags(self):
        result = GetCourierSettingsHandler(_settings(), FakeCourierGateway()).handle()
        assert result.data["settings"]["has_api_key"] is True
        assert "api_secret" not in result.data["settings"]


class TestCreateParcel:

    def test_success_updates_order_and_logs(self):
        gateway = FakeCourierGateway(
            create=CarrierResponse(
                http_ok=True,
                data={
                    "status": 200,
                    "message": "Consignment has been created successfully.",
                    "consignment": {"consignment_id": 1424107, "tracking_code": "15BAEB8A"},
                },
            )
        )
        handler, orders, logs = _logged(CreateParcelHandler, gateway)
        order_id = orders.list_all()[0].id

        result = handler.handle(order_id, PARCEL)

        assert result.to_dict() == {
            "success": True,
            "tracking_code": "15BAEB8A",
            "consignment_id": 1424107,
        }
        order = orders.get_by_id(order_id)
        assert order.courier.status is CourierStatus.CREATED
        assert order.courier.consignment_id == "1424107"
        assert order.courier.reference == "ORD-12345678"
        assert order.courier.created_at == AT

        [entry] = logs.entries
        assert entry.action == "create_parcel"
        assert entry.status == "success"
        assert entry.request_payload["invoice"] == "ORD-12345678"

    def test_carrier_rejection_is_logged_and_reported(self):
        gateway = FakeCourierGateway(
            create=CarrierResponse(
                http_ok=True,
                data={"status": 400, "errors": {"recipient_phone": ["Invalid phone"]}},
            )
        )
        handler, orders, logs = _logged(CreateParcelHandler, gateway)
        order_id = orders.list_all()[0].id

        result = handler.handle(order_id, PARCEL)

        assert result.success is False
        assert result.error == {"recipient_phone": ["Invalid phone"]}
        assert orders.get_by_id(order_id).courier.status is None
        assert logs.entries[0].status == "success"  # transport succeeded

    def test_transport_failure_is_logged(self):
        gateway = FakeCourierGateway(error=UpstreamError("Courier API unreachable"))
        handler, orders, logs = _logged(CreateParcelHandler, gateway)

        result = handler.handle(orders.list_all()[0].id, PARCEL)

        assert result.error == "Courier service unavailable"
        assert logs.entries[0].status == "failed"

    def test_unknown_order(self):
        handler, _, _ = _logged(CreateParcelHandler, FakeCourierGateway())
        with pytest.raises(EntityNotFoundError):
            handler.handle("order-404", PARCEL)

    def test_disabled(self):
        gateway = FakeCourierGateway()
        handler, _, logs = _logged(CreateParcelHandler, gateway, settings=_settings(enabled=False))
        assert handler.handle("order-1", PARCEL).error == "Steadfast not enabled"
        assert gateway.calls == []
        assert logs.entries == []


class TestTrackParcel:

    def _status(self, delivery_status: str) -> FakeCourierGateway:
        return FakeCourierGateway(
            status=CarrierResponse(
                http_ok=True, data={"status": 200, "delivery_status": delivery_status}
            )
        )

    def test_in_review_is_pending(self):
        handler, orders, _ = _logged(TrackParcelHandler, self._status("in_review"))
        order_id = orders.list_all()[0].id

        result = handler.handle("1424107", order_id)

        assert result.to_dict() == {
            "success": True,
            "courier_status": "pending",
            "delivery_status": "in_review",
        }
        order = orders.get_by_id(order_id)
        assert order.courier.status is CourierStatus.PENDING
        assert order.status == OrderStatus.PENDING

    def test_out_for_delivery_ships_the_order(self):
        handler, orders, logs = _logged(TrackParcelHandler, self._status("out_for_delivery"))
        order_id = orders.list_all()[0].id

        result = handler.handle("1424107", order_id)

        assert result.data["courier_status"] == "in_transit"
        assert orders.get_by_id(order_id).status == OrderStatus.SHIPPED
        assert logs.entries[0].message == "out_for_delivery"
        assert logs.entries[0].request_payload == {"consignment_id": "1424107"}

    def test_delivered(self):
        handler, orders, _ = _logged(TrackParcelHandler, self._status("Delivered"))
        order_id = orders.list_all()[0].id
        handler.handle("1424107", order_id)
        assert orders.get_by_id(order_id).status == OrderStatus.DELIVERED

    def test_consignment_required(self):
        handler, _, _ = _logged(TrackParcelHandler, FakeCourierGateway())
        with pytest.raises(ValidationError, match="Consignment ID required"):
            handler.handle(None, "order-1")

    def test_unknown_order_still_reports_status(self):
        handler, _, _ = _logged(TrackParcelHandler, self._status("delivered"))
        assert handler.handle("1424107", None).data["courier_status"] == "delivered"

    def test_carrier_failure(self):
        gateway = FakeCourierGateway(
            status=CarrierResponse(http_ok=False, data={"status": 404, "message": "Not found"})
        )
        handler, orders, logs = _logged(TrackParcelHandler, gateway)
        result = handler.handle("999", orders.list_all()[0].id)
        assert result.to_dict() == {"success": False, "error": "Not found"}
        assert logs.entries[0].status == "failed"


class TestConcurrentStatusChanges:

    def _orders(self) -> _CancelledWhileInFlight:
        return _CancelledWhileInFlight(_orders().list_all())

    def test_tracking_keeps_a_cancellation_made_meanwhile(self):
        gateway = FakeCourierGateway(
            status=CarrierResponse(http_ok=True, data={"status": 200, "delivery_status": "pending"})
        )
        handler, orders, _ = _logged(TrackParcelHandler, gateway, orders=self._orders())
        order_id = orders.list_all()[0].id

        handler.handle("1424107", order_id)

        [stored] = orders.list_all()
        assert stored.status == OrderStatus.CANCELLED
        assert stored.courier.status is CourierStatus.PENDING
        assert stored.courier.updated_at == AT

    def test_tracking_still_applies_a_mapped_status(self):
        gateway = FakeCourierGateway(
            status=CarrierResponse(http_ok=True, data={"status": 200, "delivery_status": "delivered"})
        )
        handler, orders, _ = _logged(TrackParcelHandler, gateway, orders=self._orders())

        handler.handle("1424107", orders.list_all()[0].id)

        assert orders.list_all()[0].status == OrderStatus.DELIVERED

    def test_parcel_creation_keeps_a_cancellation_made_meanwhile(self):
        gateway = FakeCourierGateway(
            create=CarrierResponse(
                http_ok=True,
                data={"status": 200, "consignment": {"consignment_id": 7, "tracking_code": "TRK7"}},
            )
        )
        handler, orders, _ = _logged(CreateParcelHandler, gateway, orders=self._orders())

        handler.handle(orders.list_all()[0].id, PARCEL)

        [stored] = orders.list_all()
        assert stored.status == OrderStatus.CANCELLED
        assert stored.courier.tracking_id == "TRK7"
        assert stored.courier.status is CourierStatus.CREATED
