"""Application services: courier relay actions.

Each action reads the provider settings, talks to the carrier through the
``CourierGateway`` port and reports a structured result. Parcel creation
and tracking are written to the courier audit log whether they succeed
or not. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from storefront.application.clock import Clock, utc_now
from storefront.domain.exceptions import EntityNotFoundError, UpstreamError, ValidationError
from storefront.domain.gateway.courier_gateway import CourierGateway
from storefront.domain.model.courier import (
    STEADFAST,
    CarrierResponse,
    CourierLogEntry,
    CourierSettings,
    ParcelRequest,
    map_delivery_status,
)
from storefront.domain.repository.courier_repository import (
    CourierLogRepository,
    CourierSettingsRepository,
)
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)

NOT_ENABLED = "Steadfast not enabled"


@dataclass(frozen=True)
class CourierActionResult:
    success: bool
    data: dict = field(default_factory=dict)
    error: str | dict | list | None = None

    @staticmethod
    def ok(**data) -> CourierActionResult:
        return CourierActionResult(success=True, data=data)

    @staticmethod
    def failed(error) -> CourierActionResult:
        return CourierActionResult(success=False, error=error)

    def to_dict(self) -> dict:
        body = {"success": self.success, **self.data}
        if self.error is not None:
            body["error"] = self.error
        return body


class _CourierAction:

    def __init__(
        self,
        settings_repo: CourierSettingsRepository,
        gateway: CourierGateway,
        provider: str = STEADFAST,
    ) -> None:
        self._settings_repo = settings_repo
        self._gateway = gateway
        self._provider = provider

    def _enabled_settings(self) -> CourierSettings | None:
        settings = self._settings_repo.get_for_provider(self._provider)
        if settings is None or not settings.enabled:
            return None
        return settings


class CourierConnectionCheckHandler(_CourierAction):
    """Checks the credentials by asking the carrier for the account balance."""

    def handle(self) -> CourierActionResult:
        settings = self._enabled_settings()
        if settings is None:
            return CourierActionResult.failed(NOT_ENABLED)

        try:
            response = self._gateway.get_balance(settings)
        except UpstreamError as exc:
            logger.error("Courier connection test failed", provider=self._provider, error=str(exc))
            return CourierActionResult.failed(str(exc))

        if response.ok:
            return CourierActionResult.ok(balance=response.data.get("current_balance"))
        return CourierActionResult.failed(response.message or "Failed")


class GetCourierSettingsHandler(_CourierAction):
    """Settings for the admin panel, with secrets reduced to flags."""

    def handle(self) -> CourierActionResult:
        settings = self._settings_repo.get_for_provider(self._provider)
        return CourierActionResult.ok(settings=settings.public_view() if settings else None)


class _LoggedCourierAction(_CourierAction):

    def __init__(
        self,
        settings_repo: CourierSettingsRepository,
        gateway: CourierGateway,
        order_repo: OrderRepository,
        log_repo: CourierLogRepository,
        provider: str = STEADFAST,
        clock: Clock = utc_now,
    ) -> None:
        super().__init__(settings_repo, gateway, provider)
        self._order_repo = order_repo
        self._log_repo = log_repo
        self._clock = clock

    def _log(
        self,
        order_id: str | None,
        action: str,
        response: CarrierResponse,
        message: str,
        request_payload: dict,
    ) -> None:
        self._log_repo.add(
            CourierLogEntry(
                order_id=order_id,
                provider=self._provider,
                action=action,
                status=response.log_status,
                message=message,
                request_payload=request_payload,
                response_payload=response.data,
                created_at=self._clock(),
            )
        )

    def _call(self, order_id: str | None, action: str, request_payload: dict, call):
        """Run a gateway call; transport failures are logged and returned as None."""
        try:
            return call()
        except UpstreamError as exc:
            logger.error(
                "Courier request failed",
                provider=self._provider,
                action=action,
                order_id=order_id,
                error=str(exc),
            )
            failed = CarrierResponse(http_ok=False, data=exc.payload)
            self._log(order_id, action, failed, str(exc), request_payload)
            return None


class CreateParcelHandler(_LoggedCourierAction):

    def handle(self, order_id: str, parcel: ParcelRequest) -> CourierActionResult:
        """Create a consignment and store it on the order."""
        settings = self._enabled_settings()
        if settings is None:
            return CourierActionResult.failed(NOT_ENABLED)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")

        payload = parcel.to_payload()
        response = self._call(
            order_id,
            "create_parcel",
            payload,
            lambda: self._gateway.create_order(settings, parcel),
        )
        if response is None:
            return CourierActionResult.failed("Courier service unavailable")

        self._log(order_id, "create_parcel", response, response.message, payload)

        if not response.ok:
            error = response.data.get("message") or response.data.get("errors") or "Failed"
            return CourierActionResult.failed(error)

        consignment = response.data.get("consignment") or {}
        tracking_code = consignment.get("tracking_code")
        consignment_id = consignment.get("consignment_id")
        order.record_parcel(
            provider=self._provider,
            tracking_id=tracking_code,
            consignment_id=str(consignment_id) if consignment_id is not None else None,
            reference=parcel.invoice,
            at=self._clock(),
        )
        self._order_repo.update_courier(order.id, order.courier)
        logger.info(
            "Parcel created",
            order_number=order.order_number,
            tracking_code=tracking_code,
            consignment_id=consignment_id,
        )
        return CourierActionResult.ok(tracking_code=tracking_code, consignment_id=consignment_id)


class TrackParcelHandler(_LoggedCourierAction):

    def handle(self, consignment_id: str | None, order_id: str | None) -> CourierActionResult:
        """Poll the carrier and apply the mapped status to the order."""
        settings = self._enabled_settings()
        if settings is None:
            return CourierActionResult.failed(NOT_ENABLED)

        if not consignment_id:
            raise ValidationError("Consignment ID required")

        request_payload = {"consignment_id": consignment_id}
        response = self._call(
            order_id,
            "track_status",
            request_payload,
            lambda: self._gateway.status_by_consignment(settings, str(consignment_id)),
        )
        if response is None:
            return CourierActionResult.failed("Courier service unavailable")

        delivery_status = response.data.get("delivery_status")
        self._log(order_id, "track_status", response, delivery_status or "", request_payload)

        if not response.ok:
            return CourierActionResult.failed(response.message or "Failed")

        courier_status = map_delivery_status(delivery_status)
        order = self._order_repo.get_by_id(order_id) if order_id else None
        if order is None:
            logger.warning("Tracked consignment has no order", consignment_id=consignment_id)
        else:
            now = self._clock()
            mapped = order.apply_courier_status(courier_status, now)
            self._order_repo.update_courier_status(order.id, courier_status, now, mapped)

        return CourierActionResult.ok(
            courier_status=courier_status.value, delivery_status=delivery_status
        )
