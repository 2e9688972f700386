"""Steadfast courier adapter over httpx."""

from __future__ import annotations

import json

import httpx
import structlog

from storefront.domain.exceptions import UpstreamError
from storefront.domain.gateway.courier_gateway import CourierGateway
from storefront.domain.model.courier import CarrierResponse, CourierSettings, ParcelRequest

logger = structlog.get_logger(__name__)


class SteadfastGateway(CourierGateway):
    """Talks to the Steadfast merchant API.

    Pass ``client`` to reuse a connection pool (or a mock transport in
    tests); otherwise a short-lived client is opened per request.
    """

    def __init__(self, timeout: float = 30.0, client: httpx.Client | None = None) -> None:
        self._timeout = timeout
        self._client = client

    def get_balance(self, settings: CourierSettings) -> CarrierResponse:
        return self._request("GET", settings, "/get_balance")

    def create_order(self, settings: CourierSettings, parcel: ParcelRequest) -> CarrierResponse:
        return self._request("POST", settings, "/create_order", parcel.to_payload())

    def status_by_consignment(
        self, settings: CourierSettings, consignment_id: str
    ) -> CarrierResponse:
        return self._request("GET", settings, f"/status_by_cid/{consignment_id}")

    # --- HTTP helpers ---------------------------------------------------------

    @staticmethod
    def _headers(settings: CourierSettings) -> dict:
        return {
            "Api-Key": settings.api_key or "",
            "Secret-Key": settings.api_secret or "",
            "Content-Type": "application/json",
        }

    def _request(
        self, method: str, settings: CourierSettings, path: str, payload: dict | None = None
    ) -> CarrierResponse:
        url = settings.api_base_url.rstrip("/") + path
        try:
            if self._client is not None:
                res = self._client.request(
                    method, url, headers=self._headers(settings), json=payload
                )
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    res = client.request(
                        method, url, headers=self._headers(settings), json=payload
                    )
        except httpx.RequestError as exc:
            logger.error("Courier API unreachable", url=url, error=str(exc))
            raise UpstreamError(f"Courier API unreachable: {exc}") from exc

        try:
            data = res.json()
        except json.JSONDecodeError as exc:
            logger.error("Courier API returned invalid JSON", url=url, status_code=res.status_code)
            raise UpstreamError(
                "Invalid response from courier", payload={"body": res.text}
            ) from exc

        return CarrierResponse(http_ok=res.is_success, data=data if isinstance(data, dict) else {})
