"""Application service: Relay Conversion Event use case.

Forwards a storefront event (page view, add to cart, purchase...) to the
advertising platform's Conversions API. The relay is fire-and-forget for
its caller: missing configuration is reported as a skip and upstream
failures as ``success=False``, never as an exception.
"""

from __future__ import annotations

import structlog

from storefront.application.clock import Clock, utc_now
from storefront.domain.exceptions import UpstreamError, ValidationError
from storefront.domain.gateway.conversions_gateway import ConversionsGateway
from storefront.domain.model.conversions import (
    ConversionEvent,
    ConversionResult,
    ConversionSettings,
    SkipReason,
)
from storefront.domain.repository.conversions_repository import ConversionSettingsRepository

logger = structlog.get_logger(__name__)


def require_event_identity(event_name: str | None, event_id: str | None) -> None:
    if not event_name or not event_id:
        raise ValidationError("event_name and event_id are required")


class RelayConversionHandler:

    def __init__(
        self,
        settings_repo: ConversionSettingsRepository,
        gateway: ConversionsGateway,
        fallback_access_token: str | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._settings_repo = settings_repo
        self._gateway = gateway
        self._fallback_access_token = fallback_access_token
        self._clock = clock

    def handle(
        self,
        event_name: str,
        event_id: str,
        user_data: dict | None = None,
        custom_data: dict | None = None,
        test_mode: bool = False,
        event_source_url: str | None = None,
    ) -> ConversionResult:
        require_event_identity(event_name, event_id)

        settings = self._load_settings()
        if settings is None:
            return ConversionResult.skip(SkipReason.SETTINGS_UNAVAILABLE)
        if not settings.enabled:
            return ConversionResult.skip(SkipReason.CAPI_DISABLED)

        access_token = self._access_token()
        if not access_token:
            logger.error("No Conversions API access token configured")
            return ConversionResult.skip(SkipReason.TOKEN_MISSING)

        if not settings.target_dataset:
            return ConversionResult.skip(SkipReason.DATASET_ID_MISSING)

        event = ConversionEvent(
            event_name=event_name,
            event_id=event_id,
            event_time=int(self._clock().timestamp()),
            user_data=user_data or {},
            custom_data=custom_data or {},
            event_source_url=event_source_url,
        )
        body: dict = {"data": [event.to_payload()]}
        if test_mode and settings.test_event_code:
            body["test_event_code"] = settings.test_event_code

        try:
            http_ok, data = self._gateway.send_events(settings, access_token, body)
        except UpstreamError as exc:
            logger.error("Conversions API unreachable", event_name=event_name, error=str(exc))
            return ConversionResult(success=False, error=str(exc))

        if not http_ok:
            error = (data.get("error") or {}).get("message") or "API error"
            logger.error("Conversions API error", event_name=event_name, response=data)
            return ConversionResult(success=False, error=error)

        logger.info("Conversion event sent", event_name=event_name, event_id=event_id)
        return ConversionResult(success=True, events_received=data.get("events_received"))

    # --- Helpers --------------------------------------------------------------

    def _load_settings(self) -> ConversionSettings | None:
        try:
            return self._settings_repo.get_settings()
        except UpstreamError as exc:
            logger.error("Failed to fetch conversion settings", error=str(exc))
            return None

    def _access_token(self) -> str | None:
        """Stored token wins over the environment fallback."""
        try:
            stored = self._settings_repo.get_access_token()
        except UpstreamError as exc:
            logger.warning("Failed to read stored access token", error=str(exc))
            stored = None
        if stored and stored.strip():
            return stored
        return self._fallback_access_token
