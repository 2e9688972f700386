"""Graph API adapter for server-side conversion events."""

from __future__ import annotations

import json

import httpx

from storefront.domain.exceptions import UpstreamError
from storefront.domain.gateway.conversions_gateway import ConversionsGateway
from storefront.domain.model.conversions import ConversionSettings

GRAPH_API_URL = "https://graph.facebook.com"


class MetaConversionsGateway(ConversionsGateway):

    def __init__(
        self,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
        base_url: str = GRAPH_API_URL,
    ) -> None:
        self._timeout = timeout
        self._client = client
        self._base_url = base_url

    def events_url(self, settings: ConversionSettings) -> str:
        return f"{self._base_url}/{settings.version}/{settings.target_dataset}/events"

    def send_events(
        self, settings: ConversionSettings, access_token: str, body: dict
    ) -> tuple[bool, dict]:
        url = self.events_url(settings)
        params = {"access_token": access_token}
        try:
            if self._client is not None:
                res = self._client.post(url, params=params, json=body)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    res = client.post(url, params=params, json=body)
        except httpx.RequestError as exc:
            raise UpstreamError(f"Conversions API unreachable: {exc}") from exc

        try:
            data = res.json()
        except json.JSONDecodeError:
            data = {}
        return res.is_success, data if isinstance(data, dict) else {}
