"""Conversions API port."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.conversions import ConversionSettings


class ConversionsGateway(ABC):

    @abstractmethod
    def send_events(
        self, settings: ConversionSettings, access_token: str, body: dict
    ) -> tuple[bool, dict]:
        """POST an events batch; return (http_ok, decoded response body)."""
