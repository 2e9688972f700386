"""Abstract repository for Conversions API settings."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.conversions import ConversionSettings


class ConversionSettingsRepository(ABC):

    @abstractmethod
    def get_settings(self) -> ConversionSettings | None:
        """Return the global conversion settings, or None if unavailable."""

    @abstractmethod
    def get_access_token(self) -> str | None:
        """Return the stored access token, or None if none is stored."""
