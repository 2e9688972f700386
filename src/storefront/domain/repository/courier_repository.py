"""Abstract repositories for courier settings and the courier audit log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.courier import CourierLogEntry, CourierSettings


class CourierSettingsRepository(ABC):

    @abstractmethod
    def get_for_provider(self, provider: str) -> CourierSettings | None:
        """Return the settings row for a courier provider, or None."""


class CourierLogRepository(ABC):

    @abstractmethod
    def add(self, entry: CourierLogEntry) -> None:
        """Append an entry to the courier audit trail."""
