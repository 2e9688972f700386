"""Server-side conversion events for the advertising platform.

Personally identifying fields are normalised (trimmed, lower-cased) and
SHA-256 hashed before they leave the storefront.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import Enum

DEFAULT_API_VERSION = "v20.0"

HASHED_FIELDS = ("em", "ph", "external_id")
PASSTHROUGH_FIELDS = ("client_user_agent", "client_ip_address", "fbp", "fbc")


class SkipReason(Enum):
    SETTINGS_UNAVAILABLE = "settings_unavailable"
    CAPI_DISABLED = "capi_disabled"
    TOKEN_MISSING = "token_missing"
    DATASET_ID_MISSING = "dataset_id_missing"


@dataclass(frozen=True)
class ConversionSettings:
    enabled: bool
    dataset_id: str | None = None
    pixel_id: str | None = None
    test_event_code: str | None = None
    api_version: str | None = None

    @property
    def target_dataset(self) -> str | None:
        return self.dataset_id or self.pixel_id

    @property
    def version(self) -> str:
        return self.api_version or DEFAULT_API_VERSION


def sha256_hex(value: str) -> str:
    return hashlib.sha256(value.strip().lower().encode("utf-8")).hexdigest()


def hash_user_data(user_data: dict) -> dict:
    """Copy pass-through fields and hash the identifying ones."""
    result: dict = {}
    for key in PASSTHROUGH_FIELDS:
        if user_data.get(key):
            result[key] = user_data[key]
    for key in HASHED_FIELDS:
        if user_data.get(key):
            result[key] = [sha256_hex(str(user_data[key]))]
    return result


@dataclass(frozen=True)
class ConversionEvent:
    event_name: str
    event_id: str
    event_time: int
    user_data: dict = field(default_factory=dict)
    custom_data: dict = field(default_factory=dict)
    event_source_url: str | None = None

    def to_payload(self) -> dict:
        payload: dict = {
            "event_name": self.event_name,
            "event_time": self.event_time,
            "event_id": self.event_id,
            "action_source": "website",
            "user_data": hash_user_data(self.user_data),
        }
        if self.event_source_url:
            payload["event_source_url"] = self.event_source_url
        if self.custom_data:
            payload["custom_data"] = self.custom_data
        return payload


@dataclass(frozen=True)
class ConversionResult:
    """Relay outcome; always reported to the caller with HTTP 200."""

    success: bool
    skipped: bool = False
    reason: SkipReason | None = None
    events_received: int | None = None
    error: str | None = None

    @staticmethod
    def skip(reason: SkipReason) -> ConversionResult:
        return ConversionResult(success=True, skipped=True, reason=reason)

    def to_dict(self) -> dict:
        body: dict = {"success": self.success}
        if self.skipped:
            body["skipped"] = True
            body["reason"] = self.reason.value if self.reason else None
        if self.events_received is not None:
            body["events_received"] = self.events_received
        if self.error is not None:
            body["error"] = self.error
        return body
