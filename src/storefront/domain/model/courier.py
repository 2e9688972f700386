"""Courier (shipping carrier) integration model.

The carrier reports free-form delivery status strings; ``map_delivery_status``
reduces them to the small set of states the storefront tracks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

STEADFAST = "steadfast"


class CourierStatus(Enum):
    CREATED = "created"
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_EXACT_STATUSES = {
    "delivered": CourierStatus.DELIVERED,
    "cancelled": CourierStatus.CANCELLED,
    "pending": CourierStatus.PENDING,
    "in_review": CourierStatus.PENDING,
}


def map_delivery_status(raw: str | None) -> CourierStatus:
    """Map a carrier delivery status onto ``CourierStatus``.

    Matching is case-insensitive. Any other non-empty value means the
    parcel is moving; an empty or missing value leaves it at ``CREATED``.
    """
    if not raw:
        return CourierStatus.CREATED
    return _EXACT_STATUSES.get(raw.lower(), CourierStatus.IN_TRANSIT)


@dataclass
class CourierSettings:
    """Per-provider credentials and pickup defaults."""

    provider: str
    enabled: bool
    api_base_url: str
    api_key: str | None = None
    api_secret: str | None = None
    pickup_address: str | None = None
    pickup_phone: str | None = None
    default_weight: float | None = None
    cod_enabled: bool = True

    def public_view(self) -> dict:
        """Settings without the secrets, safe to return to the admin UI."""
        return {
            "enabled": self.enabled,
            "api_base_url": self.api_base_url,
            "pickup_address": self.pickup_address,
            "pickup_phone": self.pickup_phone,
            "default_weight": self.default_weight,
            "cod_enabled": self.cod_enabled,
            "has_api_key": bool(self.api_key),
            "has_api_secret": bool(self.api_secret),
        }


@dataclass(frozen=True)
class ParcelRequest:
    """What the carrier needs to create a consignment."""

    invoice: str
    recipient_name: str
    recipient_phone: str
    recipient_address: str
    cod_amount: float
    note: str = ""

    def to_payload(self) -> dict:
        return {
            "invoice": self.invoice,
            "recipient_name": self.recipient_name,
            "recipient_phone": self.recipient_phone,
            "recipient_address": self.recipient_address,
            "cod_amount": self.cod_amount,
            "note": self.note,
        }


@dataclass(frozen=True)
class CarrierResponse:
    """Raw carrier reply.

    ``http_ok`` reflects the transport status and decides what the audit
    log records; ``ok`` additionally requires the carrier's own
    ``status == 200`` and decides whether the action succeeded.
    """

    http_ok: bool
    data: dict

    @property
    def ok(self) -> bool:
        return self.http_ok and self.data.get("status") == 200

    @property
    def log_status(self) -> str:
        return "success" if self.http_ok else "failed"

    @property
    def message(self) -> str:
        return str(self.data.get("message") or "")


@dataclass(frozen=True)
class CourierLogEntry:
    """One row of the courier audit trail."""

    order_id: str | None
    provider: str
    action: str
    status: str  # "success" | "failed"
    message: str
    request_payload: dict
    response_payload: dict
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
