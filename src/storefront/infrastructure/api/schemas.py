"""Pydantic request schemas for the HTTP relays.

Required business fields are optional here on purpose: the use cases
report them as validation errors with the messages the storefront shows.
"""

from __future__ import annotations

from pydantic import BaseModel


class ConversionEventRequest(BaseModel):
    event_name: str | None = None
    event_id: str | None = None
    event_source_url: str | None = None
    user_data: dict | None = None
    custom_data: dict | None = None
    test_mode: bool = False


class CreateParcelRequest(BaseModel):
    order_id: str
    invoice: str
    recipient_name: str
    recipient_phone: str
    recipient_address: str
    cod_amount: float
    note: str = ""


class TrackStatusRequest(BaseModel):
    consignment_id: str | int | None = None
    order_id: str | None = None
