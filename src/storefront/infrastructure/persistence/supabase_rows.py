"""Shared helpers for the Supabase-backed repositories."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import httpx
import structlog
from postgrest.exceptions import APIError

from storefront.domain.exceptions import UpstreamError
from storefront.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)


def execute(query, action: str):
    """Run a PostgREST query; backend and transport failures become UpstreamError."""
    try:
        return query.execute()
    except (APIError, httpx.HTTPError) as exc:
        logger.error("Supabase query failed", action=action, error=str(exc))
        raise UpstreamError(f"Failed to {action}") from exc


def first_row(response) -> dict | None:
    rows = response.data or []
    return rows[0] if rows else None


def to_decimal(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def to_money(value, currency: str) -> Money:
    return Money(to_decimal(value), currency)


def to_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
