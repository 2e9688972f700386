"""Supabase-backed courier settings and audit log."""

from __future__ import annotations

from supabase import Client

from storefront.domain.model.courier import CourierLogEntry, CourierSettings
from storefront.domain.repository.courier_repository import (
    CourierLogRepository,
    CourierSettingsRepository,
)
from storefront.infrastructure.persistence.supabase_rows import execute, first_row, iso

DEFAULT_API_BASE_URL = "https://portal.packzy.com/api/v1"


class SupabaseCourierSettingsRepository(CourierSettingsRepository):

    def __init__(self, client: Client) -> None:
        self._client = client

    def get_for_provider(self, provider: str) -> CourierSettings | None:
        res = execute(
            self._client.table("courier_settings").select("*").eq("provider", provider).limit(1),
            "load courier settings",
        )
        row = first_row(res)
        if row is None:
            return None
        weight = row.get("default_weight")
        return CourierSettings(
            provider=row["provider"],
            enabled=bool(row.get("enabled")),
            api_base_url=row.get("api_base_url") or DEFAULT_API_BASE_URL,
            api_key=row.get("api_key"),
            api_secret=row.get("api_secret"),
            pickup_address=row.get("pickup_address"),
            pickup_phone=row.get("pickup_phone"),
            default_weight=float(weight) if weight is not None else None,
            cod_enabled=row.get("cod_enabled") is not False,
        )


class SupabaseCourierLogRepository(CourierLogRepository):

    def __init__(self, client: Client) -> None:
        self._client = client

    def add(self, entry: CourierLogEntry) -> None:
        execute(
            self._client.table("courier_logs").insert(
                {
                    "order_id": entry.order_id,
                    "provider": entry.provider,
                    "action": entry.action,
                    "status": entry.status,
                    "message": entry.message,
                    "request_payload": entry.request_payload,
                    "response_payload": entry.response_payload,
                    "created_at": iso(entry.created_at),
                }
            ),
            "write courier log",
        )
