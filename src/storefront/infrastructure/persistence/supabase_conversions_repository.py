"""Supabase-backed Conversions API settings.

Settings live on the single ``site_settings`` row; the access token is
kept apart in ``capi_secrets``, readable by the service role only.
"""

from __future__ import annotations

from supabase import Client

from storefront.domain.model.conversions import ConversionSettings
from storefront.domain.repository.conversions_repository import ConversionSettingsRepository
from storefront.infrastructure.persistence.supabase_rows import execute, first_row

SETTINGS_ROW_ID = "global"
SETTINGS_COLUMNS = (
    "fb_capi_enabled, fb_capi_dataset_id, fb_pixel_id, "
    "fb_capi_test_event_code, fb_capi_api_version"
)


class SupabaseConversionSettingsRepository(ConversionSettingsRepository):

    def __init__(self, client: Client) -> None:
        self._client = client

    def get_settings(self) -> ConversionSettings | None:
        res = execute(
            self._client.table("site_settings")
            .select(SETTINGS_COLUMNS)
            .eq("id", SETTINGS_ROW_ID)
            .limit(1),
            "load conversion settings",
        )
        row = first_row(res)
        if row is None:
            return None
        return ConversionSettings(
            enabled=bool(row.get("fb_capi_enabled")),
            dataset_id=row.get("fb_capi_dataset_id"),
            pixel_id=row.get("fb_pixel_id"),
            test_event_code=row.get("fb_capi_test_event_code"),
            api_version=row.get("fb_capi_api_version"),
        )

    def get_access_token(self) -> str | None:
        res = execute(
            self._client.table("capi_secrets")
            .select("access_token")
            .eq("id", SETTINGS_ROW_ID)
            .limit(1),
            "load access token",
        )
        row = first_row(res)
        return row.get("access_token") if row else None
