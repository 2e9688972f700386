"""Lazily created Supabase clients."""

from __future__ import annotations

from supabase import Client, create_client

from storefront.infrastructure.config import settings

_anon_client: Client | None = None
_service_client: Client | None = None


def get_client() -> Client:
    """Client with the public key; row-level security applies."""
    global _anon_client
    if _anon_client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
            raise RuntimeError("Supabase URL/Key not configured. See .env")
        _anon_client = create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
    return _anon_client


def get_service_client() -> Client:
    """Client with the service role key, for the server-side relays."""
    global _service_client
    if _service_client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise RuntimeError("Supabase URL/service role key not configured. See .env")
        _service_client = create_client(
            settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY
        )
    return _service_client
