"""Runtime configuration read from the environment (and a local .env file)."""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    PROJECT_NAME: str = "storefront"

    def __init__(self) -> None:
        self.SUPABASE_URL: str | None = os.getenv("SUPABASE_URL")
        self.SUPABASE_ANON_KEY: str | None = os.getenv("SUPABASE_ANON_KEY")
        # Service role bypasses row-level security; only the relays use it.
        self.SUPABASE_SERVICE_ROLE_KEY: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
        self.FB_CAPI_ACCESS_TOKEN: str | None = os.getenv("FB_CAPI_ACCESS_TOKEN")
        self.STORE_CURRENCY: str = os.getenv("STORE_CURRENCY", "BDT")
        self.AUTH_TIMEOUT_SECONDS: float = float(os.getenv("AUTH_TIMEOUT_SECONDS", "8"))
        self.HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))
        self.CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development").lower()
        self.LOG_LEVEL: str | None = os.getenv("LOG_LEVEL")


settings = Settings()
