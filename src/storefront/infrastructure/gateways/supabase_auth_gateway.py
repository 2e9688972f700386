"""Supabase Auth adapters for the session and token ports.

The supabase client is synchronous; blocking calls run in a worker
thread so the auth bootstrap's event loop keeps ticking.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import httpx
import structlog
from supabase import AuthError, Client

from storefront.domain.exceptions import UpstreamError
from storefront.domain.gateway.auth_gateway import (
    SessionGateway,
    SessionListener,
    TokenVerifier,
)
from storefront.domain.model.identity import AuthSession

logger = structlog.get_logger(__name__)


def _to_session(session) -> AuthSession | None:
    if session is None or session.user is None:
        return None
    return AuthSession(
        user_id=session.user.id,
        access_token=session.access_token,
        email=session.user.email,
    )


class SupabaseSessionGateway(SessionGateway):

    def __init__(self, client: Client) -> None:
        self._client = client

    async def current_session(self) -> AuthSession | None:
        try:
            session = await asyncio.to_thread(self._client.auth.get_session)
        except (AuthError, httpx.HTTPError) as exc:
            raise UpstreamError(f"Failed to restore session: {exc}") from exc
        return _to_session(session)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        def on_change(event, session) -> None:
            logger.debug("Auth state changed", auth_event=str(event))
            listener(_to_session(session))

        subscription = self._client.auth.on_auth_state_change(on_change)
        return subscription.unsubscribe

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession | None:
        try:
            res = await asyncio.to_thread(
                self._client.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except (AuthError, httpx.HTTPError) as exc:
            raise UpstreamError(f"Sign-in failed: {exc}") from exc
        return _to_session(res.session)

    async def sign_out(self) -> None:
        try:
            await asyncio.to_thread(self._client.auth.sign_out)
        except (AuthError, httpx.HTTPError) as exc:
            raise UpstreamError(f"Sign-out failed: {exc}") from exc


class SupabaseTokenVerifier(TokenVerifier):

    def __init__(self, client: Client) -> None:
        self._client = client

    def user_id_for_token(self, token: str) -> str | None:
        try:
            res = self._client.auth.get_user(token)
        except AuthError as exc:
            logger.info("Rejected access token", error=str(exc))
            return None
        if res is None or res.user is None:
            return None
        return res.user.id
