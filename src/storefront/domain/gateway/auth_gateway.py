"""Auth ports: session notifications for the storefront, and bearer-token
verification for the admin-only relays."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from storefront.domain.model.identity import AuthSession

SessionListener = Callable[[AuthSession | None], None]


class SessionGateway(ABC):

    @abstractmethod
    async def current_session(self) -> AuthSession | None:
        """Return the session restored from storage, if any."""

    @abstractmethod
    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register for session changes; returns the unsubscribe callable.

        Listeners may be invoked from a thread other than the event loop's.
        """

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSession | None:
        """Start a session from email and password credentials."""

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session."""


class TokenVerifier(ABC):

    @abstractmethod
    def user_id_for_token(self, token: str) -> str | None:
        """Validate an access token; return its user id, or None if invalid."""
