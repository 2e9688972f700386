"""Application service: auth/session bootstrap.

``AuthSessionContext`` turns backend session notifications into a small
state machine and the permission flags derived from the user's role:

    initializing -> authenticated | anonymous | disabled | timed_out

The first resolution races a bounded wait. Whichever finishes first
settles the bootstrap; the loser's result is dropped. A generation
counter makes every transition single-assignment: the timeout, each
session change, a disabled account and an explicit sign-out all bump it,
so only the newest lookup may publish. Session changes that arrive after
the bootstrap settled start a fresh lookup and are applied normally.

The disabled-account check always completes before the role lookup, so
an account that was deactivated never observes elevated permissions.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog

from storefront.domain.exceptions import UpstreamError
from storefront.domain.gateway.auth_gateway import SessionGateway
from storefront.domain.model.identity import AppRole, AuthSession, Permissions
from storefront.domain.repository.identity_repository import (
    ProfileRepository,
    UserRoleRepository,
)

logger = structlog.get_logger(__name__)

AUTH_TIMEOUT_SECONDS = 8.0
ACCOUNT_DISABLED_MESSAGE = "Your account has been disabled. Contact an administrator."
AUTH_TIMEOUT_MESSAGE = "Auth initialization timed out"


class AuthState(Enum):
    INITIALIZING = "initializing"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"
    DISABLED = "disabled"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class AuthSnapshot:
    state: AuthState = AuthState.INITIALIZING
    session: AuthSession | None = None
    role: AppRole | None = None
    error: str | None = None

    @property
    def permissions(self) -> Permissions:
        if self.state is not AuthState.AUTHENTICATED:
            return Permissions()
        return Permissions.for_role(self.role)

    @property
    def is_admin(self) -> bool:
        return self.permissions.is_admin

    @property
    def is_staff(self) -> bool:
        return self.permissions.is_staff

    @property
    def is_loading(self) -> bool:
        return self.state is AuthState.INITIALIZING

    @property
    def user_id(self) -> str | None:
        return self.session.user_id if self.session else None


class AuthSessionContext:
    """Explicit auth context with a start/close lifecycle.

    Use as ``async with AuthSessionContext(...) as auth:``; ``close()``
    unsubscribes from session changes, cancels the pending timeout and any
    lookups in flight. Nothing is published after close.
    """

    def __init__(
        self,
        gateway: SessionGateway,
        profile_repo: ProfileRepository,
        role_repo: UserRoleRepository,
        timeout: float = AUTH_TIMEOUT_SECONDS,
    ) -> None:
        self._gateway = gateway
        self._profile_repo = profile_repo
        self._role_repo = role_repo
        self._timeout = timeout

        self._snapshot = AuthSnapshot()
        self._generation = 0
        self._settled = False
        self._closed = False
        self._loop: asyncio.AbstractEventLoop | None = None
        self._settled_event: asyncio.Event | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def snapshot(self) -> AuthSnapshot:
        return self._snapshot

    # --- Lifecycle ------------------------------------------------------------

    async def start(self) -> None:
        if self._loop is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._settled_event = asyncio.Event()
        self._timer = self._loop.call_later(self._timeout, self._on_timeout)
        self._unsubscribe = self._gateway.subscribe(self._on_session_change)
        self._spawn(self._restore_session(self._generation))

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> AuthSessionContext:
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def wait_settled(self) -> AuthSnapshot:
        """Wait until the bootstrap resolved or timed out."""
        if self._settled_event is None:
            raise RuntimeError("AuthSessionContext.start() has not been called")
        await self._settled_event.wait()
        return self._snapshot

    async def sign_out(self) -> None:
        await self._gateway.sign_out()
        self._publish(self._next_generation(), AuthSnapshot(state=AuthState.ANONYMOUS))

    # --- Event sources --------------------------------------------------------

    def _on_session_change(self, session: AuthSession | None) -> None:
        # May run on the auth client's thread.
        loop = self._loop
        if loop is None or self._closed or loop.is_closed():
            return
        loop.call_soon_threadsafe(self._schedule_resolve, session)

    def _schedule_resolve(self, session: AuthSession | None) -> None:
        if self._closed:
            return
        self._spawn(self._resolve(session, self._next_generation()))

    def _on_timeout(self) -> None:
        self._timer = None
        if self._settled or self._closed:
            return
        logger.warning("Auth initialization timed out", timeout=self._timeout)
        self._next_generation()
        self._snapshot = AuthSnapshot(state=AuthState.TIMED_OUT, error=AUTH_TIMEOUT_MESSAGE)
        self._settle()

    async def _restore_session(self, generation: int) -> None:
        try:
            session = await self._gateway.current_session()
        except UpstreamError as exc:
            logger.error("Failed to restore session", error=str(exc))
            self._publish(generation, AuthSnapshot(state=AuthState.ANONYMOUS, error=str(exc)))
            return
        await self._resolve(session, generation)

    # --- Resolution -----------------------------------------------------------

    async def _resolve(self, session: AuthSession | None, generation: int) -> None:
        if session is None:
            if self._snapshot.state is AuthState.DISABLED:
                # The sign-out forced for a disabled account echoes back here.
                return
            self._publish(generation, AuthSnapshot(state=AuthState.ANONYMOUS))
            return

        try:
            active = await asyncio.to_thread(self._profile_repo.is_active, session.user_id)
            if generation != self._generation:
                return
            if active is False:
                self._publish(
                    generation,
                    AuthSnapshot(state=AuthState.DISABLED, error=ACCOUNT_DISABLED_MESSAGE),
                )
                # Lookups still in flight for this account must not publish.
                self._next_generation()
                await self._force_sign_out(session)
                return

            role = await asyncio.to_thread(self._role_repo.get_role, session.user_id)
        except UpstreamError as exc:
            logger.error("Error checking roles", user_id=session.user_id, error=str(exc))
            self._publish(
                generation,
                AuthSnapshot(state=AuthState.AUTHENTICATED, session=session, error=str(exc)),
            )
            return

        self._publish(
            generation,
            AuthSnapshot(
                state=AuthState.AUTHENTICATED,
                session=session,
                role=role or AppRole.CUSTOMER,
            ),
        )

    async def _force_sign_out(self, session: AuthSession) -> None:
        logger.info("Signing out disabled account", user_id=session.user_id)
        try:
            await self._gateway.sign_out()
        except UpstreamError as exc:
            logger.error("Sign-out of disabled account failed", error=str(exc))

    # --- Internal helpers -----------------------------------------------------

    def _publish(self, generation: int, snapshot: AuthSnapshot) -> None:
        if self._closed or generation != self._generation:
            return
        self._snapshot = snapshot
        self._settle()

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _settle(self) -> None:
        if self._settled:
            return
        self._settled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._settled_event is not None:
            self._settled_event.set()

    def _spawn(self, coro) -> None:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
