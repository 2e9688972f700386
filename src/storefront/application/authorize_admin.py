"""Application service: Authorize Admin use case.

Guards the admin-only relays: the bearer token must belong to a real
user and that user must pass the backend's admin role check. Both checks
happen before any third-party call is made.
"""

from __future__ import annotations

from storefront.domain.exceptions import AuthenticationError, AuthorizationError
from storefront.domain.gateway.auth_gateway import TokenVerifier
from storefront.domain.repository.identity_repository import UserRoleRepository

BEARER_PREFIX = "Bearer "


class AuthorizeAdminHandler:

    def __init__(self, token_verifier: TokenVerifier, role_repo: UserRoleRepository) -> None:
        self._token_verifier = token_verifier
        self._role_repo = role_repo

    def handle(self, authorization: str | None) -> str:
        """Return the admin's user id, or raise 401/403-style errors."""
        if not authorization:
            raise AuthenticationError("Unauthorized")

        token = authorization.replace(BEARER_PREFIX, "", 1).strip()
        user_id = self._token_verifier.user_id_for_token(token) if token else None
        if not user_id:
            raise AuthenticationError("Unauthorized")

        if not self._role_repo.is_admin(user_id):
            raise AuthorizationError("Admin access required")
        return user_id
