"""Abstract repositories for account state and roles."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.identity import AppRole


class ProfileRepository(ABC):

    @abstractmethod
    def is_active(self, user_id: str) -> bool | None:
        """Return the profile's active flag, or None when there is no profile."""


class UserRoleRepository(ABC):

    @abstractmethod
    def get_role(self, user_id: str) -> AppRole | None:
        """Return the explicit role record for a user, or None."""

    @abstractmethod
    def is_admin(self, user_id: str) -> bool:
        """Ask the backend's role check whether the user is an administrator."""
