"""Application services: wishlists for signed-in users and guest sessions."""

from __future__ import annotations

from storefront.domain.model.catalog import WishlistOwner
from storefront.domain.repository.catalog_repository import WishlistRepository


class ToggleWishlistHandler:

    def __init__(self, wishlist_repo: WishlistRepository) -> None:
        self._wishlist_repo = wishlist_repo

    def handle(self, owner: WishlistOwner, product_id: str) -> bool:
        """Add the product if absent, remove it if present.

        Returns True when the product is on the wishlist afterwards.
        """
        current = {item.product_id for item in self._wishlist_repo.list_for_owner(owner)}
        if product_id in current:
            self._wishlist_repo.remove(owner, product_id)
            return False
        self._wishlist_repo.add(owner, product_id)
        return True


class ListWishlistHandler:

    def __init__(self, wishlist_repo: WishlistRepository) -> None:
        self._wishlist_repo = wishlist_repo

    def handle(self, owner: WishlistOwner) -> list[str]:
        """Product ids on the owner's wishlist."""
        return [item.product_id for item in self._wishlist_repo.list_for_owner(owner)]
