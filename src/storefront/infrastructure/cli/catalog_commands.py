"""CLI commands for the product catalog: variants, reviews and wishlists."""

from __future__ import annotations

import click

from storefront.application.reviews import (
    ApproveReviewHandler,
    ListProductReviewsHandler,
    SubmitReviewHandler,
)
from storefront.application.select_variant import SelectVariantHandler
from storefront.application.wishlist import ListWishlistHandler, ToggleWishlistHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.catalog import WishlistOwner
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import (
    review_repository,
    variant_repository,
    wishlist_repository,
)
from storefront.infrastructure.config import settings


@click.command("variant")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--base-price", required=True, help="Product base price (e.g. 450.00).")
@click.option("--size", default=None, help="Size to select.")
@click.option("--color", default=None, help="Color to select.")
def product_variant(product_id: str, base_price: str, size: str | None, color: str | None) -> None:
    """Resolve a size/color choice to a variant and its price."""
    handler = SelectVariantHandler(variant_repo=variant_repository())

    try:
        choice = handler.handle(
            product_id, Money.of(base_price, settings.STORE_CURRENCY), size, color
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    variant = choice.variant
    label = " / ".join(v for v in (variant.size, variant.color) if v) or "default"
    click.echo(f"{variant.sku}: {label} at {choice.unit_price} ({variant.stock} in stock)")


# --- Reviews ------------------------------------------------------------------


@click.command("list")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--all", "include_pending", is_flag=True, help="Include unapproved reviews.")
def review_list(product_id: str, include_pending: bool) -> None:
    """List a product's reviews, newest first."""
    handler = ListProductReviewsHandler(review_repo=review_repository())

    try:
        reviews = handler.handle(product_id, approved_only=not include_pending)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not reviews:
        click.echo("No reviews found.")
        return
    for r in reviews:
        flags = "" if r.is_approved else " [pending]"
        verified = " (verified purchase)" if r.verified_purchase else ""
        click.echo(f"{r.id}  {'*' * r.rating:<5}  {r.name}{verified}{flags}")
        click.echo(f"    {r.text}")


@click.command("submit")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Reviewer name.")
@click.option("--rating", required=True, type=int, help="Rating from 1 to 5.")
@click.option("--text", required=True, help="Review text.")
@click.option("--order-id", default=None, help="Order the product was bought in.")
def review_submit(
    product_id: str, name: str, rating: int, text: str, order_id: str | None
) -> None:
    """Submit a review; it is held for approval."""
    handler = SubmitReviewHandler(review_repo=review_repository())

    try:
        review = handler.handle(product_id, name, rating, text, order_id=order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Review {review.id} submitted for approval.")


@click.command("approve")
@click.option("--id", "review_id", required=True, help="Review ID.")
def review_approve(review_id: str) -> None:
    """Approve a review so it shows on the storefront."""
    handler = ApproveReviewHandler(review_repo=review_repository())

    try:
        handler.handle(review_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Review {review_id} approved.")


# --- Wishlists ----------------------------------------------------------------


def _owner(user_id: str | None, session_id: str | None) -> WishlistOwner:
    try:
        return WishlistOwner(user_id=user_id, session_id=session_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("list")
@click.option("--user-id", default=None, help="Signed-in user ID.")
@click.option("--session-id", default=None, help="Guest session ID.")
def wishlist_list(user_id: str | None, session_id: str | None) -> None:
    """Show the products on a wishlist."""
    owner = _owner(user_id, session_id)
    handler = ListWishlistHandler(wishlist_repo=wishlist_repository())

    try:
        product_ids = handler.handle(owner)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not product_ids:
        click.echo("Wishlist is empty.")
        return
    for product_id in product_ids:
        click.echo(product_id)


@click.command("toggle")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--user-id", default=None, help="Signed-in user ID.")
@click.option("--session-id", default=None, help="Guest session ID.")
def wishlist_toggle(product_id: str, user_id: str | None, session_id: str | None) -> None:
    """Add a product to a wishlist, or remove it if already there."""
    owner = _owner(user_id, session_id)
    handler = ToggleWishlistHandler(wishlist_repo=wishlist_repository())

    try:
        added = handler.handle(owner, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{product_id} {'added to' if added else 'removed from'} the wishlist.")
