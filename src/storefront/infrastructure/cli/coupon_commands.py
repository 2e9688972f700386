"""CLI commands for coupons."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from storefront.application.manage_coupons import CreateCouponHandler
from storefront.application.validate_coupon import ValidateCouponHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import coupon_repository
from storefront.infrastructure.config import settings


@click.command("validate")
@click.option("--code", required=True, help="Coupon code (case-insensitive).")
@click.option("--subtotal", required=True, help="Cart subtotal (e.g. 1000.00).")
def coupon_validate(code: str, subtotal: str) -> None:
    """Check whether a coupon applies to a cart subtotal."""
    handler = ValidateCouponHandler(coupon_repo=coupon_repository())

    try:
        dto = handler.handle(code, Money.of(subtotal, settings.STORE_CURRENCY))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Coupon {dto.code} is valid ({dto.discount_type})")
    click.echo(f"Discount: {dto.discount_amount}")
    if dto.waives_shipping:
        click.echo("Shipping: free")


@click.command("list")
def coupon_list() -> None:
    """List all coupons."""
    try:
        coupons = coupon_repository().list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not coupons:
        click.echo("No coupons found.")
        return

    click.echo(f"{'Code':<16} {'Type':<14} {'Value':>8} {'Used':>6} {'Max':>6} {'Active':<6}")
    click.echo("-" * 61)
    for c in coupons:
        max_uses = "-" if c.max_uses is None else str(c.max_uses)
        active = "yes" if c.is_active else "no"
        click.echo(
            f"{c.code:<16} {c.discount_type.value:<14} {str(c.discount_value):>8} "
            f"{c.used_count:>6} {max_uses:>6} {active:<6}"
        )


@click.command("create")
@click.option("--code", required=True, help="Coupon code; stored upper-cased.")
@click.option(
    "--type",
    "discount_type",
    required=True,
    type=click.Choice(["percentage", "fixed", "free_shipping"]),
    help="Discount type.",
)
@click.option("--value", "discount_value", default="0", help="Percent or fixed amount.")
@click.option("--min-order", "min_order_amount", default="0", help="Minimum subtotal.")
@click.option("--max-uses", type=int, default=None, help="Usage cap; omit for unlimited.")
@click.option("--expires", type=click.DateTime(), default=None, help="Expiry (UTC).")
@click.option("--description", default=None, help="Free-form description.")
def coupon_create(
    code: str,
    discount_type: str,
    discount_value: str,
    min_order_amount: str,
    max_uses: int | None,
    expires: datetime | None,
    description: str | None,
) -> None:
    """Create a coupon."""
    handler = CreateCouponHandler(
        coupon_repo=coupon_repository(), currency=settings.STORE_CURRENCY
    )

    try:
        coupon = handler.handle(
            code=code,
            discount_type=discount_type,
            discount_value=discount_value,
            min_order_amount=min_order_amount,
            max_uses=max_uses,
            expires_at=_as_utc(expires),
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Coupon {coupon.code} created")


def _as_utc(value: datetime | None) -> datetime | None:
    return value.replace(tzinfo=timezone.utc) if value else None
