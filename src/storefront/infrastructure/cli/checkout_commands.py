"""CLI commands for checkout configuration."""

from __future__ import annotations

import click

from storefront.application.checkout_options import CheckoutOptionsHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    payment_method_repository,
    shipping_method_repository,
    shipping_zone_repository,
)


@click.command("options")
@click.option("--city", default=None, help="Delivery city, to resolve the shipping zone.")
def checkout_options(city: str | None) -> None:
    """Show enabled payment methods, shipping methods and the zone rate."""
    handler = CheckoutOptionsHandler(
        payment_method_repo=payment_method_repository(),
        shipping_method_repo=shipping_method_repository(),
        shipping_zone_repo=shipping_zone_repository(),
    )

    try:
        options = handler.handle(city)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Payment methods:")
    for method in options.payment_methods:
        extra = " (advance payment)" if method.allows_partial_payment else ""
        click.echo(f"  {method.code:<12} {method.name}{extra}")

    click.echo("Shipping methods:")
    for shipping in options.shipping_methods:
        click.echo(f"  {shipping.name:<24} {str(shipping.base_rate):>12}")

    if city:
        if options.zone is None:
            click.echo(f"No shipping zone for {city}.")
        else:
            click.echo(f"Zone for {city}: {options.zone.name} at {options.zone.rate}")
