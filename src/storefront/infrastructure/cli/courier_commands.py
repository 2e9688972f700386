"""CLI commands for the courier integration."""

from __future__ import annotations

import click

from storefront.application.courier_actions import CourierConnectionCheckHandler, TrackParcelHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.courier import map_delivery_status
from storefront.infrastructure.bootstrap import (
    courier_gateway,
    courier_log_repository,
    courier_settings_repository,
    relay_order_repository,
)


@click.command("test")
def courier_test() -> None:
    """Check the courier credentials by fetching the account balance."""
    handler = CourierConnectionCheckHandler(courier_settings_repository(), courier_gateway())

    try:
        result = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.success:
        raise click.ClickException(str(result.error))
    click.echo(f"Connected. Balance: {result.data.get('balance')}")


@click.command("track")
@click.option("--consignment-id", required=True, help="Carrier consignment ID.")
@click.option("--order-id", default=None, help="Order to update with the status.")
def courier_track(consignment_id: str, order_id: str | None) -> None:
    """Fetch a consignment's status and apply it to the order."""
    handler = TrackParcelHandler(
        settings_repo=courier_settings_repository(),
        gateway=courier_gateway(),
        order_repo=relay_order_repository(),
        log_repo=courier_log_repository(),
    )

    try:
        result = handler.handle(consignment_id, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.success:
        raise click.ClickException(str(result.error))
    click.echo(
        f"Consignment {consignment_id}: {result.data['delivery_status']} "
        f"(courier status={result.data['courier_status']})"
    )


@click.command("map-status")
@click.argument("delivery_status", required=False, default="")
def courier_map_status(delivery_status: str) -> None:
    """Show which courier status a carrier delivery status maps to."""
    click.echo(map_delivery_status(delivery_status).value)
