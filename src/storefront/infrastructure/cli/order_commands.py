"""CLI commands for orders."""

from __future__ import annotations

import click

from storefront.application.dto import CartItemSpec, CheckoutSpec, OrderDTO
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.track_order import TrackOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    coupon_repository,
    order_repository,
    payment_method_repository,
    shipping_method_repository,
    shipping_zone_repository,
)
from storefront.infrastructure.config import settings


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Payment:  {dto.payment_status}")
    if dto.courier_status:
        click.echo(f"Courier:  {dto.courier_status}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*56}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*56}")
    click.echo(f"  {'Subtotal':<30} {dto.subtotal:>26}")
    click.echo(f"  {'Discount':<30} {dto.discount:>26}")
    click.echo(f"  {'Shipping':<30} {dto.shipping_cost:>26}")
    click.echo(f"  {'Order Total':<30} {dto.total:>26}")
    click.echo(f"  {'Due on delivery':<30} {dto.due_amount:>26}")


@click.command("track")
@click.option("--number", "order_number", required=True, help="Order number, e.g. ORD-12345678.")
@click.option("--phone", required=True, help="Phone number used at checkout.")
def order_track(order_number: str, phone: str) -> None:
    """Look up an order by number and phone."""
    handler = TrackOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_number, phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--set",
    "status",
    required=True,
    type=click.Choice(["pending", "processing", "shipped", "delivered", "cancelled"]),
    help="New status.",
)
def order_status(order_id: str, status: str) -> None:
    """Change an order's status."""
    handler = UpdateOrderStatusHandler(order_repo=order_repository())

    try:
        handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} is now {status}.")


@click.command("place")
@click.option("--name", "customer_name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Customer phone.")
@click.option("--address", required=True, help="Delivery address.")
@click.option("--city", required=True, help="Delivery city.")
@click.option("--email", default=None, help="Customer email.")
@click.option(
    "--item",
    "items",
    multiple=True,
    required=True,
    type=(str, str, int, str),
    help="PRODUCT_ID NAME QTY UNIT_PRICE. Repeat for multiple items.",
)
@click.option("--coupon", "coupon_code", default=None, help="Coupon code.")
@click.option("--shipping-method", "shipping_method_id", default=None, help="Shipping method ID.")
@click.option("--payment-method", "payment_method_id", default=None, help="Payment method ID.")
@click.option("--transaction-id", default=None, help="Mobile wallet transaction ID.")
@click.option("--notes", default=None, help="Order notes.")
def order_place(
    customer_name: str,
    phone: str,
    address: str,
    city: str,
    email: str | None,
    items: tuple,
    coupon_code: str | None,
    shipping_method_id: str | None,
    payment_method_id: str | None,
    transaction_id: str | None,
    notes: str | None,
) -> None:
    """Place an order from the command line."""
    handler = PlaceOrderHandler(
        order_repo=order_repository(),
        coupon_repo=coupon_repository(),
        payment_method_repo=payment_method_repository(),
        shipping_method_repo=shipping_method_repository(),
        shipping_zone_repo=shipping_zone_repository(),
        currency=settings.STORE_CURRENCY,
    )
    checkout = CheckoutSpec(
        customer_name=customer_name,
        phone=phone,
        address=address,
        city=city,
        email=email,
        items=[
            CartItemSpec(product_id=pid, product_name=name, quantity=qty, unit_price=price)
            for pid, name, qty, price in items
        ],
        coupon_code=coupon_code,
        shipping_method_id=shipping_method_id,
        payment_method_id=payment_method_id,
        transaction_id=transaction_id,
        notes=notes,
    )

    try:
        dto = handler.handle(checkout)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} placed.")
    _display_order(dto)
