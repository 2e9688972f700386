import click

from storefront.infrastructure.cli.auth_commands import auth_status
from storefront.infrastructure.cli.catalog_commands import (
    product_variant,
    review_approve,
    review_list,
    review_submit,
    wishlist_list,
    wishlist_toggle,
)
from storefront.infrastructure.cli.checkout_commands import checkout_options
from storefront.infrastructure.cli.coupon_commands import (
    coupon_create,
    coupon_list,
    coupon_validate,
)
from storefront.infrastructure.cli.courier_commands import (
    courier_map_status,
    courier_test,
    courier_track,
)
from storefront.infrastructure.cli.order_commands import order_place, order_status, order_track
from storefront.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Storefront backend tools"""
    configure_logging()


@cli.group()
def coupon() -> None:
    """Manage coupons."""


@cli.group()
def order() -> None:
    """Place, track and update orders."""


@cli.group()
def courier() -> None:
    """Courier integration."""


@cli.group()
def checkout() -> None:
    """Checkout configuration."""


@cli.group()
def product() -> None:
    """Product variants."""


@cli.group()
def review() -> None:
    """Product reviews."""


@cli.group()
def wishlist() -> None:
    """Wishlists for users and guest sessions."""


@cli.group()
def auth() -> None:
    """Sessions and permissions."""


# Register subcommands
coupon.add_command(coupon_create)
coupon.add_command(coupon_list)
coupon.add_command(coupon_validate)
order.add_command(order_place)
order.add_command(order_status)
order.add_command(order_track)
courier.add_command(courier_map_status)
courier.add_command(courier_test)
courier.add_command(courier_track)
checkout.add_command(checkout_options)
product.add_command(product_variant)
review.add_command(review_approve)
review.add_command(review_list)
review.add_command(review_submit)
wishlist.add_command(wishlist_list)
wishlist.add_command(wishlist_toggle)
auth.add_command(auth_status)
