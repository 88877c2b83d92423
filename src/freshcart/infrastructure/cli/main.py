import logging

import click

from freshcart.infrastructure.bootstrap import build_container
from freshcart.infrastructure.cli.auth_commands import auth_login, auth_logout
from freshcart.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_set,
    cart_show,
)
from freshcart.infrastructure.cli.catalog_commands import (
    catalog_deals,
    catalog_list,
    catalog_search,
    catalog_show,
)
from freshcart.infrastructure.cli.checkout_commands import checkout_pay, checkout_summary
from freshcart.infrastructure.cli.order_commands import orders_list, orders_show
from freshcart.infrastructure.cli.profile_commands import profile_show, profile_update
from freshcart.infrastructure.cli.subscription_commands import (
    subscription_preview,
    subscription_show,
)
from freshcart.infrastructure.cli.wishlist_commands import (
    wishlist_move,
    wishlist_show,
    wishlist_toggle,
)
from freshcart.infrastructure.config import get_settings


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at INFO level.")
@click.option("--offline", is_flag=True, default=False, help="Use the bundled catalog.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, offline: bool) -> None:
    """freshcart — fruit and subscription storefront"""
    settings = get_settings()
    logging.basicConfig(
        level=logging.INFO if verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.obj is None:
        ctx.obj = build_container(settings, offline_catalog=offline)


@cli.group()
def catalog() -> None:
    """Browse products."""


@cli.group()
def cart() -> None:
    """Manage the cart."""


@cli.group()
def wishlist() -> None:
    """Manage the wishlist."""


@cli.group()
def auth() -> None:
    """Log in and out."""


@cli.group()
def profile() -> None:
    """View and edit the customer profile."""


@cli.group()
def checkout() -> None:
    """Apply coupons and pay."""


@cli.group()
def orders() -> None:
    """Review past orders."""


@cli.group()
def subscription() -> None:
    """Track subscription deliveries."""


# Register subcommands
catalog.add_command(catalog_deals)
catalog.add_command(catalog_list)
catalog.add_command(catalog_search)
catalog.add_command(catalog_show)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_set)
cart.add_command(cart_show)
wishlist.add_command(wishlist_move)
wishlist.add_command(wishlist_show)
wishlist.add_command(wishlist_toggle)
auth.add_command(auth_login)
auth.add_command(auth_logout)
profile.add_command(profile_show)
profile.add_command(profile_update)
checkout.add_command(checkout_pay)
checkout.add_command(checkout_summary)
orders.add_command(orders_list)
orders.add_command(orders_show)
subscription.add_command(subscription_preview)
subscription.add_command(subscription_show)
