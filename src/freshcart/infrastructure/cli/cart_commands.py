"""CLI commands for the local cart."""

from __future__ import annotations

import click

from freshcart.domain.exceptions import DomainException
from freshcart.domain.model.value_objects import ProductKey
from freshcart.infrastructure.bootstrap import Container


def _display_cart(container: Container) -> None:
    dto = container.cart.summary()
    if not dto.items:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'Item':<14} {'Product':<22} {'Qty':>4} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*63}")
    for item in dto.items:
        click.echo(
            f"  {item.key:<14} {item.name:<22} {item.quantity:>4} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*63}")
    click.echo(f"  {'Items':<41} {dto.total_quantity:>22}")
    click.echo(f"  {'Item Total':<41} {dto.subtotal:>22}")
    if dto.savings != "₹0.00":
        click.echo(f"  {'You save':<41} {dto.savings:>22}")


@click.command("add")
@click.argument("key")
@click.option("--qty", default=1, type=int, help="Units to add.")
@click.pass_obj
def cart_add(container: Container, key: str, qty: int) -> None:
    """Add a product, e.g. 'fruit:3'."""
    try:
        product = container.catalog.get(ProductKey.parse(key))
        container.cart.add(product, qty)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {product.name} to cart ({container.cart.total_quantity()} items).")


@click.command("set")
@click.argument("key")
@click.argument("quantity", type=int)
@click.pass_obj
def cart_set(container: Container, key: str, quantity: int) -> None:
    """Set a line's quantity; 0 removes it."""
    try:
        container.cart.set_quantity(ProductKey.parse(key), quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(container)


@click.command("remove")
@click.argument("key")
@click.pass_obj
def cart_remove(container: Container, key: str) -> None:
    """Remove a line from the cart."""
    try:
        container.cart.remove(ProductKey.parse(key))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Removed {key}.")


@click.command("show")
@click.pass_obj
def cart_show(container: Container) -> None:
    """Show the cart."""
    _display_cart(container)


@click.command("clear")
@click.pass_obj
def cart_clear(container: Container) -> None:
    """Empty the cart."""
    container.cart.clear()
    click.echo("Cart cleared.")
