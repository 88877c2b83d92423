"""CLI commands for the wishlist."""

from __future__ import annotations

import click

from freshcart.domain.exceptions import DomainException, LoginRequired
from freshcart.domain.model.value_objects import ProductKey
from freshcart.infrastructure.bootstrap import Container


@click.command("toggle")
@click.argument("key")
@click.pass_obj
def wishlist_toggle(container: Container, key: str) -> None:
    """Add a product to the wishlist, or remove it."""
    try:
        product = container.catalog.get(ProductKey.parse(key))
        present = container.wishlist.toggle(product)
    except LoginRequired as exc:
        raise click.ClickException(f"{exc}. Run 'freshcart auth login' first.")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if present:
        click.echo(f"Saved {product.name} to your wishlist.")
    else:
        click.echo(f"Removed {product.name} from your wishlist.")


@click.command("show")
@click.pass_obj
def wishlist_show(container: Container) -> None:
    """List saved products."""
    entries = container.wishlist.list()
    if not entries:
        click.echo("There is nothing in the wishlist.")
        return

    click.echo(f"{len(entries)} items saved")
    for entry in entries:
        click.echo(f"  {str(entry.key):<14} {entry.snapshot.name:<24} {str(entry.snapshot.price.displayed):>10}")


@click.command("move")
@click.argument("key")
@click.pass_obj
def wishlist_move(container: Container, key: str) -> None:
    """Move a saved product into the cart."""
    try:
        container.wishlist.move_to_cart(ProductKey.parse(key))
    except LoginRequired as exc:
        raise click.ClickException(f"{exc}. Run 'freshcart auth login' first.")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Moved {key} to cart.")
