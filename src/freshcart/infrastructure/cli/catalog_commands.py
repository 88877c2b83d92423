"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from freshcart.domain.exceptions import DomainException
from freshcart.domain.model.product import Product
from freshcart.domain.model.value_objects import Money, ProductKey
from freshcart.infrastructure.bootstrap import Container


def _print_products(products: list[Product]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'Key':<16} {'Name':<24} {'Price':>10} {'MRP':>10}")
    click.echo("-" * 63)
    for p in products:
        mrp = str(p.original_price) if p.original_price else ""
        click.echo(f"{str(p.key):<16} {p.name:<24} {str(p.price):>10} {mrp:>10}")


@click.command("list")
@click.option("--type", "type_", default=None, help="Only this product type.")
@click.pass_obj
def catalog_list(container: Container, type_: str | None) -> None:
    """List all products in the catalog."""
    products = container.catalog.fetch_all()
    if not products:
        raise click.ClickException("Catalog is temporarily unavailable. Please try again.")
    if type_:
        products = [p for p in products if p.type.value == type_.lower()]
    _print_products(products)


@click.command("search")
@click.argument("query")
@click.pass_obj
def catalog_search(container: Container, query: str) -> None:
    """Search products by name, category or description."""
    _print_products(container.catalog.search(query))


@click.command("deals")
@click.option("--max-price", default="100", help="Price ceiling (e.g. 100).")
@click.pass_obj
def catalog_deals(container: Container, max_price: str) -> None:
    """Discounted products under a price."""
    try:
        ceiling = Money.of(max_price)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _print_products(container.catalog.price_drops(ceiling))


@click.command("show")
@click.argument("key")
@click.pass_obj
def catalog_show(container: Container, key: str) -> None:
    """Show one product, e.g. 'fruit:3'."""
    try:
        product = container.catalog.get(ProductKey.parse(key))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{product.name}  ({product.key})")
    if product.category:
        click.echo(f"Category: {product.category}")
    click.echo(f"Price:    {product.price}")
    if product.original_price and product.original_price > product.price:
        click.echo(f"MRP:      {product.original_price}  (save {product.display_price.savings})")
    if product.number_of_days:
        click.echo(f"Duration: {product.number_of_days} days")
    if product.description:
        click.echo()
        click.echo(product.description)
