"""CLI commands for the customer's order history."""

from __future__ import annotations

import click

from freshcart.application.dto import CustomerOrderDTO
from freshcart.domain.exceptions import DomainException


def _tracking_hint(dto: CustomerOrderDTO) -> str:
    return f"Track deliveries with 'freshcart subscription show {dto.id}'"


def _display_order(dto: CustomerOrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status_label})")
    if dto.order_date:
        click.echo(f"Ordered:  {dto.order_date}")
    if dto.partner:
        click.echo(f"Partner:  {dto.partner}")
    click.echo()

    if dto.items:
        click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
        click.echo(f"  {'-'*47}")
        for item in dto.items:
            click.echo(
                f"  {item.name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
            )
        click.echo(f"  {'-'*47}")
    if dto.total:
        click.echo(f"  {'Order Total':<27} {dto.total:>20}")
    click.echo()

    if dto.is_subscription:
        click.echo(f"Subscription: {dto.remaining_deliveries} deliveries remaining")
        click.echo(_tracking_hint(dto))
        return

    for step in dto.steps:
        mark = "x" if step.completed else " "
        at = f"  {step.at}" if step.completed and step.at else ""
        click.echo(f"  [{mark}] {step.label}{at}")


@click.command("list")
@click.pass_obj
def orders_list(container) -> None:
    """List the orders of the logged-in customer."""
    try:
        orders = container.order_history.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders yet")
        return

    click.echo(f"  {'Order':<12} {'Date':<12} {'Status':<18} {'Total':>10}")
    click.echo(f"  {'-'*55}")
    for dto in orders:
        ordered = (dto.order_date or "")[:10]
        click.echo(
            f"  {dto.id:<12} {ordered:<12} {dto.status_label:<18} {dto.total or '-':>10}"
        )
        if dto.is_subscription:
            click.echo(f"    {_tracking_hint(dto)}")


@click.command("show")
@click.argument("order_id")
@click.pass_obj
def orders_show(container, order_id: str) -> None:
    """Show one order with its delivery progress."""
    try:
        dto = container.order_history.get(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
