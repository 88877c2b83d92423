"""CLI commands for subscription delivery tracking."""

from __future__ import annotations

from datetime import date

import click

from freshcart.application.dto import SubscriptionDTO
from freshcart.domain.exceptions import DomainException
from freshcart.domain.model.subscription import (
    DeliveryDay,
    DeliveryStatus,
    SubscriptionDeliverySchedule,
)

_MARKS = {
    DeliveryStatus.DELIVERED: "✓",
    DeliveryStatus.OUT_FOR_DELIVERY: ">",
    DeliveryStatus.PENDING: " ",
    DeliveryStatus.NA: "-",
}


def _render_calendar(dto: SubscriptionDTO) -> None:
    schedule = SubscriptionDeliverySchedule([
        DeliveryDay(
            date=date.fromisoformat(d.date),
            day_number=d.day_number,
            status=DeliveryStatus.parse(d.status),
        )
        for d in dto.days
    ])
    if not schedule.days:
        click.echo("No delivery dates available")
        return

    click.echo("  ".join(f"{name:>4}" for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")))
    for week in schedule.weeks():
        cells = []
        for day in week:
            if day is None:
                cells.append("    ")
            else:
                cells.append(f"{day.date.day:>3}{_MARKS[day.status]}")
        click.echo("  ".join(cells))
    click.echo()
    click.echo("✓ delivered   > out for delivery   - Sunday/holiday (no delivery)")


@click.command("show")
@click.argument("order_id")
@click.pass_obj
def subscription_show(container, order_id: str) -> None:
    """Show the delivery calendar of a subscription order."""
    try:
        dto = container.subscriptions.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Subscription for order #{dto.order_id}")
    if dto.start_date and dto.end_date:
        click.echo(f"Period: {dto.start_date} to {dto.end_date}")
    click.echo(f"Delivered: {dto.delivered_days}   Remaining: {dto.remaining_days}")
    click.echo()
    _render_calendar(dto)


@click.command("preview")
@click.option("--from", "from_date", default=None, help="Order date (YYYY-MM-DD), default today.")
@click.option("--holiday", "holidays", multiple=True, help="Holiday date (YYYY-MM-DD).")
@click.pass_obj
def subscription_preview(container, from_date: str | None, holidays: tuple[str, ...]) -> None:
    """Show the deliveries a monthly pack ordered today would get."""
    try:
        today = date.fromisoformat(from_date) if from_date else date.today()
        closed = [date.fromisoformat(h) for h in holidays]
    except ValueError as exc:
        raise click.BadParameter(str(exc))

    dto = container.subscriptions.preview(today, closed)
    numbered = sum(1 for d in dto.days if d.day_number is not None)
    click.echo(f"Period: {dto.start_date} to {dto.end_date}  ({numbered} delivery days)")
    click.echo()
    _render_calendar(dto)
