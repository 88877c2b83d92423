"""CLI commands for checkout."""

from __future__ import annotations

import click

from freshcart.domain.exceptions import DomainException, PaymentError
from freshcart.domain.model.order import PaymentConfirmation
from freshcart.infrastructure.bootstrap import Container


def _apply_coupon(container: Container, code: str) -> None:
    try:
        applied = container.checkout.apply_coupon(code)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Coupon applied: {applied.describe()}")
    click.echo(f"You save: {applied.discount_amount}")


def _display_summary(container: Container) -> None:
    dto = container.checkout.summary()
    click.echo(f"  {'Item Total':<20} {dto.subtotal:>12}")
    if dto.discount:
        click.echo(f"  {'Discount':<20} {'-' + dto.discount:>12}")
    click.echo(f"  {'Total Amount':<20} {dto.total:>12}")


@click.command("summary")
@click.option("--coupon", default=None, help="Coupon code to try.")
@click.pass_obj
def checkout_summary(container: Container, coupon: str | None) -> None:
    """Show what checkout would charge."""
    if container.cart.total_quantity() == 0:
        raise click.ClickException("Cart is empty")
    if coupon:
        _apply_coupon(container, coupon)
    _display_summary(container)


@click.command("pay")
@click.option("--coupon", default=None, help="Coupon code to apply first.")
@click.pass_obj
def checkout_pay(container: Container, coupon: str | None) -> None:
    """Create a secure order and pay for it."""
    if coupon:
        _apply_coupon(container, coupon)
    _display_summary(container)

    outcome: dict[str, object] = {}

    def on_success(confirmation: PaymentConfirmation) -> None:
        outcome["confirmation"] = confirmation

    def on_failure(error: PaymentError) -> None:
        outcome["error"] = error

    try:
        container.checkout.place_order(on_success, on_failure)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if "error" in outcome:
        raise click.ClickException(str(outcome["error"]))
    confirmation = outcome.get("confirmation")
    if isinstance(confirmation, PaymentConfirmation):
        click.echo(f"Payment successful! Payment ID: {confirmation.payment_id}")
        click.echo("Your order has been placed.")
        intent = container.checkout.attempt.intent
        if intent is not None:
            click.echo(f"Follow it with 'freshcart orders show {intent.order_id}'")
