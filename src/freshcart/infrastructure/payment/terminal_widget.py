"""PaymentWidget for the terminal.

The hosted checkout runs in the shopper's browser; this widget prints
what to pay and asks for the outcome the hosted page reports back.
"""

from __future__ import annotations

from typing import Callable

import click

from freshcart.domain.model.order import PaymentConfirmation
from freshcart.domain.repository.payment_widget import CheckoutOptions, PaymentWidget


class TerminalPaymentWidget(PaymentWidget):

    def open(
        self,
        options: CheckoutOptions,
        on_complete: Callable[[PaymentConfirmation], None],
        on_failed: Callable[[str], None],
        on_dismiss: Callable[[], None],
    ) -> None:
        click.echo(f"{options.name} - {options.description}")
        click.echo(f"  Order:  {options.order_id}")
        click.echo(f"  Amount: {options.amount / 100:.2f} {options.currency}")
        click.echo(f"  Key:    {options.key}")
        click.echo()

        outcome = click.prompt(
            "Payment outcome",
            type=click.Choice(["paid", "failed", "cancel"]),
            default="cancel",
        )
        if outcome == "cancel":
            on_dismiss()
            return
        if outcome == "failed":
            on_failed(click.prompt("Failure description", default="Unknown error"))
            return

        on_complete(
            PaymentConfirmation(
                order_id=options.order_id,
                payment_id=click.prompt("razorpay_payment_id"),
                signature=click.prompt("razorpay_signature"),
            )
        )
