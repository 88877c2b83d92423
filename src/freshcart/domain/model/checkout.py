"""CheckoutAttempt aggregate — the lifecycle of one "Pay" click.

    IDLE -> AWAITING_ORDER_CREATION -> WIDGET_OPEN -> VERIFYING_PAYMENT -> CONFIRMED
                     |                      |                |
                     +------> FAILED / CANCELLED <-----------+
                                     |
                                     +-> IDLE

CONFIRMED is terminal. FAILED and CANCELLED are resting states that
``reset()`` returns to IDLE so the shopper can try again.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from freshcart.domain.exceptions import ValidationError
from freshcart.domain.model.order import PaymentIntent


class CheckoutState(Enum):
    IDLE = "IDLE"
    AWAITING_ORDER_CREATION = "AWAITING_ORDER_CREATION"
    WIDGET_OPEN = "WIDGET_OPEN"
    VERIFYING_PAYMENT = "VERIFYING_PAYMENT"
    CONFIRMED = "CONFIRMED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


_ALLOWED: dict[CheckoutState, set[CheckoutState]] = {
    CheckoutState.IDLE: {CheckoutState.AWAITING_ORDER_CREATION},
    CheckoutState.AWAITING_ORDER_CREATION: {
        CheckoutState.WIDGET_OPEN,
        CheckoutState.FAILED,
        CheckoutState.CANCELLED,
    },
    CheckoutState.WIDGET_OPEN: {
        CheckoutState.VERIFYING_PAYMENT,
        CheckoutState.FAILED,
        CheckoutState.CANCELLED,
    },
    CheckoutState.VERIFYING_PAYMENT: {
        CheckoutState.CONFIRMED,
        CheckoutState.FAILED,
        CheckoutState.CANCELLED,
    },
    CheckoutState.CONFIRMED: set(),
    CheckoutState.FAILED: {CheckoutState.IDLE},
    CheckoutState.CANCELLED: {CheckoutState.IDLE},
}


@dataclass
class CheckoutAttempt:

    state: CheckoutState = CheckoutState.IDLE
    intent: PaymentIntent | None = None
    error: str | None = None

    # --- State transitions ----------------------------------------------------

    def begin(self) -> None:
        if self.state != CheckoutState.IDLE:
            raise ValidationError("Payment already in progress")
        self._move(CheckoutState.AWAITING_ORDER_CREATION)
        self.intent = None
        self.error = None

    def widget_opened(self, intent: PaymentIntent) -> None:
        self._move(CheckoutState.WIDGET_OPEN)
        self.intent = intent

    def verifying(self) -> None:
        self._move(CheckoutState.VERIFYING_PAYMENT)

    def confirm(self) -> None:
        self._move(CheckoutState.CONFIRMED)

    def fail(self, message: str) -> None:
        self._move(CheckoutState.FAILED)
        self.error = message

    def cancel(self, message: str = "Payment cancelled") -> None:
        self._move(CheckoutState.CANCELLED)
        self.error = message

    def reset(self) -> None:
        """FAILED|CANCELLED -> IDLE. The error stays readable."""
        self._move(CheckoutState.IDLE)

    # --- Queries --------------------------------------------------------------

    @property
    def in_progress(self) -> bool:
        return self.state in (
            CheckoutState.AWAITING_ORDER_CREATION,
            CheckoutState.WIDGET_OPEN,
            CheckoutState.VERIFYING_PAYMENT,
        )

    @property
    def is_confirmed(self) -> bool:
        return self.state == CheckoutState.CONFIRMED

    # --- Internal helpers -----------------------------------------------------

    def _move(self, target: CheckoutState) -> None:
        if target not in _ALLOWED[self.state]:
            raise ValidationError(
                f"Cannot move checkout from {self.state.value} to {target.value}"
            )
        self.state = target
