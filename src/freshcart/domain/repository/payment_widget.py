"""Abstract hosted payment widget.

The widget collects card/UPI details outside this application. It is
opened with backend-issued figures only and reports back through exactly
one of the three callbacks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

from freshcart.domain.model.order import PaymentConfirmation


@dataclass(frozen=True)
class CheckoutOptions:

    key: str
    amount: int  # paise
    currency: str
    order_id: str
    name: str
    description: str = "Fresh Fruits Delivery"
    prefill: dict = field(default_factory=dict)


class PaymentWidget(ABC):

    @abstractmethod
    def open(
        self,
        options: CheckoutOptions,
        on_complete: Callable[[PaymentConfirmation], None],
        on_failed: Callable[[str], None],
        on_dismiss: Callable[[], None],
    ) -> None:
        """Show the checkout and invoke one callback with the outcome."""
