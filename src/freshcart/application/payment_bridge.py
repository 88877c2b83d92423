"""Application service: hand the payment to the hosted widget and verify it.

The widget is opened with the backend's amount and order id, never with a
locally computed figure. A completed payment is only trusted once the
backend has verified its signature; then, and only then, the cart is
cleared. Failures and dismissals keep the cart so the shopper can retry.
"""

from __future__ import annotations

import logging
from typing import Callable

from freshcart.application.cart_store import LocalCartStore
from freshcart.domain.exceptions import ApiError, PaymentCancelled, PaymentError
from freshcart.domain.model.customer import CustomerProfile
from freshcart.domain.model.order import PaymentConfirmation, PaymentIntent
from freshcart.domain.repository.payment_widget import CheckoutOptions, PaymentWidget
from freshcart.domain.repository.shop_gateway import ShopGateway

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Payment cancelled. You can try again when ready."
VERIFICATION_FAILED = "Payment verification failed"

OnSuccess = Callable[[PaymentConfirmation], None]
OnFailure = Callable[[PaymentError], None]


class PaymentBridge:

    def __init__(
        self,
        gateway: ShopGateway,
        widget: PaymentWidget,
        cart_store: LocalCartStore,
        widget_key: str,
        merchant_name: str = "NIVA Fruits",
    ) -> None:
        self._gateway = gateway
        self._widget = widget
        self._cart_store = cart_store
        self._widget_key = widget_key
        self._merchant_name = merchant_name

    def open(
        self,
        intent: PaymentIntent,
        on_success: OnSuccess,
        on_failure: OnFailure,
        profile: CustomerProfile | None = None,
        on_verifying: Callable[[], None] | None = None,
    ) -> None:
        if not self._widget_key:
            raise PaymentError("Payment system not configured")

        options = CheckoutOptions(
            key=self._widget_key,
            amount=intent.amount.minor_units,
            currency=intent.amount.currency,
            order_id=intent.razorpay_order_id,
            name=self._merchant_name,
            prefill=self._prefill(profile),
        )

        def complete(confirmation: PaymentConfirmation) -> None:
            if on_verifying is not None:
                on_verifying()
            self._verify(confirmation, on_success, on_failure)

        def failed(description: str) -> None:
            logger.warning(f"Payment failed for {intent.order_id}: {description}")
            on_failure(PaymentError(f"Payment failed: {description or 'Unknown error'}"))

        def dismissed() -> None:
            logger.info(f"Payment widget dismissed for {intent.order_id}")
            on_failure(PaymentCancelled(CANCELLED_MESSAGE))

        logger.info(f"Opening payment widget for order {intent.order_id} ({intent.amount})")
        self._widget.open(options, complete, failed, dismissed)

    # --- Internal helpers -----------------------------------------------------

    def _verify(
        self,
        confirmation: PaymentConfirmation,
        on_success: OnSuccess,
        on_failure: OnFailure,
    ) -> None:
        try:
            response = self._gateway.verify_payment(confirmation.to_payload())
        except ApiError as exc:
            logger.error(f"Verification of {confirmation.payment_id} failed: {exc}")
            on_failure(PaymentError(
                "Payment completed but could not be verified. "
                f"Please contact support with Payment ID: {confirmation.payment_id}"
            ))
            return

        if not response.success:
            message = response.body.get("message") or VERIFICATION_FAILED
            logger.error(f"Verification rejected for {confirmation.payment_id}: {message}")
            on_failure(PaymentError(message))
            return

        self._cart_store.clear()
        logger.info(f"Payment {confirmation.payment_id} verified")
        on_success(confirmation)

    @staticmethod
    def _prefill(profile: CustomerProfile | None) -> dict:
        if profile is None:
            return {}
        return {"name": profile.name, "email": profile.email, "contact": profile.phone}
