"""Application service: one shopper's checkout page.

Coordinates the coupon evaluator, the secure order handler and the
payment bridge around a CheckoutAttempt, and enforces the ordering rules
that keep the displayed figures honest:

- a cart change clears the applied coupon;
- a coupon response is only applied if no newer request was issued and
  the cart did not change while it was in flight;
- an order-creation response that arrives after the shopper left the
  checkout is discarded and the payment widget is not opened.
"""

from __future__ import annotations

import logging
from typing import Callable

from freshcart.application.auth_session import AuthSession
from freshcart.application.cart_store import LocalCartStore
from freshcart.application.coupon_evaluator import CouponEvaluator
from freshcart.application.create_secure_order import CreateSecureOrderHandler
from freshcart.application.customer_profile import CustomerProfileService
from freshcart.application.dto import CheckoutSummaryDTO
from freshcart.application.events import CART_UPDATED, EventBus
from freshcart.application.payment_bridge import PaymentBridge
from freshcart.domain.exceptions import (
    DomainException,
    LoginRequired,
    PaymentCancelled,
    PaymentError,
    StaleResponse,
    ValidationError,
)
from freshcart.domain.model.checkout import CheckoutAttempt, CheckoutState
from freshcart.domain.model.coupon import AppliedCoupon
from freshcart.domain.model.order import PaymentConfirmation
from freshcart.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


class CancellationToken:

    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class CheckoutSession:

    def __init__(
        self,
        cart_store: LocalCartStore,
        events: EventBus,
        coupons: CouponEvaluator,
        orders: CreateSecureOrderHandler,
        bridge: PaymentBridge,
        profiles: CustomerProfileService,
        session: AuthSession,
    ) -> None:
        self._cart_store = cart_store
        self._coupons = coupons
        self._orders = orders
        self._bridge = bridge
        self._profiles = profiles
        self._session = session

        self._attempt = CheckoutAttempt()
        self._applied: AppliedCoupon | None = None
        self._coupon_seq = 0
        self._token: CancellationToken | None = None
        self._unsubscribe = events.subscribe(CART_UPDATED, self._on_cart_changed)

    # --- Coupons --------------------------------------------------------------

    @property
    def applied_coupon(self) -> AppliedCoupon | None:
        return self._applied

    def apply_coupon(self, code: str) -> AppliedCoupon:
        """Validate *code* against the current cart.

        On rejection the previously applied coupon stays as it was. A
        response overtaken by a newer request or by a cart change raises
        StaleResponse and changes nothing.
        """
        self._coupon_seq += 1
        seq = self._coupon_seq
        revision = self._cart_store.revision

        try:
            applied = self._coupons.apply(code, self._cart_store.list())
        except DomainException:
            if self._is_stale(seq, revision):
                raise StaleResponse("Coupon response discarded: cart changed") from None
            raise

        if self._is_stale(seq, revision):
            logger.warning(f"Discarding stale coupon response #{seq} for {applied.code}")
            raise StaleResponse("Coupon response discarded: cart changed")

        self._applied = applied
        return applied

    def remove_coupon(self) -> None:
        self._applied = None

    # --- Totals ---------------------------------------------------------------

    def displayed_total(self) -> Money:
        if self._applied is not None:
            return self._applied.final_total
        return self._cart_store.subtotal()

    def summary(self) -> CheckoutSummaryDTO:
        return CheckoutSummaryDTO(
            subtotal=str(self._cart_store.subtotal()),
            discount=str(self._applied.discount_amount) if self._applied else None,
            coupon=self._applied.describe() if self._applied else None,
            total=str(self.displayed_total()),
            state=self._attempt.state.value,
            error=self._attempt.error,
        )

    # --- Payment --------------------------------------------------------------

    @property
    def attempt(self) -> CheckoutAttempt:
        return self._attempt

    def place_order(
        self,
        on_success: Callable[[PaymentConfirmation], None] | None = None,
        on_failure: Callable[[PaymentError], None] | None = None,
    ) -> CheckoutAttempt:
        """Create the secure order and open the payment widget.

        Order-creation problems are raised; the payment outcome arrives
        through the callbacks and is reflected on the returned attempt.
        """
        if self._attempt.in_progress:
            raise ValidationError("Payment already in progress")

        customer_id = self._session.user_id
        if customer_id is None:
            raise LoginRequired("Please login to proceed with checkout")

        cart = self._cart_store.cart()
        if cart.is_empty:
            raise ValidationError("Cart is empty")
        cart.check_fruit_minimum()

        profile = self._profiles.fetch(customer_id)
        if profile is None or not profile.is_complete:
            raise ValidationError("Please complete your profile before making a purchase")

        self._attempt = CheckoutAttempt()
        token = CancellationToken()
        self._token = token
        self._attempt.begin()

        try:
            intent = self._orders.handle(
                self._cart_store.raw_lines(),
                customer_id,
                profile.details(),
                self._applied.code if self._applied else None,
            )
        except DomainException as exc:
            if token.cancelled:
                raise StaleResponse("Checkout was abandoned") from None
            self._fail(str(exc))
            raise

        if token.cancelled:
            logger.warning(f"Discarding order {intent.order_id}: checkout was abandoned")
            raise StaleResponse("Checkout was abandoned")

        attempt = self._attempt
        attempt.widget_opened(intent)

        def succeeded(confirmation: PaymentConfirmation) -> None:
            attempt.confirm()
            if on_success is not None:
                on_success(confirmation)

        def failed(error: PaymentError) -> None:
            if isinstance(error, PaymentCancelled):
                attempt.cancel(str(error))
            else:
                attempt.fail(str(error))
            attempt.reset()
            if on_failure is not None:
                on_failure(error)

        try:
            self._bridge.open(
                intent,
                succeeded,
                failed,
                profile=profile,
                on_verifying=attempt.verifying,
            )
        except PaymentError as exc:
            self._fail(str(exc))
            raise
        return attempt

    def abandon(self) -> None:
        """The shopper navigated away from the checkout."""
        if self._token is not None:
            self._token.cancel()
        if self._attempt.state == CheckoutState.AWAITING_ORDER_CREATION:
            self._attempt.cancel("Checkout abandoned")
            self._attempt.reset()

    def close(self) -> None:
        self.abandon()
        self._unsubscribe()

    # --- Internal helpers -----------------------------------------------------

    def _on_cart_changed(self, _detail: object) -> None:
        if self._applied is not None:
            logger.info(f"Cart changed, clearing coupon {self._applied.code}")
        self._applied = None

    def _is_stale(self, seq: int, revision: int) -> bool:
        return seq != self._coupon_seq or revision != self._cart_store.revision

    def _fail(self, message: str) -> None:
        self._attempt.fail(message)
        self._attempt.reset()
