"""Tests for handing the payment to the widget and verifying it."""

import pytest

from freshcart.application.payment_bridge import CANCELLED_MESSAGE, PaymentBridge
from freshcart.domain.exceptions import ApiError, PaymentCancelled, PaymentError
from freshcart.domain.model.customer import CustomerProfile
from freshcart.domain.model.order import PaymentIntent
from freshcart.domain.model.value_objects import Money
from freshcart.domain.repository.shop_gateway import GatewayResponse
from tests.fakes import FakePaymentWidget, FakeShopApi, make_cart_store, make_product

INTENT = PaymentIntent("order_1", Money.of("180.50"), "order_rzp_1")


class FlakyVerifyApi(FakeShopApi):

    def verify_payment(self, payload):
        raise ApiError("Network error: could not reach backend")


class Recorder:

    def __init__(self) -> None:
        self.successes = []
        self.failures = []

    def success(self, confirmation) -> None:
        self.successes.append(confirmation)

    def failure(self, error) -> None:
        self.failures.append(error)


def _bridge(outcome="paid", api=None, key="rzp_test_key"):
    api = api or FakeShopApi()
    widget = FakePaymentWidget(outcome)
    cart_store, _ = make_cart_store()
    cart_store.add(make_product(), 2)
    bridge = PaymentBridge(api, widget, cart_store, key, merchant_name="NIVA Fruits")
    return bridge, api, widget, cart_store


class TestWidgetOptions:

    def test_backend_amount_in_paise(self):
        bridge, _, widget, _ = _bridge()
        bridge.open(INTENT, Recorder().success, Recorder().failure)
        (options,) = widget.opened
        assert options.amount == 18050
        assert options.currency == "INR"
        assert options.order_id == "order_rzp_1"
        assert options.key == "rzp_test_key"

    def test_prefill_from_profile(self):
        bridge, _, widget, _ = _bridge()
        profile = CustomerProfile("user-1", "Asha", "asha@example.com", "9876543210", "IIT Madras")
        bridge.open(INTENT, Recorder().success, Recorder().failure, profile=profile)
        assert widget.opened[0].prefill == {
            "name": "Asha",
            "email": "asha@example.com",
            "contact": "9876543210",
        }

    def test_missing_key_refused(self):
        bridge, _, widget, _ = _bridge(key="")
        with pytest.raises(PaymentError, match="Payment system not configured"):
            bridge.open(INTENT, Recorder().success, Recorder().failure)
        assert widget.opened == []


class TestOutcomes:

    def test_verified_payment_clears_cart(self):
        bridge, api, _, cart_store = _bridge("paid")
        recorder = Recorder()
        bridge.open(INTENT, recorder.success, recorder.failure)

        assert api.last_payload("verify_payment") == {
            "razorpay_order_id": "order_rzp_1",
            "razorpay_payment_id": "pay_123",
            "razorpay_signature": "sig_abc",
        }
        assert recorder.successes[0].payment_id == "pay_123"
        assert cart_store.list() == []

    def test_verifying_hook_runs_before_verification(self):
        bridge, api, _, _ = _bridge("paid")
        seen = []
        bridge.open(
            INTENT,
            Recorder().success,
            Recorder().failure,
            on_verifying=lambda: seen.append(list(api.call_names())),
        )
        assert seen == [[]]

    def test_failed_payment_keeps_cart(self):
        bridge, api, _, cart_store = _bridge("failed")
        recorder = Recorder()
        bridge.open(INTENT, recorder.success, recorder.failure)

        assert str(recorder.failures[0]) == "Payment failed: Card declined"
        assert cart_store.total_quantity() == 2
        assert "verify_payment" not in api.call_names()

    def test_dismissed_widget_keeps_cart(self):
        bridge, _, _, cart_store = _bridge("dismiss")
        recorder = Recorder()
        bridge.open(INTENT, recorder.success, recorder.failure)

        (error,) = recorder.failures
        assert isinstance(error, PaymentCancelled)
        assert str(error) == CANCELLED_MESSAGE
        assert cart_store.total_quantity() == 2

    def test_rejected_signature_keeps_cart(self):
        api = FakeShopApi()
        api.verify_response = GatewayResponse(400, {"success": False, "message": "Invalid signature"})
        bridge, _, _, cart_store = _bridge("paid", api=api)
        recorder = Recorder()
        bridge.open(INTENT, recorder.success, recorder.failure)

        assert str(recorder.failures[0]) == "Invalid signature"
        assert recorder.successes == []
        assert cart_store.total_quantity() == 2

    def test_unreachable_verification_points_to_support(self):
        bridge, _, _, cart_store = _bridge("paid", api=FlakyVerifyApi())
        recorder = Recorder()
        bridge.open(INTENT, recorder.success, recorder.failure)

        assert "pay_123" in str(recorder.failures[0])
        assert cart_store.total_quantity() == 2
