"""Tests for the Create Secure Order use case.

The backend is faked; what matters here is what leaves the device.
"""

import pytest

from freshcart.application.create_secure_order import CreateSecureOrderHandler
from freshcart.domain.exceptions import ApiError, LoginRequired, ValidationError
from freshcart.domain.model.order import CustomerDetails
from freshcart.domain.model.value_objects import Money
from freshcart.domain.repository.shop_gateway import GatewayResponse
from tests.fakes import FakeShopApi

CUSTOMER = CustomerDetails("Asha", "asha@example.com", "9876543210", "IIT Madras")


class TestPayload:

    def setup_method(self):
        self.api = FakeShopApi()
        self.handler = CreateSecureOrderHandler(self.api)

    def _payload(self, raw_cart, coupon=None):
        self.handler.handle(raw_cart, "user-1", CUSTOMER, coupon)
        return self.api.last_payload("create_secure_order")

    def test_quantities_clamped(self):
        payload = self._payload([
            {"id": 1, "type": "fruit", "quantity": 15},
            {"id": 2, "type": "fruit", "quantity": 0},
        ])
        assert [line["quantity"] for line in payload["cart"]] == [7, 1]

    def test_missing_types_inferred(self):
        payload = self._payload([
            {"id": 150, "quantity": 1},
            {"id": 250, "quantity": 1},
            {"id": 3, "quantity": 1},
            {"id": 2, "quantity": 1, "isSubscription": True},
        ])
        assert [line["type"] for line in payload["cart"]] == [
            "bowl", "refreshment", "fruit", "pack",
        ]

    def test_no_prices_leave_the_device(self):
        payload = self._payload([
            {"id": 1, "type": "fruit", "name": "Apple", "price": 1, "originalPrice": 150, "quantity": 2},
        ])
        assert payload["cart"] == [{"productId": 1, "type": "fruit", "quantity": 2}]
        assert "price" not in str(payload).lower()

    def test_customer_and_coupon(self):
        payload = self._payload([{"id": 1, "type": "fruit", "quantity": 2}], coupon=" save10 ")
        assert payload["customerId"] == "user-1"
        assert payload["customerDetails"]["college"] == "IIT Madras"
        assert payload["couponCode"] == "SAVE10"

    def test_coupon_omitted_when_absent(self):
        payload = self._payload([{"id": 1, "type": "fruit", "quantity": 2}])
        assert "couponCode" not in payload

    def test_lines_without_id_dropped(self):
        payload = self._payload([{"name": "mystery", "quantity": 1}, {"id": 4, "quantity": 1}])
        assert [line["productId"] for line in payload["cart"]] == [4]


class TestResult:

    def test_payment_intent_from_backend(self):
        handler = CreateSecureOrderHandler(FakeShopApi())
        intent = handler.handle([{"id": 1, "quantity": 2}], "user-1", CUSTOMER)
        assert intent.order_id == "order_1"
        assert intent.razorpay_order_id == "order_rzp_1"
        assert intent.amount == Money.of(180)

    def test_non_finite_amount_is_a_server_error(self):
        api = FakeShopApi()
        api.order_response = GatewayResponse(200, {"success": True, "order": {"id": "order_9", "amount": "Infinity"}})
        with pytest.raises(ApiError, match="invalid order amount"):
            CreateSecureOrderHandler(api).handle([{"id": 1, "quantity": 2}], "user-1", CUSTOMER)

    def test_razorpay_id_falls_back_to_order_id(self):
        api = FakeShopApi()
        api.order_response = GatewayResponse(200, {"success": True, "order": {"id": "order_9", "amount": 99}})
        intent = CreateSecureOrderHandler(api).handle([{"id": 1, "quantity": 2}], "user-1", CUSTOMER)
        assert intent.razorpay_order_id == "order_9"


class TestFailures:

    def test_empty_cart_never_reaches_network(self):
        api = FakeShopApi()
        with pytest.raises(ValidationError, match="Cart is empty"):
            CreateSecureOrderHandler(api).handle([], "user-1", CUSTOMER)
        assert api.calls == []

    def test_cart_of_unusable_lines_is_empty(self):
        api = FakeShopApi()
        with pytest.raises(ValidationError, match="Cart is empty"):
            CreateSecureOrderHandler(api).handle([{"name": "x"}, "junk"], "user-1", CUSTOMER)
        assert api.calls == []

    def test_missing_customer(self):
        with pytest.raises(LoginRequired):
            CreateSecureOrderHandler(FakeShopApi()).handle([{"id": 1, "quantity": 1}], None, CUSTOMER)

    def test_backend_errors_surface_verbatim(self):
        api = FakeShopApi()
        api.order_response = GatewayResponse(400, {"success": False, "errors": ["Invalid product"]})
        with pytest.raises(ApiError) as excinfo:
            CreateSecureOrderHandler(api).handle([{"id": 99, "quantity": 1}], "user-1", CUSTOMER)
        assert str(excinfo.value) == "Invalid product"
        assert excinfo.value.status == 400

    def test_several_errors_joined(self):
        api = FakeShopApi()
        api.order_response = GatewayResponse(400, {"success": False, "errors": ["A", "B"]})
        with pytest.raises(ApiError, match="A, B"):
            CreateSecureOrderHandler(api).handle([{"id": 1, "quantity": 1}], "user-1", CUSTOMER)

    def test_bare_server_error(self):
        api = FakeShopApi()
        api.order_response = GatewayResponse(500, {})
        with pytest.raises(ApiError, match="Server error: 500"):
            CreateSecureOrderHandler(api).handle([{"id": 1, "quantity": 1}], "user-1", CUSTOMER)
