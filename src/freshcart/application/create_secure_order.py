"""Application service: Create Secure Order use case.

Turns untrusted local cart storage into a backend-priced payment intent.

Steps:
1. Reduce the raw lines to ``(productId, type, quantity)``; lines with
   no id are dropped, missing types are inferred, quantities clamped.
2. Refuse an empty cart before touching the network.
3. Submit the reduced lines with the customer and optional coupon code.
   The backend re-prices everything and re-validates the coupon.
4. Return the backend's payment intent, or raise ApiError with the
   backend's own wording. There is no retry.
"""

from __future__ import annotations

import logging

from freshcart.domain.exceptions import ApiError, LoginRequired, ValidationError
from freshcart.domain.model.order import CustomerDetails, PaymentIntent, SecureOrderRequest
from freshcart.domain.model.value_objects import Money
from freshcart.domain.repository.shop_gateway import GatewayResponse, ShopGateway
from freshcart.domain.service.secure_order_builder import build_secure_lines

logger = logging.getLogger(__name__)


def backend_error_message(response: GatewayResponse, default: str | None = None) -> str:
    """The backend's error list joined, else its message, else the status."""
    body = response.body
    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        return ", ".join(str(e) for e in errors)
    if body.get("message"):
        return str(body["message"])
    if not response.ok or default is None:
        return f"Server error: {response.status}"
    return default


class CreateSecureOrderHandler:

    def __init__(self, gateway: ShopGateway) -> None:
        self._gateway = gateway

    def handle(
        self,
        raw_cart: list,
        customer_id: str | None,
        customer_details: CustomerDetails,
        coupon_code: str | None = None,
    ) -> PaymentIntent:
        lines = build_secure_lines(raw_cart or [])
        if not lines:
            raise ValidationError("Cart is empty")
        if not customer_id:
            raise LoginRequired("Please login to proceed with checkout")

        request = SecureOrderRequest(
            cart=lines,
            customer_id=customer_id,
            customer_details=customer_details,
            coupon_code=(coupon_code or "").strip().upper() or None,
        )
        logger.info(
            f"Creating secure order for {customer_id} with {len(lines)} line(s)"
            + (f", coupon {request.coupon_code}" if request.coupon_code else "")
        )

        response = self._gateway.create_secure_order(request.to_payload())
        if not response.success or not isinstance(response.body.get("order"), dict):
            message = backend_error_message(response, "Failed to create order")
            logger.warning(f"Order creation refused: {message}")
            raise ApiError(message, response.status)

        return self._to_intent(response.body["order"])

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_intent(order: dict) -> PaymentIntent:
        razorpay_order_id = order.get("razorpayOrderId") or order.get("id")
        if not razorpay_order_id or order.get("amount") is None:
            raise ApiError("Server returned an incomplete order")
        try:
            amount = Money.of(order["amount"])
        except ValidationError as exc:
            raise ApiError(f"Server returned an invalid order amount: {order['amount']!r}") from exc
        return PaymentIntent(
            order_id=str(order.get("id") or razorpay_order_id),
            amount=amount,
            razorpay_order_id=str(razorpay_order_id),
        )
