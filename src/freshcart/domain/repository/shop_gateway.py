"""Abstract gateway to the shop backend.

The backend owns pricing, coupons, orders and payment verification. The
gateway returns the decoded JSON bodies; interpretation of ``success``
flags and messages is left to the application services so that every
gateway implementation surfaces errors the same way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class GatewayResponse:
    """Decoded response: HTTP status plus JSON body (empty dict if none)."""

    def __init__(self, status: int, body: dict | None = None) -> None:
        self.status = status
        self.body = body if isinstance(body, dict) else {}

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def success(self) -> bool:
        return self.ok and bool(self.body.get("success"))

    def __repr__(self) -> str:
        return f"GatewayResponse(status={self.status}, body={self.body!r})"


class ShopGateway(ABC):

    @abstractmethod
    def fetch_products(self) -> GatewayResponse:
        """GET /api/products"""

    @abstractmethod
    def validate_coupon(self, coupon_code: str, cart_items: list[dict]) -> GatewayResponse:
        """POST /api/coupon/validate"""

    @abstractmethod
    def create_secure_order(self, payload: dict) -> GatewayResponse:
        """POST /api/orders/create-secure"""

    @abstractmethod
    def verify_payment(self, payload: dict) -> GatewayResponse:
        """POST /api/payment/verify-secure"""

    @abstractmethod
    def fetch_customer(self, customer_id: str) -> GatewayResponse:
        """GET /api/customers/{id}"""

    @abstractmethod
    def upsert_customer(self, payload: dict) -> GatewayResponse:
        """POST /api/customers/upsert"""

    @abstractmethod
    def fetch_customer_orders(self, customer_id: str) -> GatewayResponse:
        """GET /api/orders/customer/{customer_id}"""

    @abstractmethod
    def fetch_subscription(self, order_id: str) -> GatewayResponse:
        """GET /api/orders/{id}/subscription-details"""
