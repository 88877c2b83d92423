"""requests-based implementation of ShopGateway.

Secure endpoints (orders, payment verification, customers) carry the
session's bearer token. A 401 on any of them logs the device out; a 403
is reported without touching the session.
"""

from __future__ import annotations

import logging

import requests

from freshcart.application.auth_session import AuthSession
from freshcart.domain.exceptions import ApiError, AuthenticationError, AuthorizationError
from freshcart.domain.repository.shop_gateway import GatewayResponse, ShopGateway

logger = logging.getLogger(__name__)


class ShopApiClient(ShopGateway):

    def __init__(
        self,
        base_url: str,
        auth: AuthSession,
        timeout: float = 10.0,
        http: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = auth
        self._timeout = timeout
        self._http = http or requests.Session()

    # --- ShopGateway interface ------------------------------------------------

    def fetch_products(self) -> GatewayResponse:
        return self._request("GET", "/api/products")

    def validate_coupon(self, coupon_code: str, cart_items: list[dict]) -> GatewayResponse:
        return self._request(
            "POST",
            "/api/coupon/validate",
            json={"couponCode": coupon_code, "cartItems": cart_items},
        )

    def create_secure_order(self, payload: dict) -> GatewayResponse:
        return self._request("POST", "/api/orders/create-secure", json=payload, secure=True)

    def verify_payment(self, payload: dict) -> GatewayResponse:
        return self._request("POST", "/api/payment/verify-secure", json=payload, secure=True)

    def fetch_customer(self, customer_id: str) -> GatewayResponse:
        return self._request("GET", f"/api/customers/{customer_id}", secure=True)

    def upsert_customer(self, payload: dict) -> GatewayResponse:
        return self._request("POST", "/api/customers/upsert", json=payload, secure=True)

    def fetch_customer_orders(self, customer_id: str) -> GatewayResponse:
        return self._request("GET", f"/api/orders/customer/{customer_id}")

    def fetch_subscription(self, order_id: str) -> GatewayResponse:
        return self._request("GET", f"/api/orders/{order_id}/subscription-details")

    # --- Internal helpers -----------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        json: dict | None = None,
        secure: bool = False,
    ) -> GatewayResponse:
        headers = {"Content-Type": "application/json"}
        if secure:
            token = self._auth.access_token
            if not token:
                raise AuthenticationError("Not authenticated. Please login.")
            headers["Authorization"] = f"Bearer {token}"

        url = f"{self._base_url}{path}"
        try:
            response = self._http.request(
                method, url, json=json, headers=headers, timeout=self._timeout
            )
        except requests.RequestException as exc:
            logger.error(f"{method} {url} failed: {exc}")
            raise ApiError(f"Network error: could not reach {self._base_url}") from exc

        if secure and response.status_code == 401:
            logger.error(f"{method} {path} -> 401, clearing session")
            self._auth.logout()
            raise AuthenticationError("Session expired. Please login again.", 401)
        if secure and response.status_code == 403:
            logger.error(f"{method} {path} -> 403")
            raise AuthorizationError(
                "Access denied. You do not have permission to perform this action.", 403
            )

        try:
            body = response.json()
        except ValueError:
            body = None
        logger.debug(f"{method} {path} -> {response.status_code}")
        return GatewayResponse(response.status_code, body)
