"""Secure order request and the payment artefacts that follow it.

A secure order carries no price at all: the backend computes the amount
from ``productId + type`` and re-validates any coupon code. The only
amounts on this side of the wire are the ones the backend sends back.
"""

from __future__ import annotations

from dataclasses import dataclass

from freshcart.domain.exceptions import ValidationError
from freshcart.domain.model.value_objects import Money, ProductType, Quantity


@dataclass(frozen=True)
class SecureOrderLine:
    """One reduced cart line. Deliberately has no price field."""

    product_id: int
    type: ProductType
    quantity: Quantity

    def to_payload(self) -> dict:
        return {
            "productId": self.product_id,
            "type": self.type.value,
            "quantity": self.quantity.value,
        }


@dataclass(frozen=True)
class CustomerDetails:

    name: str
    email: str
    phone: str = ""
    college: str = ""

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "college": self.college,
        }


@dataclass(frozen=True)
class SecureOrderRequest:

    cart: tuple[SecureOrderLine, ...]
    customer_id: str
    customer_details: CustomerDetails
    coupon_code: str | None = None

    def __post_init__(self) -> None:
        if not self.cart:
            raise ValidationError("Cart is empty")
        if not self.customer_id:
            raise ValidationError("Customer ID is required")

    def to_payload(self) -> dict:
        payload = {
            "cart": [line.to_payload() for line in self.cart],
            "customerId": self.customer_id,
            "customerDetails": self.customer_details.to_payload(),
        }
        if self.coupon_code:
            payload["couponCode"] = self.coupon_code
        return payload


@dataclass(frozen=True)
class PaymentIntent:
    """Backend-issued descriptor of what the shopper is about to pay."""

    order_id: str
    amount: Money
    razorpay_order_id: str


@dataclass(frozen=True)
class PaymentConfirmation:
    """What the hosted widget hands back after a completed payment."""

    order_id: str
    payment_id: str
    signature: str

    def to_payload(self) -> dict:
        return {
            "razorpay_order_id": self.order_id,
            "razorpay_payment_id": self.payment_id,
            "razorpay_signature": self.signature,
        }
