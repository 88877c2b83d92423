"""Application service: coupon validation.

Eligibility and discount arithmetic belong to the backend. The evaluator
normalizes the code, sends the whole cart, and turns the answer into an
AppliedCoupon or a CouponRejected carrying the backend's message.

It keeps no state: clearing a coupon when the cart changes is the
caller's job (see CheckoutSession).
"""

from __future__ import annotations

import logging

from freshcart.domain.exceptions import ApiError, CouponRejected, ValidationError
from freshcart.domain.model.cart import CartLine
from freshcart.domain.model.coupon import AppliedCoupon, DiscountType, EligibleItem
from freshcart.domain.model.value_objects import Money
from freshcart.domain.repository.shop_gateway import ShopGateway

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Failed to validate coupon. Please try again."
INVALID_CODE = "Invalid coupon code"


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


def cart_items_payload(lines: list[CartLine]) -> list[dict]:
    """The cart as the validation endpoint expects it for eligibility."""
    items = []
    for line in lines:
        price = line.snapshot.price
        items.append({
            "id": line.key.product_id,
            "productId": line.key.product_id,
            "type": line.key.type.value,
            "name": line.snapshot.name,
            "price": float(price.displayed.amount),
            "originalPrice": float(price.original.amount) if price.original else None,
            "quantity": line.quantity.value,
        })
    return items


class CouponEvaluator:

    def __init__(self, gateway: ShopGateway) -> None:
        self._gateway = gateway

    def apply(self, code: str, lines: list[CartLine]) -> AppliedCoupon:
        normalized = normalize_code(code)
        if not normalized:
            raise ValidationError("Please enter a coupon code")
        if not lines:
            raise ValidationError("Cart is empty")

        try:
            response = self._gateway.validate_coupon(normalized, cart_items_payload(lines))
        except ApiError as exc:
            logger.warning(f"Coupon validation for {normalized} failed: {exc}")
            raise ApiError(VALIDATION_FAILED, exc.status) from exc

        body = response.body
        if response.success:
            return self._to_applied(normalized, body)

        if not body:
            logger.warning(f"Coupon validation returned {response.status} with no body")
            raise ApiError(VALIDATION_FAILED, response.status)

        eligible = [str(name) for name in body.get("eligibleProducts") or []]
        message = body.get("message") or INVALID_CODE
        if eligible:
            message = f"Coupon valid only for: {', '.join(eligible)}"
        raise CouponRejected(message, eligible)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_applied(code: str, body: dict) -> AppliedCoupon:
        coupon = body.get("coupon") or {}
        pricing = body.get("pricing") or {}
        try:
            discount_type = DiscountType(coupon.get("discountType"))
        except ValueError:
            discount_type = None

        return AppliedCoupon(
            code=coupon.get("code") or code,
            discount_type=discount_type,
            discount_value=str(coupon.get("discountValue", "")),
            discount_amount=Money.of(pricing.get("discountAmount", 0)),
            eligible_total=Money.of(pricing.get("eligibleTotal", 0)),
            original_total=Money.of(pricing.get("originalTotal", 0)),
            final_total=Money.of(pricing.get("finalTotal", 0)),
            eligible_items=[
                EligibleItem(
                    product_id=item.get("productId", item.get("id")),
                    name=str(item.get("name", "")),
                )
                for item in body.get("eligibleItems") or []
                if isinstance(item, dict)
            ],
            message=body.get("message") or "",
        )
