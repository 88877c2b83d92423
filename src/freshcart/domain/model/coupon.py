"""Coupon projection held by the client after a successful validation.

Coupons are owned by the backend. The client only keeps the figures the
backend computed for the cart it was shown, and drops them as soon as the
cart changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from freshcart.domain.model.value_objects import Money


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FLAT = "flat"


@dataclass(frozen=True)
class EligibleItem:

    product_id: int | None
    name: str


@dataclass(frozen=True)
class AppliedCoupon:

    code: str
    discount_type: DiscountType | None
    discount_value: str
    discount_amount: Money
    eligible_total: Money
    original_total: Money
    final_total: Money
    eligible_items: list[EligibleItem] = field(default_factory=list)
    message: str = ""

    @property
    def eligible_product_names(self) -> str:
        return ", ".join(item.name for item in self.eligible_items) or "your items"

    def describe(self) -> str:
        if self.discount_type == DiscountType.PERCENTAGE:
            off = f"{self.discount_value}% off"
        elif self.discount_type == DiscountType.FLAT:
            off = f"₹{self.discount_value} off"
        else:
            off = f"{self.discount_amount} off"
        return f"{self.code} - {off} on {self.eligible_product_names}"
