"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    key: str  # e.g. "fruit:3"
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "₹90.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:

    items: list[CartLineDTO]
    total_quantity: int
    subtotal: str
    savings: str


@dataclass(frozen=True)
class CheckoutSummaryDTO:
    """Output: what the checkout page shows next to the Pay button."""

    subtotal: str
    discount: str | None
    coupon: str | None
    total: str
    state: str
    error: str | None


@dataclass(frozen=True)
class DeliveryDayDTO:

    date: str
    day_number: int | None
    status: str


@dataclass(frozen=True)
class SubscriptionDTO:

    order_id: str
    start_date: str | None
    end_date: str | None
    days: list[DeliveryDayDTO]
    delivered_days: int
    remaining_days: int


@dataclass(frozen=True)
class OrderItemDTO:

    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class TrackingStepDTO:

    status: str
    label: str
    completed: bool
    at: str | None


@dataclass(frozen=True)
class CustomerOrderDTO:
    """Output: one entry of the customer's order history."""

    id: str
    status: str
    status_label: str
    order_date: str | None
    total: str | None
    items: list[OrderItemDTO]
    is_subscription: bool
    remaining_deliveries: int
    partner: str | None
    steps: list[TrackingStepDTO]
