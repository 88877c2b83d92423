"""CustomerOrder — a placed order as the customer's order history shows it.

Orders are created by the secure checkout and moved along by the backend
and its delivery partners. The storefront only reads them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from freshcart.domain.exceptions import ValidationError
from freshcart.domain.model.subscription import delivery_records
from freshcart.domain.model.value_objects import Money


class OrderStatus(Enum):
    PLACED = "placed"
    TAKEN = "taken"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @staticmethod
    def parse(raw: object) -> OrderStatus:
        """Unknown or missing statuses read as placed."""
        try:
            return OrderStatus(str(raw or "").strip().lower())
        except ValueError:
            return OrderStatus.PLACED


_LABELS = {
    OrderStatus.PLACED: "Placed",
    OrderStatus.TAKEN: "Accepted",
    OrderStatus.OUT_FOR_DELIVERY: "Out for Delivery",
    OrderStatus.DELIVERED: "Delivered",
}

TRACKING_STEPS = (
    OrderStatus.PLACED,
    OrderStatus.TAKEN,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)


@dataclass(frozen=True)
class OrderItem:

    name: str
    quantity: int
    price: Money

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity


@dataclass(frozen=True)
class TrackingStep:

    status: OrderStatus
    completed: bool
    at: str | None = None


@dataclass
class CustomerOrder:

    id: str
    status: OrderStatus
    items: list[OrderItem] = field(default_factory=list)
    total: Money | None = None
    order_date: str | None = None
    is_subscription: bool = False
    delivery_dates: list[dict] = field(default_factory=list)
    status_times: dict[OrderStatus, str] = field(default_factory=dict)
    partner_name: str | None = None
    partner_phone: str | None = None

    @property
    def tracks_as_subscription(self) -> bool:
        """Subscription orders are followed on the delivery calendar instead."""
        return self.is_subscription or bool(self.delivery_dates)

    def remaining_deliveries(self, today: date) -> int:
        cutoff = today.isoformat()
        return sum(
            1
            for d in self.delivery_dates
            if str(d.get("date", ""))[:10] >= cutoff and d.get("status") == "pending"
        )

    def tracking_steps(self) -> list[TrackingStep]:
        current = TRACKING_STEPS.index(self.status)
        return [
            TrackingStep(step, index <= current, self.status_times.get(step))
            for index, step in enumerate(TRACKING_STEPS)
        ]

    @property
    def partner(self) -> str | None:
        """Delivery partner, once one has accepted the order."""
        if self.status == OrderStatus.PLACED or not self.partner_name:
            return None
        if self.partner_phone:
            return f"{self.partner_name} ({self.partner_phone})"
        return self.partner_name

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def from_backend(raw: dict) -> CustomerOrder:
        """Build an order from one entry of the customer orders endpoint.

        ``items`` and ``delivery_dates`` may arrive as JSON strings.
        Raises ValidationError when the entry cannot be read.
        """
        if not isinstance(raw, dict) or raw.get("id") in (None, ""):
            raise ValidationError(f"Order entry without an id: {raw!r}")

        total = raw.get("total_amount")
        status_times = {
            step: str(raw[f"{step.value}_at"])
            for step in TRACKING_STEPS
            if raw.get(f"{step.value}_at")
        }
        return CustomerOrder(
            id=str(raw["id"]),
            status=OrderStatus.parse(raw.get("status")),
            items=[_item(entry) for entry in _json_list(raw.get("items"))],
            total=Money.of(total) if total is not None else None,
            order_date=raw.get("order_date") or raw.get("created_at"),
            is_subscription=bool(raw.get("is_subscription")),
            delivery_dates=delivery_records(raw.get("delivery_dates")),
            status_times=status_times,
            partner_name=raw.get("partner_name"),
            partner_phone=raw.get("partner_phone"),
        )


def _json_list(raw: object) -> list:
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise ValidationError(f"Unreadable order items: {raw!r}") from exc
    return raw if isinstance(raw, list) else []


def _item(entry: object) -> OrderItem:
    if not isinstance(entry, dict):
        raise ValidationError(f"Unreadable order item: {entry!r}")
    try:
        quantity = int(entry.get("quantity", 1))
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid item quantity: {entry.get('quantity')!r}") from exc
    return OrderItem(
        name=str(entry.get("name") or "Item"),
        quantity=quantity,
        price=Money.of(entry.get("price", 0)),
    )
