"""Application service: Show Subscription use case."""

from __future__ import annotations

from datetime import date

from freshcart.application.dto import DeliveryDayDTO, SubscriptionDTO
from freshcart.domain.exceptions import ApiError, EntityNotFoundError
from freshcart.domain.model.subscription import (
    SubscriptionDeliverySchedule,
    delivery_records,
    subscription_window,
)
from freshcart.domain.repository.shop_gateway import ShopGateway


INVALID_DATA = "Server returned invalid subscription data"


def _parse_date(raw: object) -> date | None:
    if not raw:
        return None
    try:
        return date.fromisoformat(str(raw)[:10])
    except ValueError as exc:
        raise ApiError(f"{INVALID_DATA}: {raw!r}") from exc


class ShowSubscriptionHandler:

    def __init__(self, gateway: ShopGateway) -> None:
        self._gateway = gateway

    def handle(self, order_id: str) -> SubscriptionDTO:
        response = self._gateway.fetch_subscription(order_id)
        if response.status == 404:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        data = response.body.get("data")
        if not response.success or not isinstance(data, dict):
            raise ApiError(
                response.body.get("message") or f"Server error: {response.status}",
                response.status,
            )

        start = _parse_date(data.get("subscription_start_date"))
        end = _parse_date(data.get("subscription_end_date"))
        schedule = SubscriptionDeliverySchedule.from_backend(
            delivery_records(data.get("delivery_dates")), start, end
        )
        return self._to_dto(order_id, schedule, start, end)

    @staticmethod
    def preview(today: date, holidays: list[date] | None = None) -> SubscriptionDTO:
        """Schedule a monthly subscription ordered *today* would get."""
        start, end = subscription_window(today)
        schedule = SubscriptionDeliverySchedule.generate(start, end, holidays or [])
        return ShowSubscriptionHandler._to_dto("preview", schedule, start, end)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(
        order_id: str,
        schedule: SubscriptionDeliverySchedule,
        start: date | None,
        end: date | None,
    ) -> SubscriptionDTO:
        return SubscriptionDTO(
            order_id=order_id,
            start_date=start.isoformat() if start else None,
            end_date=end.isoformat() if end else None,
            days=[
                DeliveryDayDTO(
                    date=d.date.isoformat(),
                    day_number=d.day_number,
                    status=d.status.value,
                )
                for d in schedule.days
            ],
            delivered_days=schedule.delivered_days,
            remaining_days=schedule.remaining_days,
        )
