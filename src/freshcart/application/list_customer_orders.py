"""Application service: List Customer Orders use case."""

from __future__ import annotations

import logging
from datetime import date

from freshcart.application.auth_session import AuthSession
from freshcart.application.dto import CustomerOrderDTO, OrderItemDTO, TrackingStepDTO
from freshcart.domain.exceptions import (
    ApiError,
    EntityNotFoundError,
    LoginRequired,
    ValidationError,
)
from freshcart.domain.model.customer_order import CustomerOrder
from freshcart.domain.repository.shop_gateway import ShopGateway

logger = logging.getLogger(__name__)


class ListCustomerOrdersHandler:

    def __init__(self, gateway: ShopGateway, session: AuthSession) -> None:
        self._gateway = gateway
        self._session = session

    def handle(self, today: date | None = None) -> list[CustomerOrderDTO]:
        today = today or date.today()
        return [self._to_dto(order, today) for order in self._load()]

    def get(self, order_id: str, today: date | None = None) -> CustomerOrderDTO:
        for order in self._load():
            if order.id == str(order_id):
                return self._to_dto(order, today or date.today())
        raise EntityNotFoundError(f"Order #{order_id} not found")

    def _load(self) -> list[CustomerOrder]:
        user_id = self._session.user_id
        if not user_id:
            raise LoginRequired("Please login to view your orders")

        response = self._gateway.fetch_customer_orders(user_id)
        if not response.ok or response.body.get("success") is False:
            raise ApiError(
                response.body.get("message") or f"Server error: {response.status}",
                response.status,
            )

        data = response.body.get("data")
        orders: list[CustomerOrder] = []
        for raw in data if isinstance(data, list) else []:
            try:
                orders.append(CustomerOrder.from_backend(raw))
            except ValidationError as exc:
                logger.warning(f"Skipping unreadable order {raw!r}: {exc}")
        logger.info(f"Loaded {len(orders)} orders for customer {user_id}")
        return orders

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(order: CustomerOrder, today: date) -> CustomerOrderDTO:
        subscription = order.tracks_as_subscription
        return CustomerOrderDTO(
            id=order.id,
            status=order.status.value,
            status_label=order.status.label,
            order_date=order.order_date,
            total=str(order.total) if order.total is not None else None,
            items=[
                OrderItemDTO(
                    name=item.name,
                    quantity=item.quantity,
                    unit_price=str(item.price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            is_subscription=subscription,
            remaining_deliveries=order.remaining_deliveries(today) if subscription else 0,
            partner=order.partner,
            steps=[
                TrackingStepDTO(
                    status=step.status.value,
                    label=step.status.label,
                    completed=step.completed,
                    at=step.at,
                )
                for step in order.tracking_steps()
            ],
        )
