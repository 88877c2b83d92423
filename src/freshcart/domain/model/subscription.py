"""Subscription delivery schedule — one entry per calendar day.

Deliveries run every day of the subscription window except Sundays and
holidays. Those days are marked NA and do not get a day number, so a
monthly window usually has 25-27 numbered delivery days.
"""

from __future__ import annotations

import calendar
import json
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Iterable

from freshcart.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

SUNDAY = 6  # date.weekday()


class DeliveryStatus(Enum):
    PENDING = "pending"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    NA = "NA"

    @staticmethod
    def parse(raw: object) -> DeliveryStatus:
        text = str(raw or "").strip()
        if text.upper() == "NA":
            return DeliveryStatus.NA
        try:
            return DeliveryStatus(text.lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown delivery status: {raw!r}") from exc


@dataclass(frozen=True)
class DeliveryDay:

    date: date
    day_number: int | None
    status: DeliveryStatus

    @property
    def is_delivery_day(self) -> bool:
        return self.status != DeliveryStatus.NA


def add_months(start: date, months: int) -> date:
    """Same day-of-month ``months`` later, clamped to the month's last day."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def delivery_records(raw: object) -> list[dict]:
    """Backend delivery dates arrive as a list or as a JSON-encoded list."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning("Delivery dates are not valid JSON, ignoring them")
            return []
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, dict)]


def subscription_window(today: date) -> tuple[date, date]:
    """A monthly subscription starts tomorrow and runs for one month."""
    start = today + timedelta(days=1)
    end = add_months(start, 1) - timedelta(days=1)
    return start, end


@dataclass
class SubscriptionDeliverySchedule:

    days: list[DeliveryDay] = field(default_factory=list)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def generate(
        start: date,
        end: date,
        holidays: Iterable[date] = (),
    ) -> SubscriptionDeliverySchedule:
        if end < start:
            raise ValidationError(f"Subscription ends ({end}) before it starts ({start})")

        closed = set(holidays)
        days: list[DeliveryDay] = []
        day_number = 0
        current = start
        while current <= end:
            if current.weekday() == SUNDAY or current in closed:
                days.append(DeliveryDay(current, None, DeliveryStatus.NA))
            else:
                day_number += 1
                days.append(DeliveryDay(current, day_number, DeliveryStatus.PENDING))
            current += timedelta(days=1)
        return SubscriptionDeliverySchedule(days)

    @staticmethod
    def from_backend(
        delivery_dates: list[dict],
        start: date | None = None,
        end: date | None = None,
    ) -> SubscriptionDeliverySchedule:
        """Overlay backend delivery records on the generated window.

        The backend is authoritative for every date it reports; dates it
        leaves out keep the locally generated status. Records that cannot
        be read are skipped.
        """
        reported: dict[date, DeliveryDay] = {}
        for raw in delivery_dates:
            if not isinstance(raw, dict) or not raw.get("date"):
                continue
            try:
                day = date.fromisoformat(str(raw["date"])[:10])
                number = raw.get("day_number", raw.get("dayNumber"))
                reported[day] = DeliveryDay(
                    date=day,
                    day_number=int(number) if number is not None else None,
                    status=DeliveryStatus.parse(raw.get("status", "pending")),
                )
            except (TypeError, ValueError, ValidationError) as exc:
                logger.warning(f"Skipping unreadable delivery record {raw!r}: {exc}")

        if not reported and (start is None or end is None):
            return SubscriptionDeliverySchedule()

        start = start or min(reported)
        end = end or max(reported)
        base = SubscriptionDeliverySchedule.generate(start, end)

        merged: list[DeliveryDay] = []
        for day in base.days:
            remote = reported.get(day.date)
            if remote is None:
                merged.append(day)
            elif remote.day_number is None and remote.is_delivery_day:
                merged.append(DeliveryDay(day.date, day.day_number, remote.status))
            else:
                merged.append(remote)
        return SubscriptionDeliverySchedule(merged)

    # --- Queries --------------------------------------------------------------

    @property
    def delivery_days(self) -> list[DeliveryDay]:
        return [d for d in self.days if d.is_delivery_day]

    @property
    def delivered_days(self) -> int:
        return sum(1 for d in self.days if d.status == DeliveryStatus.DELIVERED)

    @property
    def remaining_days(self) -> int:
        return sum(
            1
            for d in self.days
            if d.status in (DeliveryStatus.PENDING, DeliveryStatus.OUT_FOR_DELIVERY)
        )

    def weeks(self) -> list[list[DeliveryDay | None]]:
        """Sunday-first calendar grid, padded with None."""
        if not self.days:
            return []
        leading = (self.days[0].date.weekday() + 1) % 7
        cells: list[DeliveryDay | None] = [None] * leading + list(self.days)
        while len(cells) % 7:
            cells.append(None)
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]
