"""Unit tests for the subscription delivery schedule."""

from datetime import date

import pytest

from freshcart.domain.exceptions import ValidationError
from freshcart.domain.model.subscription import (
    DeliveryStatus,
    SubscriptionDeliverySchedule,
    add_months,
    delivery_records,
    subscription_window,
)


class TestWindow:

    def test_starts_tomorrow_and_runs_one_month(self):
        assert subscription_window(date(2024, 3, 4)) == (date(2024, 3, 5), date(2024, 4, 4))

    def test_month_end_clamped(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_year_rollover(self):
        assert subscription_window(date(2024, 12, 15)) == (date(2024, 12, 16), date(2025, 1, 15))


class TestGenerate:

    def test_sundays_are_na_and_unnumbered(self):
        # 2024-03-04 is a Monday; 2024-03-10 is a Sunday
        schedule = SubscriptionDeliverySchedule.generate(date(2024, 3, 4), date(2024, 3, 11))
        sunday = schedule.days[6]
        assert sunday.date == date(2024, 3, 10)
        assert sunday.status == DeliveryStatus.NA
        assert sunday.day_number is None
        assert schedule.days[7].day_number == 7

    def test_one_entry_per_calendar_day(self):
        schedule = SubscriptionDeliverySchedule.generate(date(2024, 3, 5), date(2024, 4, 4))
        assert len(schedule.days) == 31
        assert len(schedule.delivery_days) == 27

    def test_holidays_are_na(self):
        schedule = SubscriptionDeliverySchedule.generate(
            date(2024, 3, 4), date(2024, 3, 6), holidays=[date(2024, 3, 5)]
        )
        assert [d.day_number for d in schedule.days] == [1, None, 2]

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="before it starts"):
            SubscriptionDeliverySchedule.generate(date(2024, 3, 5), date(2024, 3, 4))


class TestFromBackend:

    def test_backend_status_overlays_generated_days(self):
        schedule = SubscriptionDeliverySchedule.from_backend(
            [
                {"date": "2024-03-04", "status": "delivered"},
                {"date": "2024-03-05", "status": "out_for_delivery"},
            ],
            date(2024, 3, 4),
            date(2024, 3, 10),
        )
        assert schedule.days[0].status == DeliveryStatus.DELIVERED
        assert schedule.days[0].day_number == 1
        assert schedule.delivered_days == 1
        assert schedule.remaining_days == 5  # 6 delivery days, 1 delivered

    def test_window_derived_from_reported_dates(self):
        schedule = SubscriptionDeliverySchedule.from_backend(
            [{"date": "2024-03-04", "status": "pending"}, {"date": "2024-03-06", "status": "NA"}]
        )
        assert [d.date.day for d in schedule.days] == [4, 5, 6]
        assert schedule.days[2].status == DeliveryStatus.NA

    def test_nothing_reported(self):
        assert SubscriptionDeliverySchedule.from_backend([]).days == []

    def test_unreadable_records_skipped(self):
        schedule = SubscriptionDeliverySchedule.from_backend(
            [
                {"date": "not-a-date"},
                {"date": "2024-03-05", "day_number": "one"},
                {"date": "2024-03-04", "status": "delivered"},
            ]
        )
        assert [d.date.day for d in schedule.days] == [4]
        assert schedule.delivered_days == 1


class TestDeliveryRecords:

    def test_json_string_decoded(self):
        assert delivery_records('[{"date": "2024-03-04"}, 3]') == [{"date": "2024-03-04"}]

    def test_garbage_is_empty(self):
        assert delivery_records("{oops") == []
        assert delivery_records(None) == []


class TestWeeks:

    def test_sunday_first_grid(self):
        # Monday start -> one empty Sunday cell
        schedule = SubscriptionDeliverySchedule.generate(date(2024, 3, 4), date(2024, 3, 9))
        (week,) = schedule.weeks()
        assert week[0] is None
        assert week[1].date == date(2024, 3, 4)
