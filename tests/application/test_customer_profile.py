"""Tests for the customer profile service."""

import pytest

from freshcart.application.auth_session import AuthSession
from freshcart.application.customer_profile import CustomerProfileService
from freshcart.application.events import PROFILE_UPDATED, EventBus
from freshcart.domain.exceptions import LoginRequired, ValidationError
from tests.fakes import FakeShopApi, InMemoryStorage, logged_in_session

ASHA = {
    "id": "user-1",
    "name": "Asha",
    "email": "asha@example.com",
    "phone": "9876543210",
    "college": "IIT Madras",
}


def _service(customers=None, logged_in=True):
    storage = InMemoryStorage()
    session = logged_in_session(storage) if logged_in else AuthSession(storage)
    api = FakeShopApi(customers=customers)
    events = EventBus()
    return CustomerProfileService(api, session, events), api, events


class TestFetch:

    def test_existing_profile(self):
        service, _, _ = _service({"user-1": dict(ASHA)})
        profile = service.current()
        assert profile.name == "Asha"
        assert profile.is_complete

    def test_unknown_customer(self):
        service, _, _ = _service()
        assert service.fetch("ghost") is None

    def test_no_session(self):
        service, api, _ = _service({"user-1": dict(ASHA)}, logged_in=False)
        assert service.current() is None
        assert api.calls == []


class TestGetOrCreate:

    def test_returns_existing(self):
        service, api, _ = _service({"user-1": dict(ASHA)})
        service.get_or_create("user-1", "other@example.com")
        assert "upsert_customer" not in api.call_names()

    def test_creates_with_name_from_email(self):
        service, api, _ = _service()
        profile = service.get_or_create("user-2", "ravi@example.com")
        assert profile.name == "ravi"
        assert not profile.is_complete
        assert api.last_payload("upsert_customer")["email"] == "ravi@example.com"

    def test_email_required(self):
        service, _, _ = _service()
        with pytest.raises(ValidationError):
            service.get_or_create("user-2", "")


class TestUpdate:

    def test_update_emits_profile_updated(self):
        service, _, events = _service({"user-1": {**ASHA, "college": ""}})
        seen = []
        events.subscribe(PROFILE_UPDATED, seen.append)

        updated = service.update(college="IIT Madras", phone=None)

        assert updated.college == "IIT Madras"
        assert updated.phone == "9876543210"
        assert seen == [updated]

    def test_update_needs_login(self):
        service, _, _ = _service(logged_in=False)
        with pytest.raises(LoginRequired):
            service.update(name="X")
