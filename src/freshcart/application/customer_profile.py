"""Application service: the logged-in customer's profile."""

from __future__ import annotations

import logging

from freshcart.application.auth_session import AuthSession
from freshcart.application.events import PROFILE_UPDATED, EventBus
from freshcart.domain.exceptions import ApiError, LoginRequired, ValidationError
from freshcart.domain.model.customer import CustomerProfile
from freshcart.domain.repository.shop_gateway import ShopGateway

logger = logging.getLogger(__name__)


def _to_profile(data: dict) -> CustomerProfile:
    return CustomerProfile(
        id=str(data.get("id", "")),
        name=str(data.get("name") or ""),
        email=str(data.get("email") or ""),
        phone=str(data.get("phone") or ""),
        college=str(data.get("college") or ""),
    )


class CustomerProfileService:

    def __init__(
        self,
        gateway: ShopGateway,
        session: AuthSession,
        events: EventBus,
    ) -> None:
        self._gateway = gateway
        self._session = session
        self._events = events

    def fetch(self, customer_id: str) -> CustomerProfile | None:
        if not customer_id:
            return None
        response = self._gateway.fetch_customer(customer_id)
        data = response.body.get("data")
        if not response.success or not isinstance(data, dict):
            return None
        return _to_profile(data)

    def get_or_create(self, customer_id: str, email: str, name: str | None = None) -> CustomerProfile:
        existing = self.fetch(customer_id)
        if existing is not None:
            return existing
        if not email:
            raise ValidationError("Email is required to create a profile")
        logger.info(f"Creating profile for customer {customer_id}")
        return self._upsert(CustomerProfile(
            id=customer_id,
            name=name or email.split("@")[0] or "User",
            email=email,
        ))

    def current(self) -> CustomerProfile | None:
        user_id = self._session.user_id
        if user_id is None:
            return None
        return self.fetch(user_id)

    def update(self, **changes: str | None) -> CustomerProfile:
        profile = self.current()
        if profile is None:
            raise LoginRequired("Please login to update your profile")
        updated = self._upsert(profile.with_changes(**changes))
        self._events.emit(PROFILE_UPDATED, updated)
        return updated

    # --- Internal helpers -----------------------------------------------------

    def _upsert(self, profile: CustomerProfile) -> CustomerProfile:
        response = self._gateway.upsert_customer({
            "id": profile.id,
            "name": profile.name or "User",
            "email": profile.email,
            "phone": profile.phone,
            "college": profile.college,
        })
        data = response.body.get("data")
        if not response.success or not isinstance(data, dict):
            raise ApiError(response.body.get("message") or "Failed to save profile", response.status)
        return _to_profile(data)
