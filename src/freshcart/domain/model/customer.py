"""Customer profile as stored by the backend."""

from __future__ import annotations

from dataclasses import dataclass, replace

from freshcart.domain.model.order import CustomerDetails

UNSELECTED_COLLEGE = "Select your university"
PHONE_LENGTH = 10


@dataclass(frozen=True)
class CustomerProfile:

    id: str
    name: str
    email: str
    phone: str = ""
    college: str = ""

    @property
    def is_complete(self) -> bool:
        """Checkout needs a name, an email, a 10-digit phone and a college."""
        if not self.name.strip() or not self.email.strip():
            return False
        phone = self.phone.strip()
        if len(phone) != PHONE_LENGTH:
            return False
        college = self.college.strip()
        return bool(college) and college != UNSELECTED_COLLEGE

    def details(self) -> CustomerDetails:
        return CustomerDetails(
            name=self.name,
            email=self.email,
            phone=self.phone,
            college=self.college,
        )

    def with_changes(self, **changes: str | None) -> CustomerProfile:
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
