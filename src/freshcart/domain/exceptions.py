"""Domain-level exceptions.

Every failure the shopper can see is a subclass of DomainException so the
CLI layer can catch them uniformly and display the message verbatim.
None of them is fatal: the cart in local storage survives all of them.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class LoginRequired(DomainException):
    """The action needs a logged-in customer."""


class ApiError(DomainException):
    """The backend could not be reached or refused the request."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class AuthenticationError(ApiError):
    """No session, or the session expired (HTTP 401)."""


class AuthorizationError(ApiError):
    """The session lacks permission for the endpoint (HTTP 403)."""


class CouponRejected(DomainException):
    """The backend refused a coupon code for the current cart."""

    def __init__(self, message: str, eligible_products: list[str] | None = None) -> None:
        super().__init__(message)
        self.eligible_products = list(eligible_products or [])


class PaymentError(DomainException):
    """The payment provider reported a failure or verification failed."""


class PaymentCancelled(PaymentError):
    """The shopper dismissed the hosted checkout."""


class StaleResponse(DomainException):
    """A response arrived after the state it was computed for changed."""
