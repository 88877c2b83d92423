"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from freshcart.domain.exceptions import ValidationError

MAX_QUANTITY_PER_ITEM = 7


class ProductType(Enum):
    FRUIT = "fruit"
    PACK = "pack"
    BOWL = "bowl"
    REFRESHMENT = "refreshment"

    @staticmethod
    def parse(raw: object) -> ProductType:
        try:
            return ProductType(str(raw).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown product type: {raw!r}") from exc


@dataclass(frozen=True)
class ProductKey:
    """Identity of a cart line or wishlist entry: id plus type.

    Ids are only unique within a type (fruit #1 and pack #1 both exist).
    """

    product_id: int
    type: ProductType

    def __str__(self) -> str:
        return f"{self.type.value}:{self.product_id}"

    @staticmethod
    def parse(raw: str) -> ProductKey:
        """Parse ``'bowl:101'`` into a ProductKey."""
        if ":" not in raw:
            raise ValidationError(f"Invalid product key {raw!r}. Expected 'type:id'.")
        type_str, id_str = raw.split(":", 1)
        try:
            product_id = int(id_str)
        except ValueError as exc:
            raise ValidationError(f"Invalid product id {id_str!r}") from exc
        return ProductKey(product_id, ProductType.parse(type_str))


@dataclass(frozen=True)
class Money:
    """Monetary amount in rupees.

    Uses Decimal to avoid floating-point rounding errors.
    """

    amount: Decimal
    currency: str = "INR"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < Decimal("0"):
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    @property
    def minor_units(self) -> int:
        """Amount in paise, as payment widgets expect it."""
        return int((self.amount * 100).to_integral_value())

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"₹{self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class DisplayPrice:
    """Client-side price shown next to a product.

    Advisory only. Nothing that reaches the order-submission path carries
    a DisplayPrice; the backend re-prices every line from its own catalog.
    """

    displayed: Money
    original: Money | None = None

    @property
    def savings(self) -> Money:
        if self.original is None or self.original <= self.displayed:
            return Money.zero()
        return self.original - self.displayed


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity, capped per cart line."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")
        if self.value > MAX_QUANTITY_PER_ITEM:
            raise ValidationError(
                f"Maximum {MAX_QUANTITY_PER_ITEM} items per product allowed"
            )

    def __str__(self) -> str:
        return str(self.value)
