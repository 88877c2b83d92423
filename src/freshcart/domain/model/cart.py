"""Cart aggregate — the shopper's pending lines, held client-side only.

The cart is never synced to the backend until checkout, and even then only
``(productId, type, quantity)`` leaves the device. Prices in here are
snapshots for display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from freshcart.domain.exceptions import EntityNotFoundError, ValidationError
from freshcart.domain.model.product import Product
from freshcart.domain.model.value_objects import (
    MAX_QUANTITY_PER_ITEM,
    DisplayPrice,
    Money,
    ProductKey,
    ProductType,
    Quantity,
)

logger = logging.getLogger(__name__)

MAX_TOTAL_ITEMS = 7
MIN_FRUIT_ONLY_QUANTITY = 2


@dataclass(frozen=True)
class ClientSnapshot:
    """What the product looked like when it was added. Display only."""

    name: str
    image: str
    price: DisplayPrice


@dataclass
class CartLine:

    key: ProductKey
    quantity: Quantity
    snapshot: ClientSnapshot
    is_subscription: bool = False
    number_of_days: int | None = None

    @property
    def line_total(self) -> Money:
        return self.snapshot.price.displayed * self.quantity.value

    @property
    def line_savings(self) -> Money:
        return self.snapshot.price.savings * self.quantity.value

    @staticmethod
    def from_product(product: Product, quantity: int = 1) -> CartLine:
        return CartLine(
            key=product.key,
            quantity=Quantity(quantity),
            snapshot=ClientSnapshot(
                name=product.name,
                image=product.image,
                price=product.display_price,
            ),
            is_subscription=product.is_subscription,
            number_of_days=product.number_of_days,
        )


@dataclass
class Cart:
    """Aggregate root over the cart lines.

    Quantity rules:
    - a single line holds at most ``MAX_QUANTITY_PER_ITEM`` units (clamped)
    - the whole cart holds at most ``MAX_TOTAL_ITEMS`` units (rejected)
    - setting a line to zero or less removes it
    """

    lines: list[CartLine] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add(self, line: CartLine) -> None:
        existing = self.find(line.key)
        if existing is None:
            self._check_total(self.total_quantity + line.quantity.value)
            self.lines.append(line)
            return
        self.set_quantity(line.key, existing.quantity.value + line.quantity.value)

    def set_quantity(self, key: ProductKey, quantity: int) -> None:
        if quantity <= 0:
            self.remove(key)
            return

        line = self._get(key)
        if quantity > MAX_QUANTITY_PER_ITEM:
            logger.info(
                f"Clamping {key} from {quantity} to {MAX_QUANTITY_PER_ITEM} units"
            )
            quantity = MAX_QUANTITY_PER_ITEM

        self._check_total(self.total_quantity - line.quantity.value + quantity)
        line.quantity = Quantity(quantity)

    def remove(self, key: ProductKey) -> None:
        line = self._get(key)
        self.lines.remove(line)

    def clear(self) -> None:
        self.lines.clear()

    # --- Queries --------------------------------------------------------------

    def find(self, key: ProductKey) -> CartLine | None:
        for line in self.lines:
            if line.key == key:
                return line
        return None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity.value for line in self.lines)

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result

    @property
    def savings(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_savings
        return result

    def check_fruit_minimum(self) -> None:
        """A cart holding only fruits needs at least two fruit units."""
        fruit = [line for line in self.lines if line.key.type == ProductType.FRUIT]
        if not fruit or len(fruit) != len(self.lines):
            return
        if sum(line.quantity.value for line in fruit) < MIN_FRUIT_ONLY_QUANTITY:
            raise ValidationError(
                f"At least {MIN_FRUIT_ONLY_QUANTITY} fruits are needed to place an order. "
                "Please add more fruits or increase the quantity."
            )

    # --- Internal helpers -----------------------------------------------------

    def _get(self, key: ProductKey) -> CartLine:
        line = self.find(key)
        if line is None:
            raise EntityNotFoundError(f"Item {key} is not in the cart")
        return line

    @staticmethod
    def _check_total(total: int) -> None:
        if total > MAX_TOTAL_ITEMS:
            raise ValidationError(
                f"Maximum {MAX_TOTAL_ITEMS} total items allowed per order"
            )
