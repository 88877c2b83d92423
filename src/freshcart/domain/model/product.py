"""Product — a catalog entry as the storefront knows it.

Products are owned by the backend. The storefront only caches them, so
the price here is a display price and never feeds the amount charged.
"""

from __future__ import annotations

from dataclasses import dataclass

from freshcart.domain.model.value_objects import (
    DisplayPrice,
    Money,
    ProductKey,
    ProductType,
)


@dataclass(frozen=True)
class Product:

    id: int
    type: ProductType
    name: str
    price: Money
    original_price: Money | None = None
    image: str = ""
    category: str = ""
    description: str = ""
    is_subscription: bool = False
    number_of_days: int | None = None

    @property
    def key(self) -> ProductKey:
        return ProductKey(self.id, self.type)

    @property
    def display_price(self) -> DisplayPrice:
        return DisplayPrice(self.price, self.original_price)

    def matches(self, query: str) -> bool:
        """Case-insensitive match on name, category or description."""
        needle = query.strip().lower()
        if not needle:
            return False
        return any(
            needle in field.lower()
            for field in (self.name, self.category, self.description)
        )
