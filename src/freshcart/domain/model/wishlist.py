"""Wishlist — saved products, same identity rule as cart lines."""

from __future__ import annotations

from dataclasses import dataclass, field

from freshcart.domain.model.cart import ClientSnapshot
from freshcart.domain.model.product import Product
from freshcart.domain.model.value_objects import ProductKey


@dataclass(frozen=True)
class WishlistEntry:

    key: ProductKey
    snapshot: ClientSnapshot
    is_subscription: bool = False
    number_of_days: int | None = None

    @staticmethod
    def from_product(product: Product) -> WishlistEntry:
        return WishlistEntry(
            key=product.key,
            snapshot=ClientSnapshot(
                name=product.name,
                image=product.image,
                price=product.display_price,
            ),
            is_subscription=product.is_subscription,
            number_of_days=product.number_of_days,
        )


@dataclass
class Wishlist:

    entries: list[WishlistEntry] = field(default_factory=list)

    def toggle(self, entry: WishlistEntry) -> bool:
        """Add the entry, or remove it if already present.

        Returns True when the entry is present afterwards.
        """
        if self.contains(entry.key):
            self.remove(entry.key)
            return False
        self.entries.append(entry)
        return True

    def remove(self, key: ProductKey) -> None:
        self.entries = [e for e in self.entries if e.key != key]

    def contains(self, key: ProductKey) -> bool:
        return self.find(key) is not None

    def find(self, key: ProductKey) -> WishlistEntry | None:
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None
