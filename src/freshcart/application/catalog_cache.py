"""Application service: memoized product catalog.

An empty result means "catalog temporarily unavailable", not "the shop
sells nothing": failures are logged and not memoized, so the next call
tries the source again.
"""

from __future__ import annotations

import logging

from freshcart.domain.exceptions import ApiError, EntityNotFoundError
from freshcart.domain.model.product import Product
from freshcart.domain.model.value_objects import Money, ProductKey
from freshcart.domain.repository.product_source import ProductSource

logger = logging.getLogger(__name__)


class CatalogCache:

    def __init__(self, source: ProductSource) -> None:
        self._source = source
        self._products: list[Product] | None = None

    def fetch_all(self) -> list[Product]:
        if self._products is not None:
            return list(self._products)
        try:
            products = self._source.list_all()
        except ApiError as exc:
            logger.warning(f"Catalog unavailable: {exc}")
            return []
        self._products = list(products)
        logger.info(f"Catalog loaded with {len(self._products)} products")
        return list(self._products)

    def invalidate(self) -> None:
        self._products = None

    def get(self, key: ProductKey) -> Product:
        for product in self.fetch_all():
            if product.key == key:
                return product
        raise EntityNotFoundError(f"Product not found: {key}")

    def search(self, query: str) -> list[Product]:
        return [p for p in self.fetch_all() if p.matches(query)]

    def price_drops(self, max_price: Money | None = None) -> list[Product]:
        """Discounted products at or under *max_price* (default ₹100)."""
        ceiling = max_price or Money.of(100)
        return [
            p
            for p in self.fetch_all()
            if p.original_price is not None
            and p.original_price > p.price
            and p.price <= ceiling
        ]
