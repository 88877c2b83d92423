"""ProductSource backed by ``GET /api/products``."""

from __future__ import annotations

import logging

from freshcart.domain.exceptions import ApiError, DomainException
from freshcart.domain.model.product import Product
from freshcart.domain.repository.product_source import ProductSource
from freshcart.domain.repository.shop_gateway import ShopGateway
from freshcart.infrastructure.product_mapping import product_from_raw

logger = logging.getLogger(__name__)


class HttpProductSource(ProductSource):

    def __init__(self, gateway: ShopGateway) -> None:
        self._gateway = gateway

    def list_all(self) -> list[Product]:
        response = self._gateway.fetch_products()
        raw_products = response.body.get("products")
        if not response.success or not isinstance(raw_products, list):
            raise ApiError(
                response.body.get("message") or f"Server error: {response.status}",
                response.status,
            )

        products: list[Product] = []
        for raw in raw_products:
            try:
                products.append(product_from_raw(raw))
            except (DomainException, KeyError, TypeError, ValueError) as exc:
                logger.warning(f"Skipping unreadable product {raw!r}: {exc}")
        return products
