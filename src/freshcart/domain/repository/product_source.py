"""Abstract source of catalog products."""

from __future__ import annotations

from abc import ABC, abstractmethod

from freshcart.domain.model.product import Product


class ProductSource(ABC):

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product; raise ApiError when unavailable."""
