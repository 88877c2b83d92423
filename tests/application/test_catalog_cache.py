"""Tests for the memoized catalog."""

import pytest

from freshcart.application.catalog_cache import CatalogCache
from freshcart.domain.exceptions import ApiError, EntityNotFoundError
from freshcart.domain.model.product import Product
from freshcart.domain.model.value_objects import Money, ProductKey, ProductType
from freshcart.domain.repository.product_source import ProductSource
from freshcart.infrastructure.persistence.static_catalog import StaticProductSource
from tests.fakes import make_product


class CountingSource(ProductSource):

    def __init__(self, products: list[Product], failures: int = 0) -> None:
        self.products = products
        self.failures = failures
        self.calls = 0

    def list_all(self) -> list[Product]:
        self.calls += 1
        if self.failures:
            self.failures -= 1
            raise ApiError("Server error: 503", 503)
        return list(self.products)


class TestMemoization:

    def test_fetched_once(self):
        source = CountingSource([make_product()])
        cache = CatalogCache(source)
        cache.fetch_all()
        cache.fetch_all()
        assert source.calls == 1

    def test_invalidate_refetches(self):
        source = CountingSource([make_product()])
        cache = CatalogCache(source)
        cache.fetch_all()
        cache.invalidate()
        cache.fetch_all()
        assert source.calls == 2

    def test_failure_returns_empty_and_is_not_memoized(self):
        source = CountingSource([make_product()], failures=1)
        cache = CatalogCache(source)
        assert cache.fetch_all() == []
        assert len(cache.fetch_all()) == 1
        assert source.calls == 2


class TestLookups:

    def setup_method(self):
        self.cache = CatalogCache(StaticProductSource())

    def test_get_by_key(self):
        bowl = self.cache.get(ProductKey(101, ProductType.BOWL))
        assert bowl.name == "Vit C Bowl - Solo"

    def test_same_id_other_type(self):
        assert self.cache.get(ProductKey(1, ProductType.PACK)).is_subscription
        assert self.cache.get(ProductKey(1, ProductType.FRUIT)).name == "Apple"

    def test_unknown_key(self):
        with pytest.raises(EntityNotFoundError):
            self.cache.get(ProductKey(999, ProductType.FRUIT))

    def test_search_is_case_insensitive(self):
        names = {p.name for p in self.cache.search("GRAPES")}
        assert names == {"Black Grapes", "Green Grapes"}

    def test_price_drops(self):
        drops = self.cache.price_drops(Money.of(60))
        assert {p.name for p in drops} == {"Guava", "Papaya", "Pineapple"}
