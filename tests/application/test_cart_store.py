"""Integration tests for the local cart store.

Uses in-memory storage — no file I/O.
"""

import json

import pytest

from freshcart.application.events import CART_UPDATED
from freshcart.domain.exceptions import EntityNotFoundError, ValidationError
from freshcart.domain.model.value_objects import Money, ProductType
from tests.fakes import InMemoryStorage, make_cart_store, make_product

APPLE = make_product(1, name="Apple", price="120", original="150")
KIWI = make_product(6, name="Kiwi", price="150")
BOWL = make_product(101, ProductType.BOWL, name="Vit C Bowl", price="500")


class _Badge:
    """A mounted view that re-renders the cart count on every event."""

    def __init__(self, store, events) -> None:
        self.count = store.total_quantity()
        self._store = store
        events.subscribe(CART_UPDATED, self.render)

    def render(self, _detail) -> None:
        self.count = self._store.total_quantity()


class TestMutations:

    def test_add_persists_original_shape(self):
        storage = InMemoryStorage()
        store, _ = make_cart_store(storage)
        store.add(APPLE, 2)
        (raw,) = json.loads(storage.items["cart"])
        assert raw["id"] == 1
        assert raw["type"] == "fruit"
        assert raw["quantity"] == 2
        assert raw["price"] == 120.0

    def test_add_same_identity_increments(self):
        store, _ = make_cart_store()
        store.add(APPLE)
        store.add(APPLE)
        (line,) = store.list()
        assert line.quantity.value == 2

    def test_set_quantity_zero_equivalent_to_remove(self):
        a, _ = make_cart_store()
        b, _ = make_cart_store()
        for store in (a, b):
            store.add(APPLE)
            store.add(KIWI)
        a.set_quantity(APPLE.key, 0)
        b.remove(APPLE.key)
        assert [line.key for line in a.list()] == [line.key for line in b.list()] == [KIWI.key]

    def test_remove_unknown_rejected(self):
        store, _ = make_cart_store()
        with pytest.raises(EntityNotFoundError):
            store.remove(APPLE.key)

    def test_rejected_mutation_not_persisted(self):
        store, _ = make_cart_store()
        store.add(APPLE, 7)
        with pytest.raises(ValidationError):
            store.add(KIWI)
        assert store.total_quantity() == 7

    def test_clear(self):
        store, _ = make_cart_store()
        store.add(APPLE)
        store.clear()
        assert store.list() == []


class TestNotifications:

    def test_every_observer_converges(self):
        store, events = make_cart_store()
        header, floating = _Badge(store, events), _Badge(store, events)

        store.add(APPLE, 2)
        store.add(BOWL)
        store.set_quantity(APPLE.key, 5)
        store.remove(BOWL.key)
        store.add(KIWI)

        expected = sum(line.quantity.value for line in store.list())
        assert header.count == floating.count == expected == 6

    def test_event_detail_is_total_quantity(self):
        store, events = make_cart_store()
        seen = []
        events.subscribe(CART_UPDATED, seen.append)
        store.add(APPLE, 3)
        assert seen == [3]

    def test_unsubscribe(self):
        store, events = make_cart_store()
        seen = []
        unsubscribe = events.subscribe(CART_UPDATED, seen.append)
        unsubscribe()
        store.add(APPLE)
        assert seen == []

    def test_revision_bumped_per_mutation(self):
        store, _ = make_cart_store()
        store.add(APPLE)
        store.set_quantity(APPLE.key, 2)
        store.clear()
        assert store.revision == 3


class TestStorageCorruption:

    def test_malformed_json_reads_as_empty(self):
        store, _ = make_cart_store(InMemoryStorage({"cart": "{not json"}))
        assert store.list() == []
        assert store.raw_lines() == []

    def test_bad_entries_skipped(self):
        storage = InMemoryStorage({"cart": json.dumps([
            "junk",
            {"name": "no id"},
            {"id": 2, "type": "fruit", "price": "abc", "quantity": 1},
            {"id": 3, "type": "fruit", "price": 90, "quantity": 2},
        ])})
        store, _ = make_cart_store(storage)
        assert [line.key.product_id for line in store.list()] == [3]

    def test_legacy_line_without_type_is_inferred(self):
        storage = InMemoryStorage({"cart": json.dumps([{"id": 150, "price": 500, "quantity": 1}])})
        store, _ = make_cart_store(storage)
        (line,) = store.list()
        assert line.key.type == ProductType.BOWL


class TestDisplayFigures:

    def test_subtotal_and_savings(self):
        store, _ = make_cart_store()
        store.add(APPLE, 2)
        assert store.subtotal() == Money.of("240")
        assert store.savings() == Money.of("60")

    def test_summary_dto(self):
        store, _ = make_cart_store()
        store.add(APPLE, 2)
        dto = store.summary()
        assert dto.items[0].key == "fruit:1"
        assert dto.items[0].line_total == "₹240.00"
        assert dto.total_quantity == 2
