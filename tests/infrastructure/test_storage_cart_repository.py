"""Tests for the cart and wishlist repositories over key-value storage."""

import json

from freshcart.domain.model.cart import Cart, CartLine
from freshcart.domain.model.value_objects import ProductKey, ProductType
from freshcart.domain.model.wishlist import Wishlist, WishlistEntry
from freshcart.infrastructure.persistence.storage_cart_repository import (
    CART_KEY,
    WISHLIST_KEY,
    StorageCartRepository,
    StorageWishlistRepository,
)
from tests.fakes import InMemoryStorage, make_product


class TestStorageCartRepository:

    def test_save_writes_snapshot_shape(self):
        storage = InMemoryStorage()
        pack = make_product(2, ProductType.PACK, name="Vit C Pack - Duo", price="900",
                            original="1200", is_subscription=True)
        cart = Cart()
        cart.add(CartLine.from_product(pack, 1))

        StorageCartRepository(storage).save(cart)

        assert json.loads(storage.items[CART_KEY]) == [{
            "id": 2,
            "type": "pack",
            "name": "Vit C Pack - Duo",
            "image": "",
            "price": 900.0,
            "originalPrice": 1200.0,
            "quantity": 1,
            "isSubscription": True,
        }]

    def test_legacy_lines_get_inferred_types(self):
        storage = InMemoryStorage({CART_KEY: json.dumps([
            {"id": 3, "name": "Black Grapes", "price": 90, "quantity": 2},
            {"id": 1, "name": "Vit C Pack", "price": 500, "quantity": 1, "isSubscription": True},
            {"id": 102, "name": "Bowl", "price": 900, "quantity": 1},
            {"id": 210, "name": "Juice", "price": 60, "quantity": 1},
        ])})

        keys = [line.key for line in StorageCartRepository(storage).load().lines]

        assert keys == [
            ProductKey(3, ProductType.FRUIT),
            ProductKey(1, ProductType.PACK),
            ProductKey(102, ProductType.BOWL),
            ProductKey(210, ProductType.REFRESHMENT),
        ]

    def test_tampered_quantities_clamped_on_load(self):
        storage = InMemoryStorage({CART_KEY: json.dumps([
            {"id": 1, "type": "fruit", "price": 120, "quantity": 99},
            {"id": 2, "type": "fruit", "price": 80, "quantity": "-3"},
        ])})
        quantities = [line.quantity.value for line in StorageCartRepository(storage).load().lines]
        assert quantities == [7, 1]

    def test_duplicate_lines_keep_first(self):
        storage = InMemoryStorage({CART_KEY: json.dumps([
            {"id": 1, "type": "fruit", "price": 120, "quantity": 2},
            {"id": 1, "type": "fruit", "price": 1, "quantity": 5},
        ])})
        (line,) = StorageCartRepository(storage).load().lines
        assert line.quantity.value == 2

    def test_non_list_payload_is_empty(self):
        storage = InMemoryStorage({CART_KEY: json.dumps({"id": 1})})
        assert StorageCartRepository(storage).load().is_empty

    def test_clear(self):
        storage = InMemoryStorage({CART_KEY: "[]"})
        StorageCartRepository(storage).clear()
        assert CART_KEY not in storage.items


class TestStorageWishlistRepository:

    def test_round_trip(self):
        storage = InMemoryStorage()
        repo = StorageWishlistRepository(storage)
        wishlist = Wishlist()
        wishlist.toggle(WishlistEntry.from_product(make_product(5, name="Guava", price="60")))

        repo.save(wishlist)

        (entry,) = repo.load().entries
        assert entry.key == ProductKey(5, ProductType.FRUIT)
        assert entry.snapshot.name == "Guava"

    def test_malformed_json_is_empty(self):
        storage = InMemoryStorage({WISHLIST_KEY: "not json"})
        assert StorageWishlistRepository(storage).load().entries == []
