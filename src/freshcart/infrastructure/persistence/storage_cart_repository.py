"""Cart and wishlist repositories over local storage.

Lines are stored under the ``cart`` and ``wishlist`` keys as JSON lists
of product snapshots, the same shape the product pages write:
``{id, type, name, image, price, originalPrice, quantity, ...}``.
Anything unreadable is skipped on load, never fatal.
"""

from __future__ import annotations

import json
import logging

from freshcart.domain.exceptions import DomainException
from freshcart.domain.model.cart import Cart, CartLine, ClientSnapshot
from freshcart.domain.model.value_objects import DisplayPrice, Money, ProductKey
from freshcart.domain.model.wishlist import Wishlist, WishlistEntry
from freshcart.domain.repository.cart_repository import CartRepository, WishlistRepository
from freshcart.domain.repository.storage import KeyValueStorage
from freshcart.domain.service.secure_order_builder import clamp_quantity, reduce_line

logger = logging.getLogger(__name__)

CART_KEY = "cart"
WISHLIST_KEY = "wishlist"


def read_json_list(storage: KeyValueStorage, key: str) -> list[dict]:
    raw = storage.get_item(key)
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning(f"Malformed JSON under '{key}', treating as empty")
        return []
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _snapshot_to_raw(key: ProductKey, snapshot: ClientSnapshot) -> dict:
    original = snapshot.price.original
    return {
        "id": key.product_id,
        "type": key.type.value,
        "name": snapshot.name,
        "image": snapshot.image,
        "price": float(snapshot.price.displayed.amount),
        "originalPrice": float(original.amount) if original is not None else None,
    }


def _snapshot_from_raw(raw: dict) -> tuple[ProductKey, ClientSnapshot] | None:
    line = reduce_line(raw)
    if line is None:
        return None
    try:
        original = raw.get("originalPrice")
        price = DisplayPrice(
            displayed=Money.of(raw.get("price", 0)),
            original=Money.of(original) if original is not None else None,
        )
    except DomainException:
        logger.warning(f"Skipping stored line {line.product_id} with invalid price")
        return None
    snapshot = ClientSnapshot(
        name=str(raw.get("name", "")),
        image=str(raw.get("image", "")),
        price=price,
    )
    return ProductKey(line.product_id, line.type), snapshot


def _optional_int(value: object) -> int | None:
    try:
        return int(value) if value is not None else None  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


class StorageCartRepository(CartRepository):

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    # --- CartRepository interface ---------------------------------------------

    def load(self) -> Cart:
        cart = Cart()
        for raw in self.load_raw():
            parsed = _snapshot_from_raw(raw)
            if parsed is None:
                continue
            key, snapshot = parsed
            if cart.find(key) is not None:
                logger.warning(f"Duplicate stored line {key}, keeping the first")
                continue
            cart.lines.append(
                CartLine(
                    key=key,
                    quantity=clamp_quantity(raw.get("quantity")),
                    snapshot=snapshot,
                    is_subscription=bool(raw.get("isSubscription")),
                    number_of_days=_optional_int(raw.get("numberOfDays")),
                )
            )
        return cart

    def load_raw(self) -> list[dict]:
        return read_json_list(self._storage, CART_KEY)

    def save(self, cart: Cart) -> None:
        raw = []
        for line in cart.lines:
            item = _snapshot_to_raw(line.key, line.snapshot)
            item["quantity"] = line.quantity.value
            if line.is_subscription:
                item["isSubscription"] = True
            if line.number_of_days is not None:
                item["numberOfDays"] = line.number_of_days
            raw.append(item)
        self._storage.set_item(CART_KEY, json.dumps(raw))

    def clear(self) -> None:
        self._storage.remove_item(CART_KEY)


class StorageWishlistRepository(WishlistRepository):

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    def load(self) -> Wishlist:
        wishlist = Wishlist()
        for raw in read_json_list(self._storage, WISHLIST_KEY):
            parsed = _snapshot_from_raw(raw)
            if parsed is None:
                continue
            key, snapshot = parsed
            if wishlist.contains(key):
                continue
            wishlist.entries.append(
                WishlistEntry(
                    key=key,
                    snapshot=snapshot,
                    is_subscription=bool(raw.get("isSubscription")),
                    number_of_days=_optional_int(raw.get("numberOfDays")),
                )
            )
        return wishlist

    def save(self, wishlist: Wishlist) -> None:
        raw = []
        for entry in wishlist.entries:
            item = _snapshot_to_raw(entry.key, entry.snapshot)
            if entry.is_subscription:
                item["isSubscription"] = True
            if entry.number_of_days is not None:
                item["numberOfDays"] = entry.number_of_days
            raw.append(item)
        self._storage.set_item(WISHLIST_KEY, json.dumps(raw))
