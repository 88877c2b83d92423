"""Bundled product table, used when the backend catalog is not wanted.

Ids are unique per type only: fruits and packs both start at 1, bowls
start at 101.
"""

from __future__ import annotations

from freshcart.domain.model.product import Product
from freshcart.domain.repository.product_source import ProductSource
from freshcart.infrastructure.product_mapping import product_from_raw


def _fruit(id: int, name: str, price: int, original: int, image: str, vitamin: str, description: str) -> dict:
    return {
        "id": id,
        "name": name,
        "description": description,
        "price": price,
        "originalPrice": original,
        "image": f"/fruits/{image}.png",
        "category": "Fresh Fruits",
        "type": "fruit",
        "vitamin": vitamin,
    }


FRUITS = [
    _fruit(1, "Apple", 120, 150, "apple", "Vit C", "Crisp and juicy red apples, rich in fiber and vitamin C"),
    _fruit(2, "Amla", 80, 100, "amla", "Vit C", "Indian gooseberry packed with vitamin C and antioxidants"),
    _fruit(3, "Black Grapes", 90, 120, "blackgrapes", "Vit A", "Sweet and seedless black grapes, perfect for snacking"),
    _fruit(4, "Green Grapes", 85, 110, "greengrapes", "Vit A", "Fresh and tangy green grapes, refreshingly sweet"),
    _fruit(5, "Guava", 60, 80, "guava", "Vit C", "Tropical guava with unique flavor and high vitamin content"),
    _fruit(6, "Kiwi", 150, 200, "kiwi", "Vit C", "Exotic kiwi fruit with bright green flesh and tiny seeds"),
    _fruit(7, "Oranges", 70, 90, "oranges", "Vit C", "Fresh citrus oranges bursting with vitamin C"),
    _fruit(8, "Papaya", 40, 60, "papaya", "Vit A", "Ripe papaya, gentle on digestion"),
    _fruit(9, "Pineapple", 50, 70, "Pineapple", "Vit C", "Sweet and tangy pineapple chunks"),
]

PACKS = [
    {"id": 1, "name": "Vit C Pack - Solo", "price": 500, "originalPrice": 500,
     "image": "/packs/vit-c_pack.png", "category": "Health Pack", "numberOfDays": 30,
     "type": "pack", "isSubscription": True},
    {"id": 2, "name": "Vit C Pack - Duo", "price": 900, "originalPrice": 1200,
     "image": "/packs/vit-c_pack-duo.png", "category": "Health Pack", "numberOfDays": 30,
     "type": "pack", "isSubscription": True},
    {"id": 3, "name": "Standard Pack - Solo", "price": 450, "originalPrice": 450,
     "image": "/packs/standard_pack.png", "category": "Daily Pack", "numberOfDays": 30,
     "type": "pack", "isSubscription": True},
    {"id": 4, "name": "Standard Pack - Duo", "price": 800, "originalPrice": 1100,
     "image": "/packs/standard_pack-duo.png", "category": "Daily Pack", "numberOfDays": 30,
     "type": "pack", "isSubscription": True},
]

BOWLS = [
    {"id": 101, "name": "Vit C Bowl - Solo", "price": 500, "originalPrice": 500,
     "image": "/packs/vit-c_pack.png", "category": "Health Bowl", "type": "bowl"},
    {"id": 102, "name": "Vit C Bowl - Duo", "price": 900, "originalPrice": 1200,
     "image": "/packs/vit-c_pack-duo.png", "category": "Health Bowl", "type": "bowl"},
    {"id": 103, "name": "Standard Bowl - Solo", "price": 450, "originalPrice": 450,
     "image": "/packs/standard_pack.png", "category": "Daily Bowl", "type": "bowl"},
    {"id": 104, "name": "Standard Bowl - Duo", "price": 800, "originalPrice": 1100,
     "image": "/packs/standard_pack-duo.png", "category": "Daily Bowl", "type": "bowl"},
]


class StaticProductSource(ProductSource):

    def list_all(self) -> list[Product]:
        return [product_from_raw(raw) for raw in FRUITS + PACKS + BOWLS]
