"""Mapping between the backend's product JSON and Product."""

from __future__ import annotations

from freshcart.domain.model.product import Product
from freshcart.domain.model.value_objects import Money, ProductType
from freshcart.domain.service.secure_order_builder import infer_product_type


def product_from_raw(raw: dict) -> Product:
    """Build a Product from backend JSON; unusable data raises."""
    product_id = int(raw["id"])
    is_subscription = bool(raw.get("isSubscription", raw.get("is_subscription", False)))
    product_type = (
        ProductType.parse(raw["type"])
        if raw.get("type")
        else infer_product_type(product_id, is_subscription)
    )
    original = raw.get("originalPrice", raw.get("original_price"))
    days = raw.get("numberOfDays", raw.get("number_of_days"))
    return Product(
        id=product_id,
        type=product_type,
        name=str(raw.get("name", "")),
        price=Money.of(raw.get("price", 0)),
        original_price=Money.of(original) if original is not None else None,
        image=str(raw.get("image") or ""),
        category=str(raw.get("category") or ""),
        description=str(raw.get("description") or ""),
        is_subscription=is_subscription,
        number_of_days=int(days) if days is not None else None,
    )
