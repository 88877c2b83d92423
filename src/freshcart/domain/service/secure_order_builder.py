"""Domain service: reduce raw cart storage to secure order lines.

The raw cart comes straight out of local storage and cannot be trusted:
lines may be missing ids or types, quantities may be strings, and every
price field may have been edited. The reduction keeps only
``(productId, type, quantity)`` and drops everything else.
"""

from __future__ import annotations

import logging

from freshcart.domain.exceptions import ValidationError
from freshcart.domain.model.order import SecureOrderLine
from freshcart.domain.model.value_objects import (
    MAX_QUANTITY_PER_ITEM,
    ProductType,
    Quantity,
)

logger = logging.getLogger(__name__)

# Legacy id ranges used when a stored line has no type tag.
REFRESHMENT_ID_FLOOR = 201
BOWL_ID_FLOOR = 101


def infer_product_type(product_id: int, is_subscription: bool = False) -> ProductType:
    if product_id >= REFRESHMENT_ID_FLOOR:
        return ProductType.REFRESHMENT
    if product_id >= BOWL_ID_FLOOR:
        return ProductType.BOWL
    if is_subscription:
        return ProductType.PACK
    return ProductType.FRUIT


def clamp_quantity(raw: object) -> Quantity:
    """Parse and clamp into ``[1, MAX_QUANTITY_PER_ITEM]``.

    Unparseable, zero and negative quantities fall back to 1.
    """
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        value = 1
    return Quantity(min(max(value, 1), MAX_QUANTITY_PER_ITEM))


def reduce_line(raw: dict) -> SecureOrderLine | None:
    """Reduce one stored line, or return None if it has no usable id."""
    raw_id = raw.get("productId")
    if raw_id is None:
        raw_id = raw.get("id")
    if raw_id is None:
        return None
    try:
        product_id = int(raw_id)
    except (TypeError, ValueError):
        logger.warning(f"Dropping cart line with non-numeric id {raw_id!r}")
        return None

    product_type: ProductType | None = None
    if raw.get("type"):
        try:
            product_type = ProductType.parse(raw["type"])
        except ValidationError:
            logger.warning(f"Unknown type {raw['type']!r} on line {product_id}, inferring")
    if product_type is None:
        product_type = infer_product_type(product_id, bool(raw.get("isSubscription")))

    return SecureOrderLine(
        product_id=product_id,
        type=product_type,
        quantity=clamp_quantity(raw.get("quantity")),
    )


def build_secure_lines(raw_cart: list) -> tuple[SecureOrderLine, ...]:
    lines: list[SecureOrderLine] = []
    for raw in raw_cart:
        if not isinstance(raw, dict):
            continue
        line = reduce_line(raw)
        if line is not None:
            lines.append(line)
    return tuple(lines)
