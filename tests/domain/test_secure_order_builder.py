"""Unit tests for reducing raw cart storage to secure order lines."""

import pytest

from freshcart.domain.model.value_objects import ProductType
from freshcart.domain.service.secure_order_builder import (
    build_secure_lines,
    clamp_quantity,
    infer_product_type,
)


class TestInferProductType:

    @pytest.mark.parametrize(
        "product_id, expected",
        [
            (250, ProductType.REFRESHMENT),
            (201, ProductType.REFRESHMENT),
            (150, ProductType.BOWL),
            (101, ProductType.BOWL),
            (7, ProductType.FRUIT),
        ],
    )
    def test_id_ranges(self, product_id, expected):
        assert infer_product_type(product_id) == expected

    def test_subscription_flag_means_pack(self):
        assert infer_product_type(3, is_subscription=True) == ProductType.PACK

    def test_id_range_beats_subscription_flag(self):
        assert infer_product_type(150, is_subscription=True) == ProductType.BOWL


class TestClampQuantity:

    def test_caps_at_seven(self):
        assert clamp_quantity(15).value == 7

    def test_zero_becomes_one(self):
        assert clamp_quantity(0).value == 1

    def test_negative_becomes_one(self):
        assert clamp_quantity(-4).value == 1

    def test_garbage_becomes_one(self):
        assert clamp_quantity("lots").value == 1
        assert clamp_quantity(None).value == 1

    def test_numeric_string_parsed(self):
        assert clamp_quantity("3").value == 3


class TestBuildSecureLines:

    def test_drops_lines_without_any_id(self):
        lines = build_secure_lines([
            {"name": "ghost", "quantity": 1},
            {"id": 1, "type": "fruit", "quantity": 2},
        ])
        assert [line.product_id for line in lines] == [1]

    def test_product_id_preferred_over_id(self):
        (line,) = build_secure_lines([{"id": 9, "productId": 3, "type": "fruit"}])
        assert line.product_id == 3

    def test_explicit_type_wins(self):
        (line,) = build_secure_lines([{"id": 150, "type": "pack"}])
        assert line.type == ProductType.PACK

    def test_missing_type_inferred(self):
        bowl, refreshment = build_secure_lines([{"id": 150}, {"id": 250}])
        assert bowl.type == ProductType.BOWL
        assert refreshment.type == ProductType.REFRESHMENT

    def test_payload_has_no_price(self):
        (line,) = build_secure_lines([
            {"id": 1, "type": "fruit", "quantity": 2, "price": 1, "originalPrice": 999}
        ])
        assert line.to_payload() == {"productId": 1, "type": "fruit", "quantity": 2}

    def test_non_dict_entries_ignored(self):
        assert build_secure_lines(["junk", 42, None]) == ()
