from __future__ import annotations

import pytest

from conftest import product_record
from grocerycheck.normalize import extract_image_url, normalize_product, normalize_products, parse_size


@pytest.mark.parametrize(
    ("size", "quantity", "unit"),
    [
        ("2 LB", 2, "LB"),
        ("1/2 LB", 0.5, "LB"),
        ("1 GAL", 1, "GAL"),
        ("16 fl oz", 16, "fl oz"),
        ("12", 12, ""),
    ],
)
def test_parse_size(size: str, quantity: float, unit: str) -> None:
    assert parse_size(size) == (quantity, unit)


@pytest.mark.parametrize("size", ["each", "1/0 LB", "", None])
def test_parse_size_unreadable_amount_is_absent(size) -> None:
    quantity, _unit = parse_size(size)
    assert quantity is None


def test_parse_size_keeps_unit_when_amount_unreadable() -> None:
    assert parse_size("approx 1 LB") == (None, "1 LB")


def test_image_url_uses_second_image_first_size() -> None:
    record = product_record(
        images=[
            {"perspective": "back", "sizes": [{"url": "https://img/back.jpg"}]},
            {"perspective": "front", "sizes": [{"url": "https://img/front-xl.jpg"}, {"url": "https://img/front-s.jpg"}]},
        ]
    )
    assert extract_image_url(record) == "https://img/front-xl.jpg"


@pytest.mark.parametrize(
    "images",
    [
        None,
        [],
        [{"sizes": [{"url": "https://img/only.jpg"}]}],
        [{}, {}],
        [{}, {"sizes": []}],
        [{}, {"sizes": [{}]}],
        "garbage",
    ],
)
def test_image_url_missing_shapes_are_absent(images) -> None:
    record = product_record()
    record["images"] = images
    assert extract_image_url(record) is None


def test_normalize_milk_record() -> None:
    item = normalize_product(product_record(size="1 GAL", price=3.49), "Kroger", 1.5)

    assert item is not None
    assert item.name == "Kroger 2% Milk"
    assert item.description is None
    assert item.image_url is None
    assert item.chain == "Kroger"
    assert item.distance == 1.5
    assert item.price == 3.49
    assert item.quantity == 1
    assert item.unit_of_measure == "GAL"


@pytest.mark.parametrize("price", [None, 0, -1.25, float("nan"), float("inf"), "3.49", True])
def test_records_without_usable_price_are_dropped(price) -> None:
    assert normalize_product(product_record(price=price), "Kroger", 1.0) is None


def test_record_without_offers_is_dropped() -> None:
    record = product_record()
    del record["items"]
    assert normalize_product(record, "Kroger", 1.0) is None


def test_normalize_products_filters_and_keeps_order() -> None:
    records = [
        product_record(description="A", price=2.0),
        product_record(description="B", price=0),
        product_record(description="C", price=None),
        product_record(description="D", price=5),
        "not a record",
    ]

    items = normalize_products(records, "Kroger", 2.0)

    assert [i.name for i in items] == ["A", "D"]
    assert all(i.price is not None and i.price > 0 for i in items)
