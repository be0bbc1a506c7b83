from __future__ import annotations

import logging
import math
from typing import Any

from grocerycheck.models import Item

LOG = logging.getLogger(__name__)


def parse_size(size: str | None) -> tuple[float | None, str]:
    """Split a provider size string such as ``"2 LB"`` into quantity and unit.

    The first whitespace-delimited token is the quantity, the remainder the
    unit label. ``"1/2 LB"`` is read as a fraction. A leading token that is
    not a number (or a zero denominator) yields ``None`` for the quantity;
    the unit is still returned.
    """
    if not isinstance(size, str):
        return None, ""

    parts = size.split()
    if not parts:
        return None, ""

    amount, unit = parts[0], " ".join(parts[1:])
    return _parse_amount(amount), unit


def _parse_amount(amount: str) -> float | None:
    try:
        if "/" in amount:
            numerator, denominator = amount.split("/", 1)
            value = float(numerator) / float(denominator)
        else:
            value = float(amount)
    except (ValueError, ZeroDivisionError):
        LOG.debug("unparseable size amount=%r", amount)
        return None
    return value if math.isfinite(value) else None


def is_usable_price(price: Any) -> bool:
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return False
    return math.isfinite(price) and price > 0


def extract_image_url(record: dict[str, Any]) -> str | None:
    try:
        url = record["images"][1]["sizes"][0]["url"]
    except (KeyError, IndexError, TypeError):
        return None
    return url if isinstance(url, str) and url else None


def _first_offer(record: dict[str, Any]) -> dict[str, Any]:
    offers = record.get("items")
    if isinstance(offers, list) and offers and isinstance(offers[0], dict):
        return offers[0]
    return {}


def extract_price(record: dict[str, Any]) -> Any:
    price = _first_offer(record).get("price")
    if isinstance(price, dict):
        return price.get("regular")
    return None


def normalize_product(record: dict[str, Any], chain: str, distance: float) -> Item | None:
    """Map one raw product record to an :class:`Item`.

    Returns ``None`` when the record has no usable positive price.
    """
    if not isinstance(record, dict):
        return None

    price = extract_price(record)
    if not is_usable_price(price):
        LOG.debug("dropping product without price product_id=%s", record.get("productId"))
        return None

    quantity, unit = parse_size(_first_offer(record).get("size"))
    name = record.get("description")
    return Item(
        name=name if isinstance(name, str) else "",
        description=None,
        image_url=extract_image_url(record),
        chain=chain,
        distance=distance,
        price=float(price),
        quantity=quantity,
        unit_of_measure=unit,
    )


def normalize_products(records: list[Any], chain: str, distance: float) -> list[Item]:
    items = []
    for record in records:
        item = normalize_product(record, chain, distance)
        if item is not None:
            items.append(item)
    return items
