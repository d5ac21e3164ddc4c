"""
Count and sum reducers over an inventory snapshot.

Inventory documents come from user-edited history, so numbers are coerced:
anything non-numeric, non-finite or negative counts as 0.
"""

import math
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

Item = Mapping[str, Any]


def _finite_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def coerce_quantity(value: Any) -> int:
    """Quantity as a non-negative int (fractions truncate)."""
    number = _finite_number(value)
    if number is None or number < 0:
        return 0
    return int(number)


def coerce_price(value: Any) -> Decimal:
    """Price as a non-negative Decimal."""
    number = _finite_number(value)
    if number is None or number < 0:
        return Decimal("0")
    try:
        return Decimal(str(number))
    except InvalidOperation:
        return Decimal("0")


def item_quantity(item: Item) -> int:
    return coerce_quantity(item.get("quantity"))


def item_value(item: Item) -> Decimal:
    """price * quantity for one inventory entry."""
    return coerce_price(item.get("price")) * item_quantity(item)


def count(items: Iterable[Item], key_fn: Callable[[Item], Optional[str]]) -> dict[str, int]:
    """
    Sum quantities per bucket.

    Args:
        items: Inventory documents
        key_fn: Bucket for an item; None leaves the item out

    Returns:
        Bucket key -> quantity, in first-seen order
    """
    counts: dict[str, int] = {}
    for item in items:
        key = key_fn(item)
        if key is None:
            continue
        counts[key] = counts.get(key, 0) + item_quantity(item)
    return counts


def total(items: Iterable[Item], value_fn: Callable[[Item], Any]) -> Any:
    """Sum value_fn over items; an empty inventory sums to 0."""
    result: Any = 0
    for item in items:
        result += value_fn(item)
    return result
