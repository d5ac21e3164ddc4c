"""
Aggregation service for the collection dashboard.

Builds the browse-by views (wrapper, strength, country), headline totals,
the top bucket used for the map's default viewport, and the aging-well list.

Everything here is a pure function of the snapshot passed in: nothing is
cached between calls and the caller's documents are never modified.
"""

from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

import structlog

from config import settings
from models.analytics import (
    AgingCigar,
    AgingStatus,
    BrowseDimension,
    BrowseResponse,
    CategoryBucket,
    CollectionSummary,
    CollectionTotals,
)
from services import value_aggregator
from services.category_mapper import (
    UNKNOWN,
    categories_for,
    classify_country,
    classify_strength,
    classify_wrapper,
    parse_dimension,
)
from services.value_aggregator import Item

logger = structlog.get_logger(__name__)

# Aging thresholds in days, highest first
AGING_THRESHOLDS: tuple[tuple[int, AgingStatus], ...] = (
    (730, AgingStatus.PERFECTLY_AGED),
    (365, AgingStatus.READY_TO_SMOKE),
    (180, AgingStatus.MATURING),
)


# ===================
# BROWSE BY
# ===================

def _fixed_buckets(counts: dict[str, int], dimension: BrowseDimension) -> list[CategoryBucket]:
    """Buckets in taxonomy order, empty ones dropped."""
    return [
        CategoryBucket(
            label=category.label,
            filter_value=category.filter_value,
            quantity=counts.get(category.label, 0),
        )
        for category in categories_for(dimension)
        if counts.get(category.label, 0) > 0
    ]


def wrapper_buckets(items: Sequence[Item]) -> list[CategoryBucket]:
    """One bucket per distinct wrapper, sorted alphabetically."""
    counts = value_aggregator.count(items, lambda item: classify_wrapper(item.get("wrapper")))
    buckets = [
        CategoryBucket(label=wrapper, filter_value=wrapper, quantity=quantity)
        for wrapper, quantity in counts.items()
        if quantity > 0
    ]
    return sorted(buckets, key=lambda b: (b.label.casefold(), b.label))


def strength_buckets(items: Sequence[Item]) -> list[CategoryBucket]:
    """Strength buckets in Mild -> Full order; unrecognized strengths are left out."""
    counts = value_aggregator.count(items, lambda item: classify_strength(item.get("strength")))
    return _fixed_buckets(counts, BrowseDimension.STRENGTH)


def country_buckets(items: Sequence[Item]) -> list[CategoryBucket]:
    """Country buckets in catalog order, with unlisted countries under "Other Countries"."""
    counts = value_aggregator.count(items, lambda item: classify_country(item.get("country")))
    return _fixed_buckets(counts, BrowseDimension.COUNTRY)


_BUILDERS = {
    BrowseDimension.WRAPPER: wrapper_buckets,
    BrowseDimension.STRENGTH: strength_buckets,
    BrowseDimension.COUNTRY: country_buckets,
}


def buckets_for(items: Sequence[Item], dimension: Any) -> list[CategoryBucket]:
    """Ordered, non-empty buckets for one dimension."""
    return _BUILDERS[parse_dimension(dimension)](items)


def browse(items: Sequence[Item], dimension: Any) -> BrowseResponse:
    """
    Build the browse-by view for one dimension.

    Args:
        items: Inventory snapshot
        dimension: "wrapper", "strength" or "country"

    Returns:
        BrowseResponse with buckets in presentation order

    Raises:
        InvalidDimensionError: If dimension is not one of the three
    """
    dimension = parse_dimension(dimension)
    buckets = buckets_for(items, dimension)

    logger.debug(
        "browse_buckets_built",
        dimension=dimension.value,
        item_count=len(items),
        bucket_count=len(buckets)
    )

    return BrowseResponse(
        dimension=dimension,
        buckets=buckets,
        total_quantity=sum(b.quantity for b in buckets),
    )


# ===================
# TOTALS
# ===================

def collection_totals(items: Sequence[Item]) -> CollectionTotals:
    """Total cigars and total value (price * quantity)."""
    total_value = value_aggregator.total(items, value_aggregator.item_value)
    return CollectionTotals(
        total_cigars=value_aggregator.total(items, value_aggregator.item_quantity),
        total_value=round(Decimal(total_value), 2),
        item_count=len(items),
    )


def country_name(item: Item) -> Optional[str]:
    """Raw country name as the map knows it; blank and "Unknown" are skipped."""
    country = item.get("country")
    if not isinstance(country, str) or not country.strip():
        return None
    country = country.strip()
    return None if country == UNKNOWN else country


def top_bucket(items: Sequence[Item], dimension: Any) -> Optional[str]:
    """
    Bucket with the highest quantity.

    Ties go to the bucket that reached the maximum first in inventory order,
    since only a strictly greater count replaces the running maximum.

    For country the key is the raw country name (what the map looks up);
    for wrapper and strength it is the bucket label.

    Returns:
        Bucket key, or None if no bucket has a positive quantity
    """
    dimension = parse_dimension(dimension)
    if dimension == BrowseDimension.COUNTRY:
        key_fn = country_name
    elif dimension == BrowseDimension.STRENGTH:
        key_fn = lambda item: classify_strength(item.get("strength"))
    else:
        key_fn = lambda item: classify_wrapper(item.get("wrapper"))

    top, best = None, 0
    for key, quantity in value_aggregator.count(items, key_fn).items():
        if quantity > best:
            top, best = key, quantity
    return top


def collection_summary(items: Sequence[Item]) -> CollectionSummary:
    """Totals plus all three browse-by views."""
    summary = CollectionSummary(
        totals=collection_totals(items),
        wrapper=wrapper_buckets(items),
        strength=strength_buckets(items),
        country=country_buckets(items),
        top_country=top_bucket(items, BrowseDimension.COUNTRY),
    )

    logger.info(
        "collection_summary_calculated",
        item_count=summary.totals.item_count,
        total_cigars=summary.totals.total_cigars,
        total_value=float(summary.totals.total_value),
        top_country=summary.top_country
    )

    return summary


# ===================
# AGING WELL
# ===================

def parse_date_added(value: Any) -> Optional[date]:
    """Date part of a dateAdded value, or None if it cannot be read."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def aging_status(age_days: int) -> AgingStatus:
    for threshold, status in AGING_THRESHOLDS:
        if age_days >= threshold:
            return status
    return AgingStatus.YOUNG


def aging_well(
    items: Sequence[Item],
    today: Optional[date] = None,
    limit: Optional[int] = None
) -> list[AgingCigar]:
    """
    Oldest cigars with a readable dateAdded, oldest first.

    Args:
        items: Inventory snapshot
        today: Reference date (defaults to today)
        limit: How many to return (defaults to settings.aging_well_limit)
    """
    today = today or date.today()
    limit = settings.aging_well_limit if limit is None else limit

    dated = []
    for item in items:
        added = parse_date_added(item.get("dateAdded"))
        if added is not None:
            dated.append((added, item))

    # sorted() is stable: same-day cigars keep inventory order
    dated.sort(key=lambda pair: pair[0])

    result = []
    for added, item in dated[:max(limit, 0)]:
        age_days = max((today - added).days, 0)
        result.append(AgingCigar(
            id=str(item["id"]) if item.get("id") is not None else None,
            name=item.get("name") if isinstance(item.get("name"), str) else None,
            brand=item.get("brand") if isinstance(item.get("brand"), str) else None,
            date_added=added,
            age_days=age_days,
            status=aging_status(age_days),
        ))
    return result
