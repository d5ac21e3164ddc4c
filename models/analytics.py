"""
Analytics schemas for the collection dashboard.

Provides the browse-by bucket lists, headline totals, and the
aging-well panel built from an inventory snapshot.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional

from pydantic import Field

from models.base import BaseSchema, FrozenSchema


class BrowseDimension(str, Enum):
    """Classification dimension a collection can be browsed by."""

    WRAPPER = "wrapper"
    STRENGTH = "strength"
    COUNTRY = "country"


class AgingStatus(str, Enum):
    """How far along a cigar is in the humidor."""

    PERFECTLY_AGED = "Perfectly Aged"  # 730+ days
    READY_TO_SMOKE = "Ready to Smoke"  # 365+ days
    MATURING = "Maturing"              # 180+ days
    YOUNG = "Young"


# ===================
# REQUESTS
# ===================

class InventorySnapshot(BaseSchema):
    """
    Inventory snapshot posted by the presentation layer.

    Items stay raw mappings so malformed historical values reach the
    engine's coercion rules instead of failing request validation.
    """

    items: List[dict[str, Any]] = Field(default_factory=list, description="Cigar documents")


# ===================
# BROWSE BY
# ===================

class CategoryBucket(FrozenSchema):
    """One browse-by slot with its aggregated quantity."""

    label: str = Field(..., description="Display label")
    filter_value: str = Field(..., description="Value used to pre-filter the humidor list")
    quantity: int = Field(..., ge=0, description="Units in this bucket")


class BrowseResponse(BaseSchema):
    """Ordered buckets for one dimension."""

    dimension: BrowseDimension
    buckets: List[CategoryBucket] = Field(..., description="Non-empty buckets in presentation order")
    total_quantity: int = Field(..., ge=0, description="Sum of bucket quantities")


# ===================
# TOTALS
# ===================

class CollectionTotals(FrozenSchema):
    """Headline numbers for the stats cards."""

    total_cigars: int = Field(default=0, ge=0, description="Sum of quantities")
    total_value: Decimal = Field(default=Decimal("0"), ge=0, description="Sum of price * quantity")
    item_count: int = Field(default=0, ge=0, description="Number of inventory entries")


class CollectionSummary(BaseSchema):
    """Everything the dashboard needs in one response."""

    totals: CollectionTotals
    wrapper: List[CategoryBucket]
    strength: List[CategoryBucket]
    country: List[CategoryBucket]
    top_country: Optional[str] = Field(None, description="Country with the most cigars")


# ===================
# AGING WELL
# ===================

class AgingCigar(FrozenSchema):
    """One of the oldest cigars in the collection."""

    id: Optional[str] = None
    name: Optional[str] = None
    brand: Optional[str] = None
    date_added: date
    age_days: int = Field(..., ge=0)
    status: AgingStatus


class AgingWellResponse(BaseSchema):
    """Oldest cigars, oldest first."""

    data: List[AgingCigar]
    as_of: date
