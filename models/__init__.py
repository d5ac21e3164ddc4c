"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, FrozenSchema
from models.analytics import (
    BrowseDimension,
    AgingStatus,
    InventorySnapshot,
    CategoryBucket,
    BrowseResponse,
    CollectionTotals,
    CollectionSummary,
    AgingCigar,
    AgingWellResponse,
)
from models.map import (
    ViewportAction,
    GeoCenter,
    MapViewport,
    ViewportActionRequest,
)
from models.autofill import (
    CandidateCigar,
    AutoFillStatus,
    MergeResult,
    LookupResult,
    MergeRequest,
    AutoFillRequest,
    AutoFillResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Analytics
    "BrowseDimension",
    "AgingStatus",
    "InventorySnapshot",
    "CategoryBucket",
    "BrowseResponse",
    "CollectionTotals",
    "CollectionSummary",
    "AgingCigar",
    "AgingWellResponse",

    # Map
    "ViewportAction",
    "GeoCenter",
    "MapViewport",
    "ViewportActionRequest",

    # Auto-fill
    "CandidateCigar",
    "AutoFillStatus",
    "MergeResult",
    "LookupResult",
    "MergeRequest",
    "AutoFillRequest",
    "AutoFillResponse",
]
