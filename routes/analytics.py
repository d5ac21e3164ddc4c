"""
Analytics API routes.

Browse-by views, headline totals and the aging-well panel, computed from
the inventory snapshot in the request body.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query
import structlog

from models.analytics import (
    AgingWellResponse,
    BrowseResponse,
    CollectionSummary,
    InventorySnapshot,
)
from services import aggregation_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/summary", response_model=CollectionSummary)
async def get_collection_summary(snapshot: InventorySnapshot):
    """
    Totals plus all three browse-by views.

    Returns:
        CollectionSummary with totals, wrapper/strength/country buckets
        and the country holding the most cigars
    """
    try:
        return aggregation_service.collection_summary(snapshot.items)
    except Exception as e:
        return handle_error(e)


@router.post("/browse/{dimension}", response_model=BrowseResponse)
async def browse_by(dimension: str, snapshot: InventorySnapshot):
    """
    Buckets for one dimension.

    Args:
        dimension: wrapper, strength or country

    Returns:
        BrowseResponse with non-empty buckets in presentation order
    """
    try:
        return aggregation_service.browse(snapshot.items, dimension)
    except Exception as e:
        return handle_error(e)


@router.post("/aging", response_model=AgingWellResponse)
async def get_aging_well(
    snapshot: InventorySnapshot,
    as_of: Optional[date] = Query(None, description="Reference date (defaults to today)"),
    limit: Optional[int] = Query(None, ge=1, le=50, description="How many cigars to return")
):
    """
    Oldest cigars in the collection with their aging status.
    """
    try:
        as_of = as_of or date.today()
        return AgingWellResponse(
            data=aggregation_service.aging_well(snapshot.items, today=as_of, limit=limit),
            as_of=as_of,
        )
    except Exception as e:
        return handle_error(e)
