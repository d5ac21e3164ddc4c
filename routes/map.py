"""
Map API routes.

Initial viewport for a snapshot, and viewport transitions.
"""

from fastapi import APIRouter
import structlog

from models.analytics import InventorySnapshot
from models.map import MapResponse, MapViewport, ViewportActionRequest
from services import geo_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/viewport", response_model=MapResponse)
async def get_initial_map(snapshot: InventorySnapshot):
    """
    Viewport centered on the country with the most cigars,
    plus per-country quantities for shading.
    """
    try:
        return geo_service.build_map(snapshot.items)
    except Exception as e:
        return handle_error(e)


@router.post("/viewport/{action}", response_model=MapViewport)
async def update_viewport(action: str, request: ViewportActionRequest):
    """
    Apply a viewport action.

    Args:
        action: zoom-in, zoom-out, reset or move

    Returns:
        The new viewport. A malformed 'move' position leaves it unchanged.
    """
    try:
        return geo_service.apply_action(request.viewport, action, request.position)
    except Exception as e:
        return handle_error(e)
