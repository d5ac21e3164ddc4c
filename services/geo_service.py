"""
Map viewport service for the interactive world map.

Resolves a country to an approximate projection center and handles the
viewport transitions (zoom in/out, reset, drag). Viewports are immutable:
each transition returns a new MapViewport.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Tuple

import structlog

from config import settings
from exceptions import InvalidViewportActionError
from models.analytics import BrowseDimension
from models.map import GeoCenter, MapResponse, MapViewport, ViewportAction
from services import value_aggregator
from services.aggregation_service import country_name, top_bucket
from services.value_aggregator import Item

logger = structlog.get_logger(__name__)

# Countries the map highlights as cigar producers
CIGAR_COUNTRIES: tuple[str, ...] = (
    "United States",
    "Mexico",
    "Cuba",
    "Dominican Republic",
    "Honduras",
    "Nicaragua",
)

# Approximate (longitude, latitude) centers, keyed by map country name
COUNTRY_CENTERS: Mapping[str, GeoCenter] = {
    center.country_name: center
    for center in (
        GeoCenter(country_name="United States", longitude=-98, latitude=39),
        GeoCenter(country_name="Mexico", longitude=-102, latitude=23),
        GeoCenter(country_name="Cuba", longitude=-79, latitude=21),
        GeoCenter(country_name="Dominican Republic", longitude=-70.7, latitude=19),
        GeoCenter(country_name="Honduras", longitude=-86.5, latitude=15),
        GeoCenter(country_name="Nicaragua", longitude=-85, latitude=12),
    )
}

FALLBACK_CENTER = COUNTRY_CENTERS["United States"]


def center_for(country: Optional[str]) -> GeoCenter:
    """Exact-match lookup; anything else gets the United States center."""
    if country is None:
        return FALLBACK_CENTER
    return COUNTRY_CENTERS.get(country, FALLBACK_CENTER)


def clamp_zoom(zoom: float, min_zoom: float, max_zoom: float) -> float:
    return min(max(zoom, min_zoom), max_zoom)


def initial_viewport(items: Sequence[Item]) -> MapViewport:
    """
    Default viewport for a snapshot.

    Centers on the country holding the most cigars (United States if none),
    at the configured initial zoom.
    """
    top_country = top_bucket(items, BrowseDimension.COUNTRY)
    center = center_for(top_country)
    zoom = clamp_zoom(settings.map_initial_zoom, settings.map_min_zoom, settings.map_max_zoom)

    logger.debug(
        "initial_viewport_selected",
        top_country=top_country,
        center_country=center.country_name,
        zoom=zoom
    )

    return MapViewport(
        center=center.coordinates,
        zoom=zoom,
        initial_center=center.coordinates,
        initial_zoom=zoom,
        min_zoom=settings.map_min_zoom,
        max_zoom=settings.map_max_zoom,
        zoom_step=settings.map_zoom_step,
        country_name=center.country_name,
    )


def _configured_zoom(viewport: MapViewport, zoom: float) -> MapViewport:
    """
    Apply a zoom level within the configured range.

    The range a client-supplied viewport carries is replaced with the
    configured one.
    """
    min_zoom, max_zoom = settings.map_min_zoom, settings.map_max_zoom
    return viewport.model_copy(update={
        "zoom": clamp_zoom(zoom, min_zoom, max_zoom),
        "initial_zoom": clamp_zoom(viewport.initial_zoom, min_zoom, max_zoom),
        "min_zoom": min_zoom,
        "max_zoom": max_zoom,
    })


def zoom_in(viewport: MapViewport) -> MapViewport:
    return _configured_zoom(viewport, viewport.zoom + viewport.zoom_step)


def zoom_out(viewport: MapViewport) -> MapViewport:
    return _configured_zoom(viewport, viewport.zoom - viewport.zoom_step)


def reset(viewport: MapViewport) -> MapViewport:
    """Back to the center and zoom the map opened with."""
    restored = _configured_zoom(viewport, viewport.initial_zoom)
    return restored.model_copy(update={"center": viewport.initial_center})


def _is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def parse_position(position: Any) -> Optional[Tuple[float, float]]:
    """
    Read a new map center.

    Accepts [lng, lat] or an object carrying it under "coordinates".
    Returns None for anything else.
    """
    if isinstance(position, Mapping):
        position = position.get("coordinates")
    if isinstance(position, (str, bytes)) or not isinstance(position, Sequence):
        return None
    if len(position) != 2 or not all(_is_finite_number(v) for v in position):
        return None
    return (float(position[0]), float(position[1]))


def move_end(viewport: MapViewport, position: Any) -> MapViewport:
    """
    Accept a dragged-to center.

    Malformed positions are logged and ignored; the current center stays.
    """
    center = parse_position(position)
    if center is None:
        logger.warning("invalid_viewport_position", position=repr(position)[:200])
        return viewport
    return viewport.model_copy(update={"center": center})


def apply_action(viewport: MapViewport, action: Any, position: Any = None) -> MapViewport:
    """
    Apply one viewport action.

    Raises:
        InvalidViewportActionError: If action is unknown
    """
    try:
        action = ViewportAction(action)
    except ValueError:
        raise InvalidViewportActionError(str(action), [a.value for a in ViewportAction])

    if action == ViewportAction.ZOOM_IN:
        return zoom_in(viewport)
    if action == ViewportAction.ZOOM_OUT:
        return zoom_out(viewport)
    if action == ViewportAction.RESET:
        return reset(viewport)
    return move_end(viewport, position)


def country_quantities(items: Sequence[Item]) -> dict[str, int]:
    """Cigars per raw country name, for shading the map; blank and "Unknown" skipped."""
    counts = value_aggregator.count(items, country_name)
    return {country: quantity for country, quantity in counts.items() if quantity > 0}


def build_map(items: Sequence[Item]) -> MapResponse:
    """Initial viewport plus the per-country shading data."""
    return MapResponse(
        viewport=initial_viewport(items),
        country_quantities=country_quantities(items),
        cigar_countries=list(CIGAR_COUNTRIES),
    )
