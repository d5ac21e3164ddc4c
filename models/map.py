"""
Map schemas for the interactive world map.
"""

from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import Field, model_validator

from models.base import BaseSchema, FrozenSchema


class ViewportAction(str, Enum):
    """User interactions the map supports."""

    ZOOM_IN = "zoom-in"
    ZOOM_OUT = "zoom-out"
    RESET = "reset"
    MOVE = "move"


class GeoCenter(FrozenSchema):
    """Approximate projection center for a cigar-producing country."""

    country_name: str
    longitude: float = Field(..., ge=-180, le=180)
    latitude: float = Field(..., ge=-90, le=90)

    @property
    def coordinates(self) -> Tuple[float, float]:
        """(longitude, latitude) pair the map component expects."""
        return (self.longitude, self.latitude)


class MapViewport(FrozenSchema):
    """
    Map center and zoom, plus the initial pair used by reset.

    Every transition returns a new viewport.
    """

    center: Tuple[float, float]
    zoom: float
    initial_center: Tuple[float, float]
    initial_zoom: float
    min_zoom: float = Field(..., gt=0)
    max_zoom: float = Field(..., gt=0)
    zoom_step: float = Field(..., gt=0)
    country_name: Optional[str] = Field(None, description="Country the initial center belongs to")

    @model_validator(mode="after")
    def check_zoom_range(self) -> "MapViewport":
        if self.min_zoom > self.max_zoom:
            raise ValueError("min_zoom must not exceed max_zoom")
        return self


class ViewportActionRequest(BaseSchema):
    """Viewport transition request."""

    viewport: MapViewport
    position: Any = Field(None, description="New center for 'move': [lng, lat] or {coordinates: [lng, lat]}")


class MapResponse(BaseSchema):
    """Initial map state for a snapshot."""

    viewport: MapViewport
    country_quantities: dict[str, int] = Field(default_factory=dict, description="Cigars per country name")
    cigar_countries: list[str] = Field(default_factory=list, description="Countries highlighted as producers")
