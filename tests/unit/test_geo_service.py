"""
Unit tests for the map viewport service.

Tests center lookup, initial viewport selection, zoom clamping,
reset, and validation of dragged-to positions.
"""

import pytest
from unittest.mock import patch

from exceptions import InvalidViewportActionError
from services.geo_service import (
    FALLBACK_CENTER,
    apply_action,
    build_map,
    center_for,
    country_quantities,
    initial_viewport,
    move_end,
    parse_position,
    reset,
    zoom_in,
    zoom_out,
)
from tests.factories import CigarFactory


@pytest.fixture
def viewport():
    """Viewport for a Cuban-heavy collection."""
    return initial_viewport([CigarFactory.create(country="Cuba", quantity=4)])


# ===================
# CENTER LOOKUP
# ===================

class TestCenterFor:

    def test_known_country(self):
        center = center_for("Dominican Republic")
        assert center.coordinates == (-70.7, 19)

    def test_unknown_country_falls_back_to_us(self):
        assert center_for("Peru") == FALLBACK_CENTER
        assert center_for(None).country_name == "United States"

    def test_lookup_is_exact(self):
        assert center_for("cuba") == FALLBACK_CENTER


# ===================
# INITIAL VIEWPORT
# ===================

class TestInitialViewport:

    def test_centers_on_top_country(self, viewport):
        assert viewport.center == (-79, 21)
        assert viewport.country_name == "Cuba"
        assert viewport.initial_center == viewport.center

    def test_empty_inventory_uses_fallback(self):
        vp = initial_viewport([])
        assert vp.center == (-98, 39)

    def test_top_country_without_center_uses_fallback(self):
        vp = initial_viewport([CigarFactory.create(country="Peru", quantity=9)])
        assert vp.country_name == "United States"

    def test_default_zoom_settings(self, viewport):
        assert viewport.zoom == 2.5
        assert viewport.min_zoom == 1.0
        assert viewport.max_zoom == 8.0
        assert viewport.zoom_step == 0.5

    def test_initial_zoom_clamped(self):
        with patch("services.geo_service.settings") as mock_settings:
            mock_settings.map_initial_zoom = 20
            mock_settings.map_min_zoom = 1
            mock_settings.map_max_zoom = 8
            mock_settings.map_zoom_step = 0.5
            vp = initial_viewport([])
        assert vp.zoom == 8
        assert vp.initial_zoom == 8


# ===================
# ZOOM / RESET
# ===================

class TestZoom:

    def test_zoom_in_steps(self, viewport):
        assert zoom_in(viewport).zoom == 3.0

    def test_zoom_in_clamps_at_max(self, viewport):
        vp = viewport
        for _ in range(30):
            vp = zoom_in(vp)
        assert vp.zoom == 8.0

    def test_zoom_out_clamps_at_min(self, viewport):
        vp = viewport
        for _ in range(30):
            vp = zoom_out(vp)
        assert vp.zoom == 1.0

    def test_client_range_wider_than_configured(self, viewport):
        widened = viewport.model_copy(update={"min_zoom": 0.01, "max_zoom": 1000, "zoom": 999})

        zoomed = zoom_in(widened)
        assert zoomed.zoom == 8.0
        assert (zoomed.min_zoom, zoomed.max_zoom) == (1.0, 8.0)

        widened = widened.model_copy(update={"zoom": 0.05})
        assert zoom_out(widened).zoom == 1.0

    def test_reset_clamps_client_initial_zoom(self, viewport):
        tampered = viewport.model_copy(update={"initial_zoom": 50, "max_zoom": 100})
        assert reset(tampered).zoom == 8.0

    def test_transitions_return_new_viewport(self, viewport):
        zoomed = zoom_in(viewport)
        assert zoomed is not viewport
        assert viewport.zoom == 2.5

    def test_reset_restores_initial_pair(self, viewport):
        moved = move_end(zoom_in(zoom_in(viewport)), [-85, 12])
        restored = reset(moved)
        assert restored.center == viewport.initial_center
        assert restored.zoom == viewport.initial_zoom


# ===================
# MOVE
# ===================

class TestMoveEnd:

    def test_accepts_pair(self, viewport):
        assert move_end(viewport, [-86.5, 15]).center == (-86.5, 15)

    def test_accepts_coordinates_object(self, viewport):
        moved = move_end(viewport, {"coordinates": [-102, 23], "zoom": 3})
        assert moved.center == (-102, 23)

    @pytest.mark.parametrize("position", [
        None,
        "-80,20",
        [1],
        [1, 2, 3],
        ["a", "b"],
        [float("nan"), 1],
        [True, 1],
        {"center": [1, 2]},
        {"coordinates": "nope"},
    ])
    def test_rejects_malformed(self, viewport, position):
        assert parse_position(position) is None
        assert move_end(viewport, position) == viewport

    def test_rejection_is_logged(self, viewport):
        with patch("services.geo_service.logger") as mock_logger:
            move_end(viewport, "garbage")
        mock_logger.warning.assert_called_once()


# ===================
# ACTIONS
# ===================

class TestApplyAction:

    def test_dispatch(self, viewport):
        assert apply_action(viewport, "zoom-in").zoom == 3.0
        assert apply_action(viewport, "zoom-out").zoom == 2.0
        assert apply_action(viewport, "move", [-70.7, 19]).center == (-70.7, 19)
        assert apply_action(viewport, "reset") == viewport

    def test_unknown_action(self, viewport):
        with pytest.raises(InvalidViewportActionError):
            apply_action(viewport, "spin")


# ===================
# MAP DATA
# ===================

class TestBuildMap:

    def test_country_quantities_skip_unknown(self, sample_inventory):
        assert country_quantities(sample_inventory) == {
            "Nicaragua": 5,
            "Cuba": 3,
            "dominican republic": 2,
            "Peru": 1,
        }

    def test_build_map(self, sample_inventory):
        result = build_map(sample_inventory)
        assert result.viewport.country_name == "Nicaragua"
        assert "Cuba" in result.cigar_countries
