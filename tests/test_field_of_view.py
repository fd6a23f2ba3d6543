"""
Unit tests for field-of-view visibility.

Tests cover:
- Scenarios from the reference garden (due north visible, due east hidden)
- Inclusive boundary at exactly the half-angle
- Wrap-around across north
- Missing camera/target handling
- Strict and inclusive presets
"""
import numpy as np
import pytest

from gardenscope.config import Settings
from gardenscope.domain.models import CameraPose, FieldOfView, GeoPoint
from gardenscope.utils.bearing import PlanarScale
from gardenscope.utils.field_of_view import (
    FieldOfViewPresets,
    FovMode,
    is_visible,
    relative_angle,
    view_geometry,
)

STRICT = FieldOfView(half_angle_degrees=30.0)
UNIT_SCALE = PlanarScale(meters_per_degree_lat=1.0, meters_per_degree_lng=1.0)


# ============================================================
# Reference Scenario Tests
# ============================================================

class TestReferenceScenarios:
    """Tests mirroring the reference garden scenarios."""

    def test_plant_due_north_is_visible(self, camera, scale):
        """A plant ~33m due north of a north-facing camera is centered and visible."""
        plant = GeoPoint(latitude=49.6390, longitude=5.5522)

        assert is_visible(camera, plant, STRICT, scale)
        assert relative_angle(camera, plant, scale) == pytest.approx(0.0, abs=1e-9)

    def test_plant_due_east_is_hidden(self, camera, scale):
        """A plant due east sits 90 degrees off-axis."""
        plant = GeoPoint(latitude=49.6387, longitude=5.5530)

        assert relative_angle(camera, plant, scale) == pytest.approx(90.0, abs=1e-6)
        assert not is_visible(camera, plant, STRICT, scale)


# ============================================================
# Boundary Tests
# ============================================================

class TestVisibilityBoundary:
    """Tests for the inclusive half-angle boundary."""

    def test_exactly_on_boundary_is_visible(self):
        """A target at exactly heading + half-angle is visible."""
        camera = CameraPose(position=GeoPoint(latitude=0.0, longitude=0.0), heading_degrees=60.0)
        target = GeoPoint(latitude=0.0, longitude=10.0)

        assert relative_angle(camera, target, UNIT_SCALE) == 30.0
        assert is_visible(camera, target, STRICT, UNIT_SCALE)

    def test_just_outside_boundary_is_hidden(self):
        """A target a hair beyond the half-angle is not visible."""
        camera = CameraPose(position=GeoPoint(latitude=0.0, longitude=0.0), heading_degrees=59.999)
        target = GeoPoint(latitude=0.0, longitude=10.0)

        assert not is_visible(camera, target, STRICT, UNIT_SCALE)

    def test_wraps_across_north(self):
        """A camera facing 350 degrees sees a target at bearing 10 degrees."""
        camera = CameraPose(position=GeoPoint(latitude=0.0, longitude=0.0), heading_degrees=350.0)
        target = UNIT_SCALE.offset_to_geo(camera.position, float(np.sin(np.radians(10))), float(np.cos(np.radians(10))))

        assert relative_angle(camera, target, UNIT_SCALE) == pytest.approx(20.0, abs=1e-6)
        assert is_visible(camera, target, STRICT, UNIT_SCALE)

    def test_relative_angle_range_over_headings(self, camera, scale):
        """Relative angles stay within (-180, 180] for every heading."""
        target = GeoPoint(latitude=49.6380, longitude=5.5510)
        for heading in np.linspace(-720.0, 720.0, 1441):
            pose = CameraPose(position=camera.position, heading_degrees=float(heading))
            assert -180.0 < relative_angle(pose, target, scale) <= 180.0


# ============================================================
# Missing Input Tests
# ============================================================

class TestMissingInputs:
    """Tests for degraded inputs."""

    def test_missing_camera(self, scale):
        target = GeoPoint(latitude=49.6390, longitude=5.5522)

        assert not is_visible(None, target, STRICT, scale)
        assert relative_angle(None, target, scale) == 0.0

    def test_missing_target(self, camera, scale):
        assert not is_visible(camera, None, STRICT, scale)
        assert relative_angle(camera, None, scale) == 0.0

    def test_coincident_target_is_visible(self, camera, scale):
        """A plant at the camera position is visible and centered."""
        geometry = view_geometry(camera, camera.position, scale)

        assert is_visible(camera, camera.position, STRICT, scale)
        assert geometry.distance_m == 0.0
        assert geometry.relative_angle_deg == 0.0


# ============================================================
# Preset Tests
# ============================================================

class TestFieldOfViewPresets:
    """Tests for strict and inclusive presets."""

    def test_presets_from_settings(self):
        presets = FieldOfViewPresets.from_settings(Settings())

        assert presets.for_mode(FovMode.STRICT).half_angle_degrees == 30.0
        assert presets.for_mode("inclusive").half_angle_degrees == 40.0

    def test_inclusive_admits_wider_cone(self, camera, scale):
        """A target 35 degrees off-axis is hidden in strict mode and visible in inclusive mode."""
        presets = FieldOfViewPresets.from_settings(Settings())
        target = scale.offset_to_geo(camera.position, float(20 * np.sin(np.radians(35))), float(20 * np.cos(np.radians(35))))

        assert not is_visible(camera, target, presets.strict, scale)
        assert is_visible(camera, target, presets.inclusive, scale)

    def test_invalid_half_angle_rejected(self):
        with pytest.raises(ValueError):
            FieldOfView(half_angle_degrees=0)
