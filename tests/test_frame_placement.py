"""
Unit tests for frame placement.

Tests cover:
- Linear angle -> horizontal percentage mapping and clamping
- Horizontal bucket edges
- Depth buckets and size hints sharing breakpoints
- Monotonicity over sweeps
"""
import numpy as np
import pytest

from gardenscope.domain.models import FieldOfView
from gardenscope.utils.frame_placement import (
    BACKGROUND,
    CENTER,
    CENTER_LEFT,
    CENTER_RIGHT,
    FAR_LEFT,
    FAR_RIGHT,
    FOREGROUND,
    LEFT,
    MIDDLE_GROUND,
    RIGHT,
    DepthBreakpoints,
    depth_label,
    horizontal_label,
    horizontal_pct,
    place_in_frame,
    size_hint,
)

STRICT = FieldOfView(half_angle_degrees=30.0)


# ============================================================
# Horizontal Position Tests
# ============================================================

class TestHorizontalPosition:
    """Tests for the angle -> frame percentage mapping."""

    @pytest.mark.parametrize("angle,expected", [
        (-30.0, 0.0), (-15.0, 25.0), (0.0, 50.0), (15.0, 75.0), (30.0, 100.0),
    ])
    def test_linear_mapping(self, angle, expected):
        assert horizontal_pct(angle, STRICT) == pytest.approx(expected)

    def test_clamped_outside_field_of_view(self):
        assert horizontal_pct(-90.0, STRICT) == 0.0
        assert horizontal_pct(90.0, STRICT) == 100.0

    def test_unknown_angle_is_centered(self):
        assert horizontal_pct(None, STRICT) == 50.0

    def test_monotonic_in_angle(self):
        """Turning right never moves a target left in the frame."""
        values = [horizontal_pct(float(a), STRICT) for a in np.linspace(-45.0, 45.0, 901)]

        assert all(b >= a for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("pct,expected", [
        (0.0, FAR_LEFT),
        (14.99, FAR_LEFT),
        (15.0, LEFT),
        (29.99, LEFT),
        (30.0, CENTER_LEFT),
        (44.99, CENTER_LEFT),
        (45.0, CENTER),
        (50.0, CENTER),
        (55.0, CENTER),
        (55.01, CENTER_RIGHT),
        (70.0, CENTER_RIGHT),
        (70.01, RIGHT),
        (85.0, RIGHT),
        (85.01, FAR_RIGHT),
        (100.0, FAR_RIGHT),
    ])
    def test_bucket_edges(self, pct, expected):
        assert horizontal_label(pct) == expected


# ============================================================
# Depth Tests
# ============================================================

class TestDepth:
    """Tests for depth buckets and size hints."""

    @pytest.mark.parametrize("distance,expected", [
        (0.0, FOREGROUND),
        (15.0, FOREGROUND),
        (15.01, MIDDLE_GROUND),
        (35.0, MIDDLE_GROUND),
        (35.01, BACKGROUND),
        (500.0, BACKGROUND),
    ])
    def test_depth_buckets(self, distance, expected):
        assert depth_label(distance) == expected

    def test_size_hint_agrees_with_depth(self):
        """Size hints switch at exactly the depth breakpoints."""
        assert size_hint(15.0) == "near, appears large"
        assert size_hint(15.01) == "medium distance, appears medium-sized"
        assert size_hint(35.01) == "far, appears small"

    def test_custom_breakpoints(self):
        breakpoints = DepthBreakpoints(foreground_max_m=5.0, middle_max_m=10.0)

        assert depth_label(8.0, breakpoints) == MIDDLE_GROUND
        assert size_hint(12.0, breakpoints) == "far, appears small"

    def test_depth_never_gets_closer_with_distance(self):
        order = {FOREGROUND: 0, MIDDLE_GROUND: 1, BACKGROUND: 2}
        ranks = [order[depth_label(float(d))] for d in np.linspace(0.0, 100.0, 1001)]

        assert all(b >= a for a, b in zip(ranks, ranks[1:]))


# ============================================================
# Combined Placement Tests
# ============================================================

class TestPlaceInFrame:
    """Tests for the combined placement."""

    def test_centered_middle_ground(self):
        placement = place_in_frame(0.0, 33.3, STRICT)

        assert placement.horizontal_pct == pytest.approx(50.0)
        assert placement.horizontal_label == CENTER
        assert placement.depth_label == MIDDLE_GROUND
        assert placement.size_hint == "medium distance, appears medium-sized"

    def test_missing_camera_defaults_to_center(self):
        placement = place_in_frame(None, 10.0, STRICT)

        assert placement.horizontal_pct == 50.0
        assert placement.horizontal_label == CENTER
