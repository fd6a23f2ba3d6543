"""
Unit tests for coverage-area helpers.

Tests cover:
- Containment with inclusive edges
- Distance from the coverage center
- Match quality scoring and labels
"""
import pytest

from gardenscope.domain.models import CoverageArea, NormalizedPoint
from gardenscope.utils.coverage import (
    coverage_covers_point,
    distance_from_center,
    match_quality,
)

AREA = CoverageArea(xmin=20, xmax=80, ymin=0, ymax=60)


# ============================================================
# Containment Tests
# ============================================================

class TestContainment:
    """Tests for coverage containment."""

    @pytest.mark.parametrize("x,y,expected", [
        (50, 30, True),
        (20, 0, True),
        (80, 60, True),
        (19.9, 30, False),
        (50, 61, False),
    ])
    def test_covers_point(self, x, y, expected):
        assert coverage_covers_point(AREA, NormalizedPoint(x=x, y=y)) is expected

    def test_swapped_extents_still_cover(self):
        swapped = CoverageArea(xmin=80, xmax=20, ymin=60, ymax=0)

        assert coverage_covers_point(swapped, NormalizedPoint(x=50, y=30))


# ============================================================
# Match Quality Tests
# ============================================================

class TestMatchQuality:
    """Tests for match quality scoring."""

    def test_center_distance(self):
        assert distance_from_center(AREA, NormalizedPoint(x=50, y=30)) == 0.0
        assert distance_from_center(AREA, NormalizedPoint(x=53, y=34)) == pytest.approx(5.0)

    @pytest.mark.parametrize("x,y,score,label", [
        (50, 30, 100, "excellent"),
        (50, 50, 80, "excellent"),
        (50, 80, 50, "good"),
        (50, 110, 20, "fair"),
        (50, 115, 15, "poor"),
        (50, 200, 0, "poor"),
    ])
    def test_scores_and_labels(self, x, y, score, label):
        quality = match_quality(AREA, NormalizedPoint(x=x, y=y))

        assert quality.score == score
        assert quality.label == label
