"""
Coverage-area helpers in normalized map space.

Provides utilities for:
- Rectangle containment checks for a photograph's coverage area
- Distance of a map point from the center of a coverage area
- Match quality scoring used to pick the best photograph for a location
"""
from dataclasses import dataclass
import logging

from shapely.geometry import Point, box

from gardenscope.domain.models import CoverageArea, NormalizedPoint

logger = logging.getLogger(__name__)

# Largest center distance (normalized units) that still earns a non-zero score
MAX_MATCH_DISTANCE = 100.0


@dataclass(frozen=True)
class MatchQuality:
    """How well a coverage area frames a location."""
    score: int
    label: str


def coverage_covers_point(coverage: CoverageArea, point: NormalizedPoint) -> bool:
    """
    Check if a map point lies inside a coverage rectangle (edges included).

    Args:
        coverage: Coverage area in normalized space
        point: Map point in normalized space

    Returns:
        True if covered, False otherwise
    """
    area = box(
        min(coverage.xmin, coverage.xmax),
        min(coverage.ymin, coverage.ymax),
        max(coverage.xmin, coverage.xmax),
        max(coverage.ymin, coverage.ymax),
    )
    return area.covers(Point(point.x, point.y))


def distance_from_center(coverage: CoverageArea, point: NormalizedPoint) -> float:
    """Euclidean distance in normalized units from the coverage center to the point."""
    center = coverage.center
    return Point(center.x, center.y).distance(Point(point.x, point.y))


def match_quality(coverage: CoverageArea, point: NormalizedPoint) -> MatchQuality:
    """
    Score how centrally a coverage area frames a point.

    Score is 100 at the center, falling linearly to 0 at MAX_MATCH_DISTANCE.
    Labels: >=80 excellent, >=50 good, >=20 fair, otherwise poor.
    """
    distance = distance_from_center(coverage, point)
    score = int(round(max((1.0 - distance / MAX_MATCH_DISTANCE) * 100.0, 0.0)))

    if score >= 80:
        label = "excellent"
    elif score >= 50:
        label = "good"
    elif score >= 20:
        label = "fair"
    else:
        label = "poor"

    logger.debug(f"Coverage match: distance={distance:.2f}, score={score} ({label})")
    return MatchQuality(score=score, label=label)
