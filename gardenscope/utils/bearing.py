"""
Planar distance and compass bearing between geographic points.

The property is small enough (a few hundred meters) that a flat-earth
approximation is used: degrees are scaled to meters once, using a fixed
meters-per-degree for latitude and a cosine-corrected value for longitude at
a reference latitude.

Bearing convention (single, canonical): compass degrees clockwise from north,
computed as atan2(east, north) with north-positive y in geographic space.
Screen spaces (normalized map, pixels) have y growing southward, so their
helper negates the y-term to express the same convention.
"""
import math
from dataclasses import dataclass

from gardenscope.domain.models import GeoPoint, NormalizedPoint, PropertyBounds
from gardenscope.utils.angles import normalize_360

DEFAULT_METERS_PER_DEGREE_LAT = 111000.0


@dataclass(frozen=True)
class PlanarScale:
    """Meters per degree along each axis for the flat-earth approximation."""

    meters_per_degree_lat: float
    meters_per_degree_lng: float

    @classmethod
    def for_latitude(
        cls,
        reference_latitude: float,
        meters_per_degree_lat: float = DEFAULT_METERS_PER_DEGREE_LAT,
    ) -> "PlanarScale":
        """
        Build a scale for a reference latitude.

        Args:
            reference_latitude: Latitude in degrees where longitude is scaled
            meters_per_degree_lat: Meters per degree of latitude

        Returns:
            PlanarScale with meters_per_degree_lng = lat scale * cos(reference_latitude)
        """
        return cls(
            meters_per_degree_lat=meters_per_degree_lat,
            meters_per_degree_lng=meters_per_degree_lat * math.cos(math.radians(reference_latitude)),
        )

    @classmethod
    def for_bounds(
        cls,
        bounds: PropertyBounds,
        meters_per_degree_lat: float = DEFAULT_METERS_PER_DEGREE_LAT,
    ) -> "PlanarScale":
        """Build a scale referenced at the center latitude of the property."""
        return cls.for_latitude(bounds.center.latitude, meters_per_degree_lat)

    def offset_meters(self, origin: GeoPoint, target: GeoPoint) -> tuple[float, float]:
        """
        East/north offset in meters from origin to target.

        Returns:
            (dx, dy) where dx is meters east and dy is meters north
        """
        dx = (target.longitude - origin.longitude) * self.meters_per_degree_lng
        dy = (target.latitude - origin.latitude) * self.meters_per_degree_lat
        return dx, dy

    def offset_to_geo(self, origin: GeoPoint, east_m: float, north_m: float) -> GeoPoint:
        """Geographic point east_m/north_m meters away from origin."""
        return GeoPoint(
            latitude=origin.latitude + north_m / self.meters_per_degree_lat,
            longitude=origin.longitude + east_m / self.meters_per_degree_lng,
        )


def distance_meters(a: GeoPoint, b: GeoPoint, scale: PlanarScale) -> float:
    """
    Planar distance between two points.

    Args:
        a: First point
        b: Second point
        scale: Planar scale for the property

    Returns:
        Distance in meters (>= 0)
    """
    dx, dy = scale.offset_meters(a, b)
    return math.hypot(dx, dy)


def bearing_degrees(origin: GeoPoint, target: GeoPoint, scale: PlanarScale) -> float:
    """
    Compass bearing from origin to target.

    Args:
        origin: Observer position
        target: Observed position
        scale: Planar scale for the property

    Returns:
        Bearing in [0, 360), clockwise from north; 0.0 for coincident points
    """
    dx, dy = scale.offset_meters(origin, target)
    if dx == 0.0 and dy == 0.0:
        return 0.0
    return normalize_360(math.degrees(math.atan2(dx, dy)))


def screen_bearing_degrees(origin: NormalizedPoint, target: NormalizedPoint) -> float:
    """
    Compass bearing between two points in a y-down screen space.

    Used for normalized map or pixel coordinates, where y grows southward.
    Axes are assumed isotropic; for geographic accuracy convert to GeoPoint
    and use bearing_degrees instead.

    Returns:
        Bearing in [0, 360), clockwise from north (up); 0.0 for coincident points
    """
    dx = target.x - origin.x
    dy = target.y - origin.y
    if dx == 0.0 and dy == 0.0:
        return 0.0
    return normalize_360(math.degrees(math.atan2(dx, -dy)))
