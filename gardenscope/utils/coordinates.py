"""
Coordinate transformations between geographic, normalized and pixel space.

All conversions are linear over the property bounds. Longitude maps to x
(west -> east increasing). Latitude maps to y inverted: north is y=0 and y
grows southward, matching how the property map and its images are drawn.

Inputs outside the bounds are extrapolated, never rejected, so callers can
detect "outside the visible area" with a range check.
"""
from gardenscope.domain.models import GeoPoint, NormalizedPoint, PixelPoint, PropertyBounds


def geo_to_normalized(point: GeoPoint, bounds: PropertyBounds) -> NormalizedPoint:
    """
    Convert a geographic point to normalized (0-100) map coordinates.

    Args:
        point: Geographic point
        bounds: Property bounds defining the 0-100 extent

    Returns:
        NormalizedPoint, outside [0, 100] when the point lies outside the bounds
    """
    x = (point.longitude - bounds.west) / (bounds.east - bounds.west) * 100.0
    y = (bounds.north - point.latitude) / (bounds.north - bounds.south) * 100.0
    return NormalizedPoint(x=x, y=y)


def normalized_to_geo(point: NormalizedPoint, bounds: PropertyBounds) -> GeoPoint:
    """
    Convert normalized (0-100) map coordinates back to a geographic point.

    Args:
        point: Normalized map point
        bounds: Property bounds defining the 0-100 extent

    Returns:
        GeoPoint
    """
    longitude = bounds.west + (point.x / 100.0) * (bounds.east - bounds.west)
    latitude = bounds.north - (point.y / 100.0) * (bounds.north - bounds.south)
    return GeoPoint(latitude=latitude, longitude=longitude)


def normalized_to_pixel(point: NormalizedPoint, width: float, height: float) -> PixelPoint:
    """Scale a normalized point onto an image of the given size."""
    return PixelPoint(x=point.x / 100.0 * width, y=point.y / 100.0 * height)


def pixel_to_normalized(point: PixelPoint, width: float, height: float) -> NormalizedPoint:
    """
    Scale an image pixel back into normalized map space.

    Non-positive image dimensions collapse that axis to 0 instead of dividing by zero.
    """
    x = point.x / width * 100.0 if width > 0 else 0.0
    y = point.y / height * 100.0 if height > 0 else 0.0
    return NormalizedPoint(x=x, y=y)


def geo_to_pixel(
    point: GeoPoint,
    bounds: PropertyBounds,
    width: float,
    height: float,
) -> PixelPoint:
    """
    Convert a geographic point to pixel coordinates on a property image.

    Args:
        point: Geographic point
        bounds: Property bounds covered by the image
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        PixelPoint with y growing downward (north at the top edge)
    """
    return normalized_to_pixel(geo_to_normalized(point, bounds), width, height)


def pixel_to_geo(
    point: PixelPoint,
    bounds: PropertyBounds,
    width: float,
    height: float,
) -> GeoPoint:
    """
    Convert pixel coordinates on a property image to a geographic point.

    Exact inverse of geo_to_pixel for positive image dimensions. With a
    non-positive dimension the affected axis resolves to the north/west edge.

    Args:
        point: Pixel point
        bounds: Property bounds covered by the image
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        GeoPoint
    """
    return normalized_to_geo(pixel_to_normalized(point, width, height), bounds)


def is_within_normalized(point: NormalizedPoint) -> bool:
    """True when the point lies inside the property map (inclusive edges)."""
    return 0.0 <= point.x <= 100.0 and 0.0 <= point.y <= 100.0
