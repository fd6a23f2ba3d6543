"""
Angle normalization helpers shared by the geometry modules and domain models.
"""
import math


def normalize_360(degrees: float) -> float:
    """
    Wrap an angle into [0, 360).

    Args:
        degrees: Any finite angle in degrees

    Returns:
        Equivalent angle in [0, 360); non-finite input returns 0.0
    """
    if not math.isfinite(degrees):
        return 0.0
    wrapped = math.fmod(degrees, 360.0)
    if wrapped < 0:
        wrapped += 360.0
    # fmod of a tiny negative value plus 360 can round up to 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped


def normalize_180(degrees: float) -> float:
    """
    Wrap an angle into (-180, 180].

    Negative results lie left of the reference direction, positive right.

    Args:
        degrees: Any finite angle in degrees

    Returns:
        Equivalent angle in (-180, 180]; non-finite input returns 0.0
    """
    wrapped = normalize_360(degrees)
    if wrapped > 180.0:
        wrapped -= 360.0
    return wrapped


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
