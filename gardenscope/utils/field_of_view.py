"""
Field-of-view visibility tests for a camera pose.

A target is visible when its bearing lies within the camera heading plus or
minus the half-angle (boundary inclusive). Missing inputs degrade to "not
visible" with a centered relative angle instead of raising, since viewpoints
and plant locations are often incomplete while a plan is being edited.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gardenscope.domain.models import CameraPose, FieldOfView, GeoPoint
from gardenscope.utils.angles import normalize_180
from gardenscope.utils.bearing import PlanarScale, bearing_degrees, distance_meters


class FovMode(str, Enum):
    """Named visibility filtering modes."""

    STRICT = "strict"
    """Narrow cone, default for prompt composition"""

    INCLUSIVE = "inclusive"
    """Wider cone for listing plants that are at least partly in frame"""


@dataclass(frozen=True)
class FieldOfViewPresets:
    """Half-angle configuration for each filtering mode."""

    strict: FieldOfView
    inclusive: FieldOfView

    @classmethod
    def from_settings(cls, settings) -> "FieldOfViewPresets":
        return cls(
            strict=FieldOfView(half_angle_degrees=settings.fov_strict_half_angle_degrees),
            inclusive=FieldOfView(half_angle_degrees=settings.fov_inclusive_half_angle_degrees),
        )

    def for_mode(self, mode: FovMode) -> FieldOfView:
        if FovMode(mode) is FovMode.INCLUSIVE:
            return self.inclusive
        return self.strict


@dataclass(frozen=True)
class ViewGeometry:
    """Geometry of a target as seen from a camera."""

    distance_m: float
    bearing_deg: float
    relative_angle_deg: float


def relative_angle(
    camera: Optional[CameraPose],
    target: Optional[GeoPoint],
    scale: PlanarScale,
) -> float:
    """
    Signed angle of the target relative to the camera heading.

    Args:
        camera: Camera pose, or None when the viewpoint is not configured
        target: Target position, or None when unknown
        scale: Planar scale for the property

    Returns:
        Angle in (-180, 180]; negative is left of center, positive right.
        0.0 when either input is missing or the target sits on the camera.
    """
    if camera is None or target is None:
        return 0.0
    if distance_meters(camera.position, target, scale) == 0.0:
        return 0.0
    bearing = bearing_degrees(camera.position, target, scale)
    return normalize_180(bearing - camera.heading_degrees)


def is_visible(
    camera: Optional[CameraPose],
    target: Optional[GeoPoint],
    fov: FieldOfView,
    scale: PlanarScale,
) -> bool:
    """
    Check whether a target falls inside the camera's field of view.

    Args:
        camera: Camera pose, or None when the viewpoint is not configured
        target: Target position, or None when unknown
        fov: Field of view half-angle
        scale: Planar scale for the property

    Returns:
        True when abs(relative angle) <= half-angle. A target coincident with
        the camera is visible; missing camera or target is not.
    """
    if camera is None or target is None:
        return False
    return abs(relative_angle(camera, target, scale)) <= fov.half_angle_degrees


def view_geometry(camera: CameraPose, target: GeoPoint, scale: PlanarScale) -> ViewGeometry:
    """Distance, bearing and relative angle of a target in one pass."""
    distance = distance_meters(camera.position, target, scale)
    if distance == 0.0:
        return ViewGeometry(distance_m=0.0, bearing_deg=0.0, relative_angle_deg=0.0)
    bearing = bearing_degrees(camera.position, target, scale)
    return ViewGeometry(
        distance_m=distance,
        bearing_deg=bearing,
        relative_angle_deg=normalize_180(bearing - camera.heading_degrees),
    )
