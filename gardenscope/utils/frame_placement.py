"""
Frame placement: where a visible target lands in the photograph.

Horizontal position is a LINEAR mapping from relative angle to frame
fraction. It feeds textual placement instructions, not pixel overlays; a
pixel-accurate overlay would need a tangent-based projection instead.

Depth and size hints share one set of distance breakpoints so the
foreground/middle-ground/background label and the near/medium/far size hint
can never disagree.
"""
from dataclasses import dataclass
from typing import Optional

from gardenscope.domain.models import FieldOfView
from gardenscope.utils.angles import clamp

FAR_LEFT = "far-left"
LEFT = "left"
CENTER_LEFT = "center-left"
CENTER = "center"
CENTER_RIGHT = "center-right"
RIGHT = "right"
FAR_RIGHT = "far-right"

FOREGROUND = "foreground"
MIDDLE_GROUND = "middle-ground"
BACKGROUND = "background"

# Upper edges of the left-hand buckets (exclusive) and lower edges of the
# right-hand buckets (exclusive); 45-55 inclusive is center.
_LEFT_BREAKPOINTS = ((15.0, FAR_LEFT), (30.0, LEFT), (45.0, CENTER_LEFT))
_RIGHT_BREAKPOINTS = ((85.0, FAR_RIGHT), (70.0, RIGHT), (55.0, CENTER_RIGHT))

_SIZE_HINTS = {
    FOREGROUND: "near, appears large",
    MIDDLE_GROUND: "medium distance, appears medium-sized",
    BACKGROUND: "far, appears small",
}


@dataclass(frozen=True)
class DepthBreakpoints:
    """Distance thresholds in meters for the depth buckets (inclusive upper bounds)."""

    foreground_max_m: float = 15.0
    middle_max_m: float = 35.0

    @classmethod
    def from_settings(cls, settings) -> "DepthBreakpoints":
        return cls(
            foreground_max_m=settings.depth_foreground_max_m,
            middle_max_m=settings.depth_middle_max_m,
        )


@dataclass(frozen=True)
class FramePlacement:
    """Horizontal and depth placement of a target in the frame."""

    horizontal_pct: float
    horizontal_label: str
    depth_label: str
    size_hint: str


CENTER_PLACEMENT_PCT = 50.0


def horizontal_pct(relative_angle_deg: Optional[float], fov: FieldOfView) -> float:
    """
    Map a relative angle to a horizontal frame percentage.

    Args:
        relative_angle_deg: Signed angle from the camera heading, None if unknown
        fov: Field of view half-angle

    Returns:
        0 at the left edge (-half-angle), 100 at the right edge (+half-angle),
        clamped to [0, 100]; 50 when the angle is unknown
    """
    if relative_angle_deg is None:
        return CENTER_PLACEMENT_PCT
    half = fov.half_angle_degrees
    pct = (relative_angle_deg + half) / (2.0 * half) * 100.0
    return clamp(pct, 0.0, 100.0)


def horizontal_label(pct: float) -> str:
    """
    Bucket a frame percentage into one of seven position labels.

    Buckets: [0,15) far-left, [15,30) left, [30,45) center-left,
    [45,55] center, (55,70] center-right, (70,85] right, (85,100] far-right.
    """
    for upper, label in _LEFT_BREAKPOINTS:
        if pct < upper:
            return label
    for lower, label in _RIGHT_BREAKPOINTS:
        if pct > lower:
            return label
    return CENTER


def depth_label(distance_m: float, breakpoints: DepthBreakpoints = DepthBreakpoints()) -> str:
    """
    Bucket a distance into foreground, middle-ground or background.

    Args:
        distance_m: Distance from the camera in meters
        breakpoints: Distance thresholds

    Returns:
        Depth label
    """
    if distance_m <= breakpoints.foreground_max_m:
        return FOREGROUND
    if distance_m <= breakpoints.middle_max_m:
        return MIDDLE_GROUND
    return BACKGROUND


def size_hint(distance_m: float, breakpoints: DepthBreakpoints = DepthBreakpoints()) -> str:
    """Apparent-size hint derived from the same breakpoints as depth_label."""
    return _SIZE_HINTS[depth_label(distance_m, breakpoints)]


def place_in_frame(
    relative_angle_deg: Optional[float],
    distance_m: float,
    fov: FieldOfView,
    breakpoints: DepthBreakpoints = DepthBreakpoints(),
) -> FramePlacement:
    """
    Compute the full frame placement for a target.

    Args:
        relative_angle_deg: Signed angle from the camera heading, None if unknown
        distance_m: Distance from the camera in meters
        fov: Field of view half-angle
        breakpoints: Depth thresholds

    Returns:
        FramePlacement
    """
    pct = horizontal_pct(relative_angle_deg, fov)
    depth = depth_label(distance_m, breakpoints)
    return FramePlacement(
        horizontal_pct=pct,
        horizontal_label=horizontal_label(pct),
        depth_label=depth,
        size_hint=_SIZE_HINTS[depth],
    )
