"""
Adapters from ingested records to the canonical geographic representation.

Records reach the engine with positions in either geographic or normalized
map space. These adapters are the only place that choice is made; everything
downstream works with GeoPoint.
"""
from typing import Iterable, Optional, Tuple
import logging

from gardenscope.domain.models import (
    CameraPose,
    GeoPoint,
    NormalizedPoint,
    PlantRecord,
    PropertyBounds,
    RecordId,
    ScenePlant,
    ViewpointRecord,
)
from gardenscope.utils.coordinates import normalized_to_geo

logger = logging.getLogger(__name__)


def _first_present(mapping: dict, *keys: str) -> Optional[float]:
    for key in keys:
        value = mapping.get(key)
        if value is None:
            continue
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring non-numeric coordinate {key}={value!r}")
    return None


def position_from_mapping(position: Optional[dict], bounds: PropertyBounds) -> Optional[GeoPoint]:
    """
    Resolve a position object to a GeoPoint.

    Accepts {latitude, longitude}, {lat, lng} or normalized {x, y}.
    Geographic keys win when both are present.

    Returns:
        GeoPoint, or None when no complete coordinate pair is present
    """
    if not position:
        return None

    lat = _first_present(position, "latitude", "lat")
    lng = _first_present(position, "longitude", "lng", "lon")
    if lat is not None and lng is not None:
        return GeoPoint(latitude=lat, longitude=lng)

    x = _first_present(position, "x")
    y = _first_present(position, "y")
    if x is not None and y is not None:
        return normalized_to_geo(NormalizedPoint(x=x, y=y), bounds)

    return None


def camera_pose_from_parts(
    position: Optional[dict],
    heading: Optional[float],
    bounds: PropertyBounds,
) -> Optional[CameraPose]:
    """CameraPose from a raw position object and heading, None if either is missing."""
    geo = position_from_mapping(position, bounds)
    if geo is None or heading is None:
        return None
    return CameraPose(position=geo, heading_degrees=heading)


def camera_pose_from_viewpoint(
    viewpoint: ViewpointRecord,
    bounds: PropertyBounds,
) -> Optional[CameraPose]:
    """
    Build the camera pose of a viewpoint record.

    Args:
        viewpoint: Viewpoint record
        bounds: Property bounds for normalized camera positions

    Returns:
        CameraPose, or None when position or heading is not configured yet
    """
    camera = camera_pose_from_parts(viewpoint.camera_position, viewpoint.camera_direction, bounds)
    if camera is None:
        logger.info(f"Viewpoint {viewpoint.id} has no complete camera pose")
    return camera


def plant_position(plant: PlantRecord, bounds: PropertyBounds) -> Optional[GeoPoint]:
    """
    Geographic position of a plant record.

    Latitude/longitude are preferred; normalized x/y are converted otherwise.
    """
    if plant.latitude is not None and plant.longitude is not None:
        return GeoPoint(latitude=plant.latitude, longitude=plant.longitude)
    if plant.x is not None and plant.y is not None:
        return normalized_to_geo(NormalizedPoint(x=plant.x, y=plant.y), bounds)
    return None


def scene_plant_from_record(plant: PlantRecord, bounds: PropertyBounds) -> Optional[ScenePlant]:
    """ScenePlant for a record, or None when the record has no location."""
    position = plant_position(plant, bounds)
    if position is None:
        return None
    return ScenePlant(
        id=plant.id,
        position=position,
        species=plant.species,
        common_name=plant.common_name,
        category=plant.category,
        planted_date=plant.planted_date,
    )


def scene_plants_from_records(
    plants: Iterable[PlantRecord],
    bounds: PropertyBounds,
) -> Tuple[list[ScenePlant], list[RecordId]]:
    """
    Convert records to scene plants, separating out records without a location.

    Returns:
        Tuple of:
            - Located scene plants in input order
            - Ids of records that had no usable location
    """
    located: list[ScenePlant] = []
    unlocated: list[RecordId] = []
    for plant in plants:
        scene_plant = scene_plant_from_record(plant, bounds)
        if scene_plant is None:
            logger.warning(f"Plant {plant.id} ({plant.common_name or plant.species}) has no location, skipping")
            unlocated.append(plant.id)
        else:
            located.append(scene_plant)
    return located, unlocated
