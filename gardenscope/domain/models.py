"""
Domain models for the garden viewpoint engine.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, databases, etc.).

Coordinate spaces:
- Geographic: GeoPoint (degrees), the canonical internal representation
- Normalized: NormalizedPoint, 0-100 across the property map, y grows southward
- Pixel: PixelPoint, image pixels, y grows downward
"""
from datetime import date
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from gardenscope.utils.angles import normalize_360


RecordId = Union[int, str]


class GeoPoint(BaseModel):
    """Geographic position in degrees."""
    latitude: float
    longitude: float

    class Config:
        frozen = True


class NormalizedPoint(BaseModel):
    """Position in normalized map space (0-100 on both axes inside the bounds)."""
    x: float
    y: float

    class Config:
        frozen = True


class PixelPoint(BaseModel):
    """Position in the pixel space of a rendered property image."""
    x: float
    y: float

    class Config:
        frozen = True


class PropertyBounds(BaseModel):
    """Geographic bounding box of the property map."""
    north: float
    south: float
    east: float
    west: float

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_extent(self) -> "PropertyBounds":
        if not self.north > self.south:
            raise ValueError("north must be greater than south")
        if not self.east > self.west:
            raise ValueError("east must be greater than west")
        return self

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(
            latitude=(self.north + self.south) / 2.0,
            longitude=(self.east + self.west) / 2.0,
        )


class CameraPose(BaseModel):
    """Position and compass heading of a viewpoint camera."""
    position: GeoPoint
    heading_degrees: float = Field(
        description="Compass heading, clockwise from north, normalized into [0, 360)"
    )

    @field_validator("heading_degrees")
    @classmethod
    def _wrap_heading(cls, value: float) -> float:
        return normalize_360(value)


class FieldOfView(BaseModel):
    """Horizontal field of view expressed as a half-angle."""
    half_angle_degrees: float = Field(gt=0, le=180)

    class Config:
        frozen = True

    @property
    def full_angle_degrees(self) -> float:
        return self.half_angle_degrees * 2.0


class CoverageArea(BaseModel):
    """Rectangle in normalized map space that a photograph visually captures."""
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    class Config:
        frozen = True

    @property
    def center(self) -> NormalizedPoint:
        return NormalizedPoint(
            x=(self.xmin + self.xmax) / 2.0,
            y=(self.ymin + self.ymax) / 2.0,
        )


def _parse_optional_date(value):
    """Blank or unparseable dates count as unknown rather than failing."""
    if value is None or isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


class PlantRecord(BaseModel):
    """
    Plant as delivered by the garden records API or a request body.

    Position may arrive as latitude/longitude, as a nested
    ``location: {lat, lng}`` object, or only as normalized x/y map coordinates.
    Record adapters resolve these into a single geographic position.
    """
    id: RecordId
    species: str = ""
    common_name: str = ""
    category: str = "perennial"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    x: Optional[float] = None
    y: Optional[float] = None
    planted_date: Optional[date] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_location(cls, data):
        if isinstance(data, dict) and isinstance(data.get("location"), dict):
            location = data["location"]
            data = dict(data)
            data.setdefault("latitude", location.get("lat", location.get("latitude")))
            data.setdefault("longitude", location.get("lng", location.get("longitude")))
        return data

    @field_validator("planted_date", mode="before")
    @classmethod
    def _lenient_date(cls, value):
        return _parse_optional_date(value)

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value):
        return value or "perennial"


class ViewpointRecord(BaseModel):
    """Viewpoint photograph metadata as delivered by the garden records API."""
    id: RecordId
    name: str = ""
    description: Optional[str] = None
    camera_position: Optional[dict] = Field(
        default=None,
        description="Either {latitude, longitude}/{lat, lng} or normalized {x, y}"
    )
    camera_direction: Optional[float] = Field(
        default=None,
        description="Compass heading of the camera in degrees"
    )
    field_of_view: Optional[float] = Field(
        default=None,
        description="Full horizontal field of view in degrees, if recorded"
    )
    coverage_area: Optional[CoverageArea] = None
    photo_url: Optional[str] = None

    @field_validator("camera_position", mode="before")
    @classmethod
    def _empty_position(cls, value):
        return value or None

    @field_validator("coverage_area", mode="before")
    @classmethod
    def _incomplete_coverage(cls, value):
        if isinstance(value, dict):
            if not all(value.get(k) is not None for k in ("xmin", "xmax", "ymin", "ymax")):
                return None
        return value


class GrowthModel(BaseModel):
    """Per-species growth parameters."""
    mature_height_cm: float = Field(gt=0)
    mature_canopy_cm: float = Field(gt=0)
    years_to_mature: float = Field(gt=0)
    carbon_per_year_kg: float = Field(ge=0)

    class Config:
        frozen = True


class GrowthProjection(BaseModel):
    """Projected size and maturity of a plant at a future point in time."""
    age_years: float = Field(description="Current age in years")
    future_age_years: float = Field(description="Age at the projected date")
    height_cm: float
    canopy_cm: float
    carbon_kg: float
    stage: str
    maturity_pct: float
    years_remaining: int
    model_source: str = Field(description="'species' or 'category:<name>'")


class ScenePlant(BaseModel):
    """
    A plant placed in a scene, with geometry and growth fields derived per request.

    Derived fields are never persisted; they are recomputed on every composition.
    """
    id: RecordId
    position: GeoPoint
    species: str = ""
    common_name: str = ""
    category: str = "perennial"
    planted_date: Optional[date] = None

    distance_m: Optional[float] = None
    bearing_deg: Optional[float] = None
    relative_angle_deg: Optional[float] = None
    horizontal_pct: Optional[float] = None
    horizontal_label: Optional[str] = None
    depth_label: Optional[str] = None
    size_hint: Optional[str] = None
    projected_age_years: Optional[float] = None
    projected_height_cm: Optional[float] = None
    projected_canopy_cm: Optional[float] = None
    projected_carbon_kg: Optional[float] = None
    growth_stage: Optional[str] = None
    maturity_pct: Optional[float] = None

    @property
    def display_name(self) -> str:
        return self.common_name or self.species.replace("_", " ") or "Unknown plant"


class PlacementInstruction(BaseModel):
    """Structured instruction telling the image collaborator where a plant goes."""
    plant_id: RecordId
    common_name: str
    species: str
    projected_age_years: float
    height_cm: float
    canopy_cm: float
    growth_stage: str
    horizontal_pct: float
    horizontal_label: str
    depth_label: str
    size_hint: str
    distance_m: float
    text: str


class SceneComposition(BaseModel):
    """Result of composing a viewpoint scene."""
    target_years: int
    target_year: int
    season: str
    half_angle_degrees: float
    camera: Optional[CameraPose] = None
    visible_plants: List[ScenePlant] = Field(default_factory=list)
    instructions: List[PlacementInstruction] = Field(default_factory=list)
    prompt_text: str = ""
    nothing_visible: bool = False
    reason: Optional[str] = None
    unlocated_plant_ids: List[RecordId] = Field(default_factory=list)


class ViewpointTransformation(BaseModel):
    """Composition merged with the image collaborator's outcome."""
    viewpoint_id: RecordId
    composition: SceneComposition
    image_data: Optional[bytes] = None
    image_mime_type: Optional[str] = None
    scene_description: Optional[str] = None
    image_error: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return self.image_data is not None
