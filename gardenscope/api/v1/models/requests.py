"""
API request models using Pydantic.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from gardenscope.domain.models import PlantRecord, RecordId
from gardenscope.utils.field_of_view import FovMode


class ComposeSceneRequest(BaseModel):
    """Request body for composing a scene from an explicit camera pose."""
    camera_position: Optional[dict] = Field(
        default=None,
        description="Camera position as {latitude, longitude}, {lat, lng} or normalized {x, y}"
    )
    camera_direction: Optional[float] = Field(
        default=None,
        description="Camera compass heading in degrees, clockwise from north"
    )
    plants: List[PlantRecord] = Field(
        default_factory=list,
        description="Candidate plants"
    )
    target_years: int = Field(
        default=5,
        ge=0,
        le=50,
        description="Years into the future"
    )
    season: str = Field(
        default="summer",
        description="Season shown in the projected scene"
    )
    fov_mode: FovMode = Field(
        default=FovMode.STRICT,
        description="Visibility filtering mode"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "camera_position": {"lat": 49.6387, "lng": 5.5522},
                "camera_direction": 90,
                "plants": [
                    {
                        "id": 1,
                        "species": "Quercus robur",
                        "common_name": "English Oak",
                        "category": "tree",
                        "location": {"lat": 49.6387, "lng": 5.5526},
                        "planted_date": "2020-04-01",
                    }
                ],
                "target_years": 10,
                "season": "autumn",
            }
        }


class TransformViewpointRequest(BaseModel):
    """Request body for transforming a viewpoint photograph."""
    target_years: int = Field(
        default=5,
        ge=0,
        le=50,
        description="Years into the future"
    )
    season: str = Field(
        default="summer",
        description="Season shown in the projected scene"
    )
    plants: Optional[List[PlantRecord]] = Field(
        default=None,
        description="Plants to project; takes precedence over garden_plan_id"
    )
    garden_plan_id: Optional[RecordId] = Field(
        default=None,
        description="Garden plan whose plants are projected"
    )
    camera_position: Optional[dict] = Field(
        default=None,
        description="Camera position override"
    )
    camera_direction: Optional[float] = Field(
        default=None,
        description="Camera heading override in degrees"
    )
    fov_mode: FovMode = Field(
        default=FovMode.STRICT,
        description="Visibility filtering mode"
    )


class GrowthPredictionRequest(BaseModel):
    """Request body for garden growth predictions."""
    target_years: int = Field(
        ge=1,
        le=50,
        description="Years into the future (1-50)"
    )
    plants: Optional[List[PlantRecord]] = Field(
        default=None,
        description="Plants to project; takes precedence over garden_plan_id"
    )
    garden_plan_id: Optional[RecordId] = Field(
        default=None,
        description="Garden plan whose plants are projected"
    )
