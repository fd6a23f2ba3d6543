"""
API response models using Pydantic.
"""
from typing import List, Optional
import base64

from pydantic import BaseModel, Field

from gardenscope.domain.models import (
    GrowthProjection,
    PlacementInstruction,
    RecordId,
    SceneComposition,
    ScenePlant,
    ViewpointRecord,
    ViewpointTransformation,
)
from gardenscope.utils.coverage import MatchQuality


class SceneResponse(BaseModel):
    """Response model for a composed scene."""
    target_years: int
    target_year: int
    season: str
    half_angle_degrees: float
    nothing_visible: bool = Field(
        description="True when no plant is inside the field of view"
    )
    reason: Optional[str] = Field(
        default=None,
        description="Why nothing is visible"
    )
    visible_plant_count: int
    visible_plants: List[ScenePlant] = Field(
        description="All visible plants, nearest first, with derived geometry and growth"
    )
    instructions: List[PlacementInstruction] = Field(
        description="Bounded placement instructions for the nearest plants"
    )
    prompt_text: str
    unlocated_plant_ids: List[RecordId] = Field(
        description="Plants skipped because they have no location"
    )

    @classmethod
    def from_composition(cls, composition: SceneComposition) -> "SceneResponse":
        return cls(
            target_years=composition.target_years,
            target_year=composition.target_year,
            season=composition.season,
            half_angle_degrees=composition.half_angle_degrees,
            nothing_visible=composition.nothing_visible,
            reason=composition.reason,
            visible_plant_count=len(composition.visible_plants),
            visible_plants=composition.visible_plants,
            instructions=composition.instructions,
            prompt_text=composition.prompt_text,
            unlocated_plant_ids=composition.unlocated_plant_ids,
        )


class TransformationResponse(BaseModel):
    """Response model for a viewpoint transformation."""
    viewpoint_id: RecordId
    scene: SceneResponse
    generated_image_base64: Optional[str] = Field(
        default=None,
        description="Generated image, base64 encoded"
    )
    generated_image_mime_type: Optional[str] = None
    scene_description: Optional[str] = None
    image_error: Optional[str] = Field(
        default=None,
        description="Why no image was generated"
    )

    @classmethod
    def from_transformation(cls, result: ViewpointTransformation) -> "TransformationResponse":
        encoded = None
        if result.has_image:
            encoded = base64.b64encode(result.image_data).decode("ascii")
        return cls(
            viewpoint_id=result.viewpoint_id,
            scene=SceneResponse.from_composition(result.composition),
            generated_image_base64=encoded,
            generated_image_mime_type=result.image_mime_type,
            scene_description=result.scene_description,
            image_error=result.image_error,
        )


class ViewpointMatchResponse(BaseModel):
    """Response model for the best viewpoint of a map location."""
    photo: ViewpointRecord
    match_quality: str = Field(
        description="excellent, good, fair or poor"
    )
    match_score: int = Field(
        ge=0,
        le=100,
        description="100 at the coverage center, 0 at the maximum match distance"
    )

    @classmethod
    def from_match(cls, viewpoint: ViewpointRecord, quality: MatchQuality) -> "ViewpointMatchResponse":
        return cls(photo=viewpoint, match_quality=quality.label, match_score=quality.score)


class PlantPrediction(BaseModel):
    """Projected growth of a single plant."""
    plant_id: RecordId
    common_name: str
    species: str
    projection: GrowthProjection


class GrowthPredictionResponse(BaseModel):
    """Response model for garden growth predictions."""
    target_years: int
    plant_predictions: List[PlantPrediction]
    total_carbon_kg: float = Field(
        description="Cumulative carbon sequestered by all plants at the projected date"
    )

    @classmethod
    def from_predictions(cls, target_years: int, predictions, total_carbon_kg: float) -> "GrowthPredictionResponse":
        return cls(
            target_years=target_years,
            plant_predictions=[
                PlantPrediction(
                    plant_id=plant.id,
                    common_name=plant.common_name,
                    species=plant.species,
                    projection=projection,
                )
                for plant, projection in predictions
            ],
            total_carbon_kg=total_carbon_kg,
        )
