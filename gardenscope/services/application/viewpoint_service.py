"""
Application service: Orchestration layer for viewpoint operations.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union
import logging

from gardenscope.domain.adapters import camera_pose_from_parts, camera_pose_from_viewpoint
from gardenscope.domain.models import (
    GrowthProjection,
    NormalizedPoint,
    PlantRecord,
    RecordId,
    SceneComposition,
    ScenePlant,
    ViewpointRecord,
    ViewpointTransformation,
)
from gardenscope.infrastructure.exceptions import ExternalAPIError, ImageGenerationError
from gardenscope.infrastructure.garden_api_client import GardenAPIClient
from gardenscope.infrastructure.image_generation_client import ImageGenerationClient
from gardenscope.services.domain.growth_projector import GrowthProjector, carbon_total
from gardenscope.services.domain.scene_composer import SceneComposer
from gardenscope.utils.coverage import (
    MatchQuality,
    coverage_covers_point,
    distance_from_center,
    match_quality,
)

logger = logging.getLogger(__name__)

MIN_TARGET_YEARS = 1
MAX_TARGET_YEARS = 50


@dataclass
class ViewpointMatch:
    """Best viewpoint for a map location."""

    viewpoint: ViewpointRecord
    quality: MatchQuality


@dataclass
class GardenGrowthPrediction:
    """Growth predictions for a whole garden plan."""

    target_years: int
    predictions: List[Tuple[PlantRecord, GrowthProjection]]
    total_carbon_kg: float


class ViewpointService:
    """
    Application service for viewpoint-related operations.

    Coordinates the garden records API, the scene composer and the image
    collaborator. No geometry or growth logic lives here.
    """

    def __init__(
        self,
        garden_client: GardenAPIClient,
        image_client: ImageGenerationClient,
        composer: SceneComposer,
        projector: Optional[GrowthProjector] = None,
    ):
        """
        Initialize the service with dependencies.

        Args:
            garden_client: Records API client for viewpoints and plants
            image_client: Generative image collaborator
            composer: Scene composer configured for the property
            projector: Growth projector (defaults to the composer's)
        """
        self.garden_client = garden_client
        self.image_client = image_client
        self.composer = composer
        self.projector = projector or composer.projector

    def compose_scene(
        self,
        camera_position: Optional[dict],
        camera_direction: Optional[float],
        plants: Iterable[Union[ScenePlant, PlantRecord]],
        target_years: int,
        season: str = "summer",
        fov_mode: Optional[str] = None,
    ) -> SceneComposition:
        """
        Compose a scene from a raw camera position and heading.

        No external system is touched. A position given as normalized {x, y}
        is resolved against the composer's property bounds.
        """
        camera = camera_pose_from_parts(camera_position, camera_direction, self.composer.bounds)
        return self.composer.compose(camera, plants, target_years, season=season, fov=fov_mode)

    async def transform_viewpoint(
        self,
        viewpoint_id: RecordId,
        target_years: int,
        season: str = "summer",
        plants: Optional[Sequence[PlantRecord]] = None,
        garden_plan_id: Optional[RecordId] = None,
        camera_position: Optional[dict] = None,
        camera_direction: Optional[float] = None,
        fov_mode: Optional[str] = None,
    ) -> ViewpointTransformation:
        """
        Project a garden into a viewpoint photograph.

        This method orchestrates:
        1. Fetching the viewpoint record (and plants when a plan id is given)
        2. Applying camera overrides from the request
        3. Composing the scene
        4. Handing the photo and prompt to the image collaborator

        Args:
            viewpoint_id: Viewpoint photo ID
            target_years: Years into the future
            season: Season name
            plants: Plant records supplied by the caller
            garden_plan_id: Garden plan whose plants are used when plants is None
            camera_position: Camera position override
            camera_direction: Camera heading override in degrees
            fov_mode: "strict" (default) or "inclusive"

        Returns:
            ViewpointTransformation. Image fields are None when nothing is
            visible or the collaborator fails; image_error says why.

        Raises:
            ExternalAPIError: If the viewpoint or plants cannot be fetched
        """
        viewpoint = await self.garden_client.get_viewpoint(viewpoint_id)

        overrides = {}
        if camera_position:
            overrides["camera_position"] = camera_position
        if camera_direction is not None:
            overrides["camera_direction"] = camera_direction
        if overrides:
            logger.info(f"Applying camera overrides to viewpoint {viewpoint_id}: {overrides}")
            viewpoint = viewpoint.model_copy(update=overrides)

        if plants is None:
            if garden_plan_id is not None:
                plants = await self.garden_client.get_plan_plants(garden_plan_id)
            else:
                plants = []

        camera = camera_pose_from_viewpoint(viewpoint, self.composer.bounds)
        composition = self.composer.compose(camera, plants, target_years, season=season, fov=fov_mode)
        result = ViewpointTransformation(viewpoint_id=viewpoint.id, composition=composition)

        if composition.nothing_visible:
            return result.model_copy(update={"image_error": composition.reason})

        if not viewpoint.photo_url:
            logger.warning(f"Viewpoint {viewpoint_id} has no photograph, skipping image generation")
            return result.model_copy(update={"image_error": "viewpoint has no photograph"})

        try:
            photo, mime_type = await self.garden_client.download_photo(viewpoint.photo_url)
            image = await self.image_client.generate(photo, mime_type, composition.prompt_text)
        except ImageGenerationError as e:
            logger.warning(f"Image generation failed for viewpoint {viewpoint_id}: {e.message}")
            return result.model_copy(update={"image_error": e.message})
        except ExternalAPIError as e:
            logger.warning(f"Photo download failed for viewpoint {viewpoint_id}: {e.message}")
            return result.model_copy(update={"image_error": e.message})

        return result.model_copy(update={
            "image_data": image.data,
            "image_mime_type": image.mime_type,
            "scene_description": image.description,
        })

    async def find_viewpoint_for_location(self, x: float, y: float) -> Optional[ViewpointMatch]:
        """
        Find the photograph that best frames a map location.

        Among viewpoints whose coverage area contains the point, the one whose
        center is closest wins.

        Args:
            x: Normalized map x (0-100)
            y: Normalized map y (0-100)

        Returns:
            ViewpointMatch, or None when no coverage area contains the point
        """
        point = NormalizedPoint(x=x, y=y)
        viewpoints = await self.garden_client.list_viewpoints()

        covering = [
            v for v in viewpoints
            if v.coverage_area is not None and coverage_covers_point(v.coverage_area, point)
        ]
        if not covering:
            logger.info(f"No viewpoint covers ({x}, {y}) among {len(viewpoints)} viewpoints")
            return None

        best = min(covering, key=lambda v: distance_from_center(v.coverage_area, point))
        quality = match_quality(best.coverage_area, point)
        logger.info(f"Viewpoint {best.id} best frames ({x}, {y}): {quality.label} ({quality.score})")
        return ViewpointMatch(viewpoint=best, quality=quality)

    async def predict_growth(
        self,
        target_years: int,
        plants: Optional[Sequence[PlantRecord]] = None,
        garden_plan_id: Optional[RecordId] = None,
    ) -> GardenGrowthPrediction:
        """
        Project growth for a garden plan.

        Args:
            target_years: Years into the future, 1 to 50
            plants: Plant records supplied by the caller
            garden_plan_id: Garden plan whose plants are used when plants is None

        Returns:
            GardenGrowthPrediction with per-plant projections and total carbon

        Raises:
            ValueError: If target_years is out of range
        """
        if not MIN_TARGET_YEARS <= target_years <= MAX_TARGET_YEARS:
            raise ValueError(f"target_years must be between {MIN_TARGET_YEARS} and {MAX_TARGET_YEARS}")

        if plants is None:
            if garden_plan_id is not None:
                plants = await self.garden_client.get_plan_plants(garden_plan_id)
            else:
                plants = []

        predictions = self.projector.project_garden(plants, target_years)
        total = carbon_total(predictions)
        return GardenGrowthPrediction(
            target_years=target_years,
            predictions=predictions,
            total_carbon_kg=total,
        )
