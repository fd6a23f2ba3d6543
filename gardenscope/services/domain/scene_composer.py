"""
Domain service: compose a viewpoint scene for the image collaborator.

Pipeline:
1. Filter plants to those inside the camera's field of view
2. Short-circuit with an explicit "nothing visible" result when none remain
3. Project growth and frame placement for every visible plant
4. Sort nearest first (stable, so equal distances keep input order)
5. Truncate to a bounded number of instructions
6. Render structured instructions and prompt text
"""
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional, Union
import logging

from gardenscope.domain.adapters import scene_plants_from_records
from gardenscope.domain.models import (
    CameraPose,
    FieldOfView,
    PlantRecord,
    PropertyBounds,
    SceneComposition,
    ScenePlant,
)
from gardenscope.services.domain.growth_projector import GrowthProjector
from gardenscope.services.domain.prompt_builder import (
    build_instruction,
    build_prompt_text,
    normalize_season,
)
from gardenscope.utils.bearing import PlanarScale
from gardenscope.utils.field_of_view import FieldOfViewPresets, FovMode, view_geometry
from gardenscope.utils.frame_placement import DepthBreakpoints, place_in_frame

logger = logging.getLogger(__name__)

NO_CAMERA_REASON = "camera pose is not configured for this viewpoint"
NO_LOCATED_PLANTS_REASON = "no plants with a known location"
NOTHING_IN_VIEW_REASON = "no plants within the camera's field of view"


@dataclass
class CompositionConfig:
    """Configuration for scene composition."""

    max_instructions: int = 4
    """Maximum number of placement instructions (nearest plants win, at least 1)"""

    depth_breakpoints: DepthBreakpoints = DepthBreakpoints()
    """Distance thresholds shared by depth labels and size hints"""

    fov_presets: FieldOfViewPresets = FieldOfViewPresets(
        strict=FieldOfView(half_angle_degrees=30.0),
        inclusive=FieldOfView(half_angle_degrees=40.0),
    )
    """Half-angles for strict and inclusive filtering"""

    @classmethod
    def from_settings(cls, settings) -> "CompositionConfig":
        return cls(
            max_instructions=settings.max_scene_instructions,
            depth_breakpoints=DepthBreakpoints.from_settings(settings),
            fov_presets=FieldOfViewPresets.from_settings(settings),
        )


class SceneComposer:
    """
    Domain service turning a camera pose and a plant set into placement instructions.

    All computation is pure and recomputed per call; nothing is cached.
    """

    def __init__(
        self,
        bounds: PropertyBounds,
        scale: Optional[PlanarScale] = None,
        projector: Optional[GrowthProjector] = None,
        config: Optional[CompositionConfig] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.bounds = bounds
        self.scale = scale or PlanarScale.for_bounds(bounds)
        self._today = today or date.today
        self.projector = projector or GrowthProjector(today=self._today)
        self.config = config or CompositionConfig()

    def resolve_fov(self, fov: Union[FieldOfView, FovMode, str, None]) -> FieldOfView:
        """Field of view from an explicit value, a mode name, or the strict default."""
        if isinstance(fov, FieldOfView):
            return fov
        if fov is None:
            return self.config.fov_presets.strict
        return self.config.fov_presets.for_mode(FovMode(fov))

    def compose(
        self,
        camera: Optional[CameraPose],
        plants: Iterable[Union[ScenePlant, PlantRecord]],
        target_years: int,
        season: str = "summer",
        fov: Union[FieldOfView, FovMode, str, None] = None,
    ) -> SceneComposition:
        """
        Compose the scene seen from a camera at a future date.

        Args:
            camera: Camera pose, None when the viewpoint is not configured
            plants: Scene plants or raw plant records
            target_years: Years into the future
            season: Season name (unknown values fall back to summer)
            fov: Field of view, mode name ("strict"/"inclusive"), or None for strict

        Returns:
            SceneComposition; nothing_visible is set (and no prompt rendered)
            when no plant is in view
        """
        field_of_view = self.resolve_fov(fov)
        season = normalize_season(season)
        scene_plants, unlocated = self._split_located(plants)

        composition = SceneComposition(
            target_years=target_years,
            target_year=self._today().year + target_years,
            season=season,
            half_angle_degrees=field_of_view.half_angle_degrees,
            camera=camera,
            unlocated_plant_ids=unlocated,
        )

        logger.info(f"Composing scene: {len(scene_plants)} located plants, "
                    f"{len(unlocated)} without location, half-angle={field_of_view.half_angle_degrees}")

        # Step 1-2: visibility filter with explicit short-circuits
        if camera is None:
            return self._nothing_visible(composition, NO_CAMERA_REASON)
        if not scene_plants:
            return self._nothing_visible(composition, NO_LOCATED_PLANTS_REASON)

        visible = self._visible_plants(camera, scene_plants, field_of_view)
        if not visible:
            return self._nothing_visible(composition, NOTHING_IN_VIEW_REASON)

        # Step 3: growth and placement per survivor
        enriched = [self._enrich(plant, target_years) for plant in visible]

        # Step 4: nearest first; sorted() is stable for equal distances
        enriched = sorted(enriched, key=lambda p: p.distance_m)

        # Step 5-6: bounded instruction set and prompt
        selected = enriched[: max(1, self.config.max_instructions)]
        instructions = [build_instruction(plant) for plant in selected]
        prompt_text = build_prompt_text(instructions, target_years, composition.target_year, season)

        logger.info(f"Visible plants: {len(enriched)}, instructions rendered: {len(instructions)}")
        for instruction in instructions:
            logger.debug(f"  {instruction.text}")

        return composition.model_copy(update={
            "visible_plants": enriched,
            "instructions": instructions,
            "prompt_text": prompt_text,
        })

    def _split_located(self, plants):
        scene_plants: list[ScenePlant] = []
        records: list[PlantRecord] = []
        for plant in plants:
            if isinstance(plant, ScenePlant):
                scene_plants.append(plant)
            else:
                records.append(plant)
        located, unlocated = scene_plants_from_records(records, self.bounds)
        return scene_plants + located, unlocated

    def _visible_plants(
        self,
        camera: CameraPose,
        plants: list[ScenePlant],
        fov: FieldOfView,
    ) -> list[ScenePlant]:
        visible = []
        for plant in plants:
            geometry = view_geometry(camera, plant.position, self.scale)
            if abs(geometry.relative_angle_deg) <= fov.half_angle_degrees:
                placement = place_in_frame(
                    geometry.relative_angle_deg,
                    geometry.distance_m,
                    fov,
                    self.config.depth_breakpoints,
                )
                visible.append(plant.model_copy(update={
                    "distance_m": geometry.distance_m,
                    "bearing_deg": geometry.bearing_deg,
                    "relative_angle_deg": geometry.relative_angle_deg,
                    "horizontal_pct": placement.horizontal_pct,
                    "horizontal_label": placement.horizontal_label,
                    "depth_label": placement.depth_label,
                    "size_hint": placement.size_hint,
                }))
        return visible

    def _enrich(self, plant: ScenePlant, target_years: int) -> ScenePlant:
        projection = self.projector.project_plant(plant, target_years)
        return plant.model_copy(update={
            "projected_age_years": projection.future_age_years,
            "projected_height_cm": projection.height_cm,
            "projected_canopy_cm": projection.canopy_cm,
            "projected_carbon_kg": projection.carbon_kg,
            "growth_stage": projection.stage,
            "maturity_pct": projection.maturity_pct,
        })

    @staticmethod
    def _nothing_visible(composition: SceneComposition, reason: str) -> SceneComposition:
        logger.info(f"Nothing visible: {reason}")
        return composition.model_copy(update={"nothing_visible": True, "reason": reason})
