"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from gardenscope.config import settings
from gardenscope.domain.models import PropertyBounds
from gardenscope.infrastructure.garden_api_client import (
    GardenAPIClient,
    get_garden_client,
)
from gardenscope.infrastructure.image_generation_client import (
    ImageGenerationClient,
    get_image_client,
)
from gardenscope.services.application.viewpoint_service import ViewpointService
from gardenscope.services.domain.scene_composer import CompositionConfig, SceneComposer
from gardenscope.utils.bearing import PlanarScale


def get_property_bounds() -> PropertyBounds:
    """
    Dependency factory for the property bounds.

    Returns:
        PropertyBounds from settings
    """
    return PropertyBounds(
        north=settings.property_north,
        south=settings.property_south,
        east=settings.property_east,
        west=settings.property_west,
    )


def get_planar_scale(
    bounds: Annotated[PropertyBounds, Depends(get_property_bounds)],
) -> PlanarScale:
    """
    Dependency factory for the planar scale.

    Uses the configured reference latitude, or the property center when unset.
    """
    if settings.reference_latitude is not None:
        return PlanarScale.for_latitude(settings.reference_latitude, settings.meters_per_degree_lat)
    return PlanarScale.for_bounds(bounds, settings.meters_per_degree_lat)


def get_scene_composer(
    bounds: Annotated[PropertyBounds, Depends(get_property_bounds)],
    scale: Annotated[PlanarScale, Depends(get_planar_scale)],
) -> SceneComposer:
    """
    Dependency factory for SceneComposer.

    Args:
        bounds: Property bounds (injected)
        scale: Planar scale (injected)

    Returns:
        SceneComposer instance
    """
    return SceneComposer(
        bounds=bounds,
        scale=scale,
        config=CompositionConfig.from_settings(settings),
    )


def get_viewpoint_service(
    garden_client: Annotated[GardenAPIClient, Depends(get_garden_client)],
    image_client: Annotated[ImageGenerationClient, Depends(get_image_client)],
    composer: Annotated[SceneComposer, Depends(get_scene_composer)],
) -> ViewpointService:
    """
    Dependency factory for ViewpointService.

    Args:
        garden_client: Garden records API client (injected)
        image_client: Image collaborator client (injected)
        composer: Scene composer (injected)

    Returns:
        ViewpointService instance
    """
    return ViewpointService(
        garden_client=garden_client,
        image_client=image_client,
        composer=composer,
    )


# Type aliases for cleaner route signatures
PropertyBoundsDep = Annotated[PropertyBounds, Depends(get_property_bounds)]
ViewpointServiceDep = Annotated[ViewpointService, Depends(get_viewpoint_service)]
