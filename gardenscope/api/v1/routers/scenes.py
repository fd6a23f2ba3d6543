"""
API router for scene composition endpoints.
"""
from fastapi import APIRouter

from gardenscope.api.dependencies import ViewpointServiceDep
from gardenscope.api.v1.models.requests import ComposeSceneRequest
from gardenscope.api.v1.models.responses import SceneResponse


router = APIRouter(
    prefix="/scenes",
    tags=["scenes"],
)


@router.post(
    "/compose",
    response_model=SceneResponse,
    summary="Compose a projected scene",
    description="""
    Work out which plants a camera sees and where they sit in the frame.

    This endpoint:
    1. Keeps plants whose bearing lies within the camera's field of view
    2. Projects each visible plant's growth to the target year
    3. Places each plant horizontally (far-left to far-right) and in depth
       (foreground, middle-ground, background)
    4. Renders placement instructions for the nearest plants and a prompt text

    No external system is called. When no plant is in view, nothing_visible
    is set and no prompt is rendered.
    """,
)
async def compose_scene(
    request: ComposeSceneRequest,
    viewpoint_service: ViewpointServiceDep,
) -> SceneResponse:
    """
    Compose a scene from an explicit camera pose.

    Args:
        request: Camera pose, plants and projection parameters
        viewpoint_service: Viewpoint service (injected dependency)

    Returns:
        SceneResponse with visible plants and instructions
    """
    composition = viewpoint_service.compose_scene(
        camera_position=request.camera_position,
        camera_direction=request.camera_direction,
        plants=request.plants,
        target_years=request.target_years,
        season=request.season,
        fov_mode=request.fov_mode,
    )
    return SceneResponse.from_composition(composition)
