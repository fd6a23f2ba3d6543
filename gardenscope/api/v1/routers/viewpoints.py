"""
API router for viewpoint endpoints.
"""
from fastapi import APIRouter, HTTPException, Path, Query
from typing import Annotated

from gardenscope.api.dependencies import ViewpointServiceDep
from gardenscope.api.v1.models.requests import TransformViewpointRequest
from gardenscope.api.v1.models.responses import TransformationResponse, ViewpointMatchResponse
from gardenscope.infrastructure.exceptions import ExternalAPIError


router = APIRouter(
    prefix="/viewpoints",
    tags=["viewpoints"],
)


@router.get(
    "/by-location",
    response_model=ViewpointMatchResponse,
    summary="Find the best photograph of a location",
    description="""
    Find the viewpoint photograph whose coverage area contains a map point.

    When several photographs cover the point, the one whose coverage center
    is closest wins. The match quality is excellent (score >= 80), good
    (>= 50), fair (>= 20) or poor.
    """,
    responses={
        404: {
            "description": "No photograph covers this location",
        },
    }
)
async def get_viewpoint_by_location(
    x: Annotated[float, Query(description="Normalized map x (0-100)")],
    y: Annotated[float, Query(description="Normalized map y (0-100), growing southward")],
    viewpoint_service: ViewpointServiceDep,
) -> ViewpointMatchResponse:
    """
    Find the best viewpoint for a map location.

    Raises:
        HTTPException: 404 when no coverage area contains the point
    """
    match = await viewpoint_service.find_viewpoint_for_location(x, y)
    if match is None:
        raise HTTPException(
            status_code=404,
            detail="No photo covers this location. Add a viewpoint photo that includes this area."
        )
    return ViewpointMatchResponse.from_match(match.viewpoint, match.quality)


@router.post(
    "/{viewpoint_id}/transform",
    response_model=TransformationResponse,
    summary="Transform a viewpoint photograph",
    description="""
    Project the garden into a viewpoint photograph at a future date.

    This endpoint:
    1. Fetches the viewpoint record and, when a garden plan is given, its plants
    2. Applies any camera position/direction overrides from the request
    3. Composes the scene (visibility, growth, frame placement)
    4. Sends the photograph and prompt to the image collaborator

    If the collaborator fails or times out, the composed scene is still
    returned, with image fields empty and image_error set.
    """,
    responses={
        404: {
            "description": "Viewpoint or garden plan not found",
        },
        502: {
            "description": "Garden records API failure",
        }
    }
)
async def transform_viewpoint(
    viewpoint_id: Annotated[str, Path(description="Viewpoint photo ID")],
    request: TransformViewpointRequest,
    viewpoint_service: ViewpointServiceDep,
) -> TransformationResponse:
    """
    Transform a viewpoint photograph.

    Args:
        viewpoint_id: Viewpoint photo ID
        request: Projection parameters and optional plants/camera overrides
        viewpoint_service: Viewpoint service (injected dependency)

    Returns:
        TransformationResponse with the scene and any generated image

    Raises:
        HTTPException: 404 if the viewpoint or garden plan is not found
    """
    try:
        result = await viewpoint_service.transform_viewpoint(
            viewpoint_id=viewpoint_id,
            target_years=request.target_years,
            season=request.season,
            plants=request.plants,
            garden_plan_id=request.garden_plan_id,
            camera_position=request.camera_position,
            camera_direction=request.camera_direction,
            fov_mode=request.fov_mode,
        )
    except ExternalAPIError as e:
        if e.status_code == 404:
            raise HTTPException(
                status_code=404,
                detail=f"Viewpoint '{viewpoint_id}' or its garden plan was not found"
            )
        raise

    return TransformationResponse.from_transformation(result)
