"""
API router for growth prediction endpoints.
"""
from fastapi import APIRouter, HTTPException

from gardenscope.api.dependencies import ViewpointServiceDep
from gardenscope.api.v1.models.requests import GrowthPredictionRequest
from gardenscope.api.v1.models.responses import GrowthPredictionResponse
from gardenscope.infrastructure.exceptions import ExternalAPIError


router = APIRouter(
    prefix="/growth",
    tags=["growth"],
)


@router.post(
    "/predictions",
    response_model=GrowthPredictionResponse,
    summary="Predict garden growth",
    description="""
    Project every plant of a garden to a future date.

    Growth is linear until the species' years-to-mature and capped at the
    mature size. Unknown species fall back to their category defaults.
    The total carbon sequestered by the garden is included.
    """,
)
async def predict_growth(
    request: GrowthPredictionRequest,
    viewpoint_service: ViewpointServiceDep,
) -> GrowthPredictionResponse:
    """
    Predict garden growth.

    Raises:
        HTTPException: 404 if the garden plan is not found
    """
    try:
        prediction = await viewpoint_service.predict_growth(
            target_years=request.target_years,
            plants=request.plants,
            garden_plan_id=request.garden_plan_id,
        )
    except ExternalAPIError as e:
        if e.status_code == 404:
            raise HTTPException(
                status_code=404,
                detail=f"Garden plan '{request.garden_plan_id}' not found"
            )
        raise

    return GrowthPredictionResponse.from_predictions(
        prediction.target_years,
        prediction.predictions,
        prediction.total_carbon_kg,
    )
