"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from gardenscope.config import settings
from gardenscope.middleware.error_handler import ErrorHandlerMiddleware
from gardenscope.api.v1.routers import growth, scenes, viewpoints

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_requests}/minute"],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Property bounds: N={settings.property_north} S={settings.property_south} "
                f"E={settings.property_east} W={settings.property_west}")
    logger.info(f"Field of view: strict={settings.fov_strict_half_angle_degrees}, "
                f"inclusive={settings.fov_inclusive_half_angle_degrees} (half-angles)")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")
    if not settings.image_api_key:
        logger.warning("IMAGE_API_KEY is not set; viewpoint transformations will return scenes without images")

    yield

    # Shutdown
    from gardenscope.infrastructure.garden_api_client import get_garden_client
    from gardenscope.infrastructure.image_generation_client import get_image_client
    logger.info("Shutting down application...")
    await get_garden_client().close()
    await get_image_client().close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    description="""
    Viewpoint geometry and field-of-view engine for garden planning

    This API projects a planned garden into reference photographs taken from
    fixed viewpoints on the property.

    ## Features

    - **Scene Composition**: Decide which plants a camera sees, where they sit
      in the frame and how large they appear
    - **Growth Projection**: Linear growth to mature size with stages and
      carbon sequestration
    - **Viewpoint Transformation**: Hand the photograph and a bounded set of
      placement instructions to a generative image model
    - **Coverage Lookup**: Find the photograph that best frames a map location
    - **Rate Limiting**: Protects the API from abuse

    ## Geometry

    Positions are reconciled from geographic, normalized (0-100, y southward)
    and pixel spaces. Bearings are compass degrees clockwise from north, using
    a flat-earth approximation around the property's reference latitude.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(scenes.router, prefix="/api/v1")
app.include_router(viewpoints.router, prefix="/api/v1")
app.include_router(growth.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
