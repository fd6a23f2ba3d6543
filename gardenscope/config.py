"""
Application configuration using Pydantic settings.
"""
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Property bounds (geographic extent of the planning map)
    property_north: float = Field(
        default=49.6409,
        description="Northern edge of the property map in degrees latitude"
    )
    property_south: float = Field(
        default=49.6365,
        description="Southern edge of the property map in degrees latitude"
    )
    property_east: float = Field(
        default=5.5584,
        description="Eastern edge of the property map in degrees longitude"
    )
    property_west: float = Field(
        default=5.5460,
        description="Western edge of the property map in degrees longitude"
    )

    # Planar approximation
    meters_per_degree_lat: float = Field(
        default=111000.0,
        description="Meters per degree of latitude used by the flat-earth approximation"
    )
    reference_latitude: Optional[float] = Field(
        default=None,
        description="Latitude used to scale longitude degrees (defaults to the property center)"
    )

    # Field of view
    fov_strict_half_angle_degrees: float = Field(
        default=30.0,
        description="Half-angle used for strict visibility filtering (default mode)"
    )
    fov_inclusive_half_angle_degrees: float = Field(
        default=40.0,
        description="Half-angle used for inclusive visibility filtering"
    )

    # Scene composition
    depth_foreground_max_m: float = Field(
        default=15.0,
        description="Maximum distance in meters for the foreground depth bucket"
    )
    depth_middle_max_m: float = Field(
        default=35.0,
        description="Maximum distance in meters for the middle-ground depth bucket"
    )
    max_scene_instructions: int = Field(
        default=4,
        ge=1,
        description="Maximum number of placement instructions rendered per composition"
    )

    # Garden records API (read-only viewpoints and plants)
    garden_api_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL for the garden records API"
    )
    garden_api_key: str = Field(
        default="",
        description="Bearer token for the garden records API"
    )

    # Retry Configuration (garden records API only)
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for API calls"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=4,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )

    # Image generation collaborator
    image_api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL for the generative image API"
    )
    image_api_key: str = Field(
        default="",
        description="API key for the generative image API"
    )
    image_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Image model used to transform viewpoint photographs"
    )
    image_timeout_seconds: float = Field(
        default=90.0,
        description="Timeout for a single image generation request"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="GardenScope Viewpoint Engine",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
