"""
API endpoint constants and configuration.

This module contains all external API endpoint paths and related constants.
Centralizing these values makes it easy to swap out endpoints or update API versions.
"""


# Garden records API endpoints (read-only use)
class GardenAPIEndpoints:
    """Garden records API endpoint paths."""

    # Base paths
    PROPERTY_BASE = "/api/v1/property"

    # Viewpoint photo endpoints
    VIEWPOINT_PHOTOS = f"{PROPERTY_BASE}/viewpoint_photos"
    VIEWPOINT_PHOTO_BY_ID = f"{PROPERTY_BASE}/viewpoint_photos/{{viewpoint_id}}"

    # Plant endpoints
    GARDEN_PLAN_PLANTS = f"{PROPERTY_BASE}/garden_plans/{{garden_plan_id}}/plants"

    @classmethod
    def get_viewpoint(cls, viewpoint_id) -> str:
        """
        Get the endpoint for a single viewpoint photo.

        Args:
            viewpoint_id: Viewpoint photo ID

        Returns:
            Formatted endpoint path
        """
        return cls.VIEWPOINT_PHOTO_BY_ID.format(viewpoint_id=viewpoint_id)

    @classmethod
    def get_plan_plants(cls, garden_plan_id) -> str:
        """
        Get the plants endpoint for a garden plan.

        Args:
            garden_plan_id: Garden plan ID

        Returns:
            Formatted endpoint path
        """
        return cls.GARDEN_PLAN_PLANTS.format(garden_plan_id=garden_plan_id)


# Generative image API endpoints
class ImageAPIEndpoints:
    """Generative image API endpoint paths."""

    GENERATE_CONTENT = "/models/{model}:generateContent"

    @classmethod
    def generate_content(cls, model: str) -> str:
        return cls.GENERATE_CONTENT.format(model=model)


# API Configuration Constants
class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"
    API_KEY_HEADER = "x-goog-api-key"

    # Timeouts (in seconds)
    DEFAULT_TIMEOUT = 30.0

    # Image handling
    DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"
    SUPPORTED_IMAGE_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")
