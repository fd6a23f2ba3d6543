"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Property bounds and planar scale
- A fixed clock for reproducible growth projections
- Sample plants and viewpoints
- Mock API clients
- FastAPI test client
"""
import os

# Retries wait for real otherwise; must be set before settings are imported
os.environ.setdefault("RETRY_MIN_WAIT", "0")
os.environ.setdefault("RETRY_MAX_WAIT", "0")

from datetime import date, timedelta

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from gardenscope.main import app
from gardenscope.domain.models import (
    CameraPose,
    CoverageArea,
    GeoPoint,
    PlantRecord,
    PropertyBounds,
    ViewpointRecord,
)
from gardenscope.infrastructure.garden_api_client import GardenAPIClient
from gardenscope.infrastructure.image_generation_client import ImageGenerationClient
from gardenscope.services.domain.growth_projector import GrowthProjector
from gardenscope.services.domain.scene_composer import SceneComposer
from gardenscope.utils.bearing import PlanarScale


TODAY = date(2025, 6, 1)

CAMERA_LAT = 49.6387
CAMERA_LNG = 5.5522


# ============================================================
# Geometry Fixtures
# ============================================================

@pytest.fixture
def bounds() -> PropertyBounds:
    """Property bounds of the sample garden."""
    return PropertyBounds(north=49.6409, south=49.6365, east=5.5584, west=5.5460)


@pytest.fixture
def scale(bounds) -> PlanarScale:
    """Planar scale referenced at the property center."""
    return PlanarScale.for_bounds(bounds)


@pytest.fixture
def camera() -> CameraPose:
    """Camera in the middle of the garden looking north."""
    return CameraPose(position=GeoPoint(latitude=CAMERA_LAT, longitude=CAMERA_LNG), heading_degrees=0.0)


# ============================================================
# Clock and Service Fixtures
# ============================================================

@pytest.fixture
def today():
    """Fixed clock."""
    return lambda: TODAY


@pytest.fixture
def projector(today) -> GrowthProjector:
    """Growth projector with a fixed clock."""
    return GrowthProjector(today=today)


@pytest.fixture
def composer(bounds, scale, projector, today) -> SceneComposer:
    """Scene composer with default configuration and a fixed clock."""
    return SceneComposer(bounds=bounds, scale=scale, projector=projector, today=today)


# ============================================================
# Sample Data Fixtures
# ============================================================

def offset_point(scale: PlanarScale, east_m: float, north_m: float) -> GeoPoint:
    """Point at a metric offset from the sample camera."""
    origin = GeoPoint(latitude=CAMERA_LAT, longitude=CAMERA_LNG)
    return scale.offset_to_geo(origin, east_m, north_m)


@pytest.fixture
def sample_plants(scale) -> list[PlantRecord]:
    """Plants around the camera: three north (in view), one east, one south, one unlocated."""
    def record(plant_id, east_m, north_m, **kwargs):
        point = offset_point(scale, east_m, north_m)
        return PlantRecord(id=plant_id, latitude=point.latitude, longitude=point.longitude, **kwargs)

    return [
        record(1, 0.0, 30.0, species="Quercus robur", common_name="English Oak",
               category="tree", planted_date=TODAY - timedelta(days=1826)),
        record(2, -5.0, 10.0, species="Corylus avellana", common_name="Hazel",
               category="shrub", planted_date=TODAY - timedelta(days=730)),
        record(3, 10.0, 50.0, species="Malus domestica", common_name="Apple",
               category="fruit_tree", planted_date=TODAY - timedelta(days=365)),
        record(4, 40.0, 0.0, species="Betula pendula", common_name="Silver Birch", category="tree"),
        record(5, 0.0, -20.0, species="Rosa canina", common_name="Dog Rose", category="shrub"),
        PlantRecord(id=6, species="Lavandula angustifolia", common_name="Lavender", category="perennial"),
    ]


@pytest.fixture
def sample_viewpoint() -> ViewpointRecord:
    """Configured viewpoint looking north from the sample camera."""
    return ViewpointRecord(
        id=7,
        name="Terrace",
        camera_position={"lat": CAMERA_LAT, "lng": CAMERA_LNG},
        camera_direction=0.0,
        coverage_area=CoverageArea(xmin=20, xmax=80, ymin=0, ymax=60),
        photo_url="http://localhost:3000/rails/active_storage/terrace.jpg",
    )


# ============================================================
# Mock API Client Fixtures
# ============================================================

@pytest.fixture
def mock_garden_client(sample_viewpoint, sample_plants):
    """Create a mock garden records API client."""
    mock_client = AsyncMock(spec=GardenAPIClient)
    mock_client.get_viewpoint.return_value = sample_viewpoint
    mock_client.list_viewpoints.return_value = [sample_viewpoint]
    mock_client.get_plan_plants.return_value = sample_plants
    mock_client.download_photo.return_value = (b"photo-bytes", "image/jpeg")
    return mock_client


@pytest.fixture
def mock_image_client():
    """Create a mock image generation client."""
    from gardenscope.infrastructure.image_generation_client import GeneratedImage

    mock_client = AsyncMock(spec=ImageGenerationClient)
    mock_client.generate.return_value = GeneratedImage(
        data=b"generated-bytes",
        mime_type="image/png",
        description="The oak now shades the terrace.",
    )
    return mock_client


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
