"""
Unit tests for the garden records API client.

Tests cover:
- Successful API responses
- Retry logic on 5xx and transport errors
- No retry on 4xx errors
- Async context manager
- Photo download
- Undecodable or wrongly shaped bodies
"""
import pytest
import httpx
import respx
from unittest.mock import AsyncMock

from gardenscope.domain.models import PlantRecord, ViewpointRecord
from gardenscope.infrastructure.exceptions import ExternalAPIError, InvalidResponseError
from gardenscope.infrastructure.garden_api_client import (
    GardenAPIClient,
    get_garden_client,
)


VIEWPOINT_JSON = {
    "id": 3,
    "name": "Terrace",
    "description": "View from the terrace",
    "capture_date": "2025-04-12",
    "camera_position": {"x": 45.0, "y": 70.0},
    "camera_direction": 10.0,
    "coverage_area": {"xmin": 20, "xmax": 80, "ymin": 0, "ymax": 60},
    "photo_url": "/rails/active_storage/blobs/terrace.jpg",
}

PLANT_JSON = {
    "id": 11,
    "species": "Quercus robur",
    "common_name": "English Oak",
    "category": "tree",
    "location": {"lat": 49.6390, "lng": 5.5522},
    "planted_date": "2020-04-01",
}


# ============================================================
# API Client Initialization Tests
# ============================================================

class TestAPIClientInitialization:
    """Tests for API client initialization."""

    def test_client_initialization(self):
        """Client should initialize with correct configuration."""
        client = GardenAPIClient()

        assert client.base_url is not None
        assert client.client is not None

    def test_bearer_token_header(self):
        client = GardenAPIClient(api_key="secret")

        assert client.client.headers["Authorization"] == "Bearer secret"

    def test_singleton_pattern(self):
        """get_garden_client should return the same instance."""
        import gardenscope.infrastructure.garden_api_client as module
        module._garden_client = None

        client1 = get_garden_client()
        client2 = get_garden_client()

        assert client1 is client2


# ============================================================
# Async Context Manager Tests
# ============================================================

class TestAsyncContextManager:
    """Tests for async context manager functionality."""

    @pytest.mark.asyncio
    async def test_context_manager_enter(self):
        """__aenter__ should return the client instance."""
        client = GardenAPIClient()

        async with client as ctx_client:
            assert ctx_client is client

    @pytest.mark.asyncio
    async def test_context_manager_exit_closes_client(self):
        """__aexit__ should close the HTTP client."""
        client = GardenAPIClient()
        client.close = AsyncMock()

        async with client:
            pass

        client.close.assert_called_once()


# ============================================================
# API Response Tests
# ============================================================

class TestAPIResponses:
    """Tests for API response handling."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_viewpoint(self):
        """get_viewpoint should return a ViewpointRecord."""
        client = GardenAPIClient(base_url="http://garden.test")
        respx.get("http://garden.test/api/v1/property/viewpoint_photos/3").mock(
            return_value=httpx.Response(200, json=VIEWPOINT_JSON)
        )

        result = await client.get_viewpoint(3)

        assert isinstance(result, ViewpointRecord)
        assert result.camera_position == {"x": 45.0, "y": 70.0}
        assert result.coverage_area.xmax == 80
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_viewpoints(self):
        client = GardenAPIClient(base_url="http://garden.test")
        respx.get("http://garden.test/api/v1/property/viewpoint_photos").mock(
            return_value=httpx.Response(200, json=[VIEWPOINT_JSON, {**VIEWPOINT_JSON, "id": 4, "coverage_area": None}])
        )

        result = await client.list_viewpoints()

        assert [v.id for v in result] == [3, 4]
        assert result[1].coverage_area is None
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_plan_plants(self):
        """Plants with a nested location should be lifted to latitude/longitude."""
        client = GardenAPIClient(base_url="http://garden.test")
        respx.get("http://garden.test/api/v1/property/garden_plans/5/plants").mock(
            return_value=httpx.Response(200, json=[PLANT_JSON])
        )

        result = await client.get_plan_plants(5)

        assert isinstance(result[0], PlantRecord)
        assert result[0].latitude == 49.6390
        assert result[0].planted_date.year == 2020
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_download_photo(self):
        client = GardenAPIClient(base_url="http://garden.test")
        respx.get("http://garden.test/rails/active_storage/blobs/terrace.jpg").mock(
            return_value=httpx.Response(200, content=b"jpeg", headers={"content-type": "image/png; charset=binary"})
        )

        data, mime_type = await client.download_photo("/rails/active_storage/blobs/terrace.jpg")

        assert data == b"jpeg"
        assert mime_type == "image/png"
        await client.close()


# ============================================================
# Error Handling Tests
# ============================================================

class TestErrorHandling:
    """Tests for error handling."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_4xx_error_no_retry(self):
        """4xx errors should not trigger retry and keep their status."""
        client = GardenAPIClient(base_url="http://garden.test")
        respx.get("http://garden.test/test").mock(
            return_value=httpx.Response(404, text="Not Found")
        )

        with pytest.raises(ExternalAPIError, match="404") as exc_info:
            await client._make_request("GET", "/test")

        assert exc_info.value.status_code == 404
        assert respx.calls.call_count == 1
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_5xx_error_triggers_retry(self):
        """5xx errors should trigger retry."""
        client = GardenAPIClient(base_url="http://garden.test")
        route = respx.get("http://garden.test/test")
        route.side_effect = [
            httpx.Response(500, text="Internal Server Error"),
            httpx.Response(200, json={"result": "success"}),
        ]

        result = await client._make_request("GET", "/test")

        assert result == {"result": "success"}
        assert respx.calls.call_count == 2
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_5xx_exhausts_retries(self):
        """Persistent 5xx errors surface as a 502 after all attempts."""
        client = GardenAPIClient(base_url="http://garden.test")
        respx.get("http://garden.test/test").mock(
            return_value=httpx.Response(503, text="Unavailable")
        )

        with pytest.raises(ExternalAPIError) as exc_info:
            await client._make_request("GET", "/test")

        assert exc_info.value.status_code == 502
        assert respx.calls.call_count == 3
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_retried(self):
        client = GardenAPIClient(base_url="http://garden.test")
        route = respx.get("http://garden.test/test")
        route.side_effect = [
            httpx.ConnectError("connection refused"),
            httpx.Response(200, json=[]),
        ]

        assert await client._make_request("GET", "/test") == []
        assert respx.calls.call_count == 2
        await client.close()


# ============================================================
# Invalid Response Tests
# ============================================================

class TestInvalidResponses:
    """Tests for bodies that cannot be decoded into records."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_body(self):
        """A 200 with an HTML body is an upstream fault, not a client error."""
        client = GardenAPIClient(base_url="http://garden.test")
        respx.get("http://garden.test/api/v1/property/viewpoint_photos/7").mock(
            return_value=httpx.Response(200, text="oops")
        )

        with pytest.raises(InvalidResponseError) as exc_info:
            await client.get_viewpoint(7)

        assert exc_info.value.status_code == 502
        assert not isinstance(exc_info.value, ValueError)
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_where_record_expected(self):
        client = GardenAPIClient(base_url="http://garden.test")
        respx.get("http://garden.test/api/v1/property/viewpoint_photos/3").mock(
            return_value=httpx.Response(200, json=[VIEWPOINT_JSON])
        )

        with pytest.raises(InvalidResponseError, match="expected an object"):
            await client.get_viewpoint(3)

        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_object_where_list_expected(self):
        client = GardenAPIClient(base_url="http://garden.test")
        respx.get("http://garden.test/api/v1/property/viewpoint_photos").mock(
            return_value=httpx.Response(200, json={"viewpoints": [VIEWPOINT_JSON]})
        )

        with pytest.raises(InvalidResponseError, match="expected a list"):
            await client.list_viewpoints()

        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_object_list_item(self):
        client = GardenAPIClient(base_url="http://garden.test")
        respx.get("http://garden.test/api/v1/property/garden_plans/5/plants").mock(
            return_value=httpx.Response(200, json=[PLANT_JSON, "not-a-plant"])
        )

        with pytest.raises(InvalidResponseError) as exc_info:
            await client.get_plan_plants(5)

        assert exc_info.value.status_code == 502
        await client.close()
