"""
Infrastructure layer: read-only garden records API client with retry logic.
"""
from typing import Any, List, Optional, Tuple
import logging

import httpx
from pydantic import ValidationError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from gardenscope.config import settings
from gardenscope.domain.models import PlantRecord, ViewpointRecord
from gardenscope.infrastructure.api_constants import APIConstants, GardenAPIEndpoints
from gardenscope.infrastructure.exceptions import ExternalAPIError, InvalidResponseError

logger = logging.getLogger(__name__)

INVALID_RESPONSE = "Garden API returned an invalid response"


class _RetryableStatusError(Exception):
    """Server-side (5xx) failure that is worth retrying."""

    def __init__(self, response: httpx.Response):
        super().__init__(f"{response.status_code} - {response.text}")
        self.response = response


class GardenAPIClient:
    """
    Client for the garden records API (viewpoint photos and plants).
    Implements retry logic with exponential backoff for GET requests.
    """

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None):
        """Initialize the API client with configuration."""
        self.base_url = base_url or settings.garden_api_base_url
        self.api_key = api_key if api_key is not None else settings.garden_api_key
        headers = {"accept": APIConstants.CONTENT_TYPE_JSON}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=APIConstants.DEFAULT_TIMEOUT,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "GardenAPIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((_RetryableStatusError, httpx.TransportError)),
        reraise=True,
    )
    async def _send_with_retry(self, method: str, url: str, **kwargs) -> httpx.Response:
        response = await self.client.request(method, url, **kwargs)
        if response.status_code >= 500:
            logger.warning(f"Garden API {method} {url} returned {response.status_code}, retrying")
            raise _RetryableStatusError(response)
        return response

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        """
        Send a request, retrying server and transport errors.

        Raises:
            ExternalAPIError: On 4xx responses, or when retries are exhausted
        """
        try:
            response = await self._send_with_retry(method, url, **kwargs)
        except _RetryableStatusError as e:
            raise ExternalAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=502,
            )
        except httpx.TransportError as e:
            raise ExternalAPIError(f"API request error: {str(e)}", status_code=503)

        if response.is_error:
            # Don't retry on client errors (4xx)
            raise ExternalAPIError(
                f"API request failed: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )
        return response

    async def _make_request(self, method: str, endpoint: str, **kwargs) -> Any:
        """
        Make an HTTP request and decode the JSON body.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Decoded JSON response

        Raises:
            ExternalAPIError: If the request fails after retries
            InvalidResponseError: If the body is not JSON
        """
        response = await self._send(method, endpoint, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(f"{INVALID_RESPONSE}: {endpoint} is not JSON ({str(e)})")

    @staticmethod
    def _decode_record(model, data: Any, endpoint: str):
        if not isinstance(data, dict):
            raise InvalidResponseError(f"{INVALID_RESPONSE}: {endpoint} expected an object")
        try:
            return model(**data)
        except (ValidationError, TypeError) as e:
            raise InvalidResponseError(f"{INVALID_RESPONSE}: {endpoint} ({str(e)})")

    def _decode_records(self, model, data: Any, endpoint: str) -> list:
        if not isinstance(data, list):
            raise InvalidResponseError(f"{INVALID_RESPONSE}: {endpoint} expected a list")
        return [self._decode_record(model, item, endpoint) for item in data]

    async def get_viewpoint(self, viewpoint_id) -> ViewpointRecord:
        """
        Fetch a single viewpoint photo record.

        Args:
            viewpoint_id: Viewpoint photo ID

        Returns:
            ViewpointRecord instance

        Raises:
            ExternalAPIError: If the request fails (404 when not found)
        """
        endpoint = GardenAPIEndpoints.get_viewpoint(viewpoint_id)
        data = await self._make_request("GET", endpoint)
        return self._decode_record(ViewpointRecord, data, endpoint)

    async def list_viewpoints(self) -> List[ViewpointRecord]:
        """
        Fetch all viewpoint photo records of the property.

        Returns:
            List of ViewpointRecord instances
        """
        endpoint = GardenAPIEndpoints.VIEWPOINT_PHOTOS
        data = await self._make_request("GET", endpoint)
        return self._decode_records(ViewpointRecord, data, endpoint)

    async def get_plan_plants(self, garden_plan_id) -> List[PlantRecord]:
        """
        Fetch the plants of a garden plan.

        Args:
            garden_plan_id: Garden plan ID

        Returns:
            List of PlantRecord instances
        """
        endpoint = GardenAPIEndpoints.get_plan_plants(garden_plan_id)
        data = await self._make_request("GET", endpoint)
        return self._decode_records(PlantRecord, data, endpoint)

    async def download_photo(self, photo_url: str) -> Tuple[bytes, str]:
        """
        Download a viewpoint photograph.

        Args:
            photo_url: Absolute URL or API-relative path of the photo

        Returns:
            Tuple of (image bytes, mime type)
        """
        response = await self._send("GET", photo_url)
        mime_type = response.headers.get("content-type", APIConstants.DEFAULT_IMAGE_MIME_TYPE)
        mime_type = mime_type.split(";")[0].strip() or APIConstants.DEFAULT_IMAGE_MIME_TYPE
        logger.debug(f"Downloaded photo {photo_url}: {len(response.content)} bytes ({mime_type})")
        return response.content, mime_type


# Singleton instance
_garden_client: Optional[GardenAPIClient] = None


def get_garden_client() -> GardenAPIClient:
    """
    Get or create the singleton garden API client instance.

    Returns:
        GardenAPIClient instance
    """
    global _garden_client
    if _garden_client is None:
        _garden_client = GardenAPIClient()
    return _garden_client
