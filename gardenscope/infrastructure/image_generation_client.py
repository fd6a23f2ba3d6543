"""
Infrastructure layer: generative image collaborator.

Sends a viewpoint photograph together with the composed prompt and returns
the transformed image. A single attempt is made per request; the caller
decides how to degrade when generation fails.
"""
from dataclasses import dataclass
from typing import Optional
import base64
import logging

import httpx

from gardenscope.config import settings
from gardenscope.infrastructure.api_constants import APIConstants, ImageAPIEndpoints
from gardenscope.infrastructure.exceptions import ImageGenerationError

logger = logging.getLogger(__name__)

UNREADABLE_RESPONSE = "Image generation returned an unreadable response"


@dataclass
class GeneratedImage:
    """Image returned by the collaborator."""

    data: bytes
    """Raw image bytes"""

    mime_type: str
    """Mime type reported by the collaborator"""

    description: Optional[str] = None
    """Accompanying text part, if the model returned one"""


class ImageGenerationClient:
    """Client for the generative image API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url or settings.image_api_base_url
        self.api_key = api_key if api_key is not None else settings.image_api_key
        self.model = model or settings.image_model
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"content-type": APIConstants.CONTENT_TYPE_JSON},
            timeout=timeout or settings.image_timeout_seconds,
        )

    async def __aenter__(self) -> "ImageGenerationClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, image_data: bytes, mime_type: str, prompt: str) -> dict:
        """
        Request body carrying the source photograph followed by the prompt.

        Args:
            image_data: Source photograph bytes
            mime_type: Mime type of the photograph
            prompt: Composed prompt text

        Returns:
            JSON-serializable request body
        """
        if mime_type not in APIConstants.SUPPORTED_IMAGE_MIME_TYPES:
            mime_type = APIConstants.DEFAULT_IMAGE_MIME_TYPE
        return {
            "contents": [{
                "parts": [
                    {
                        "inline_data": {
                            "mime_type": mime_type,
                            "data": base64.b64encode(image_data).decode("ascii"),
                        }
                    },
                    {"text": prompt},
                ]
            }],
            "generationConfig": {"responseModalities": ["TEXT", "IMAGE"]},
        }

    async def generate(self, image_data: bytes, mime_type: str, prompt: str) -> GeneratedImage:
        """
        Transform a photograph according to the prompt.

        Args:
            image_data: Source photograph bytes
            mime_type: Mime type of the photograph
            prompt: Composed prompt text

        Returns:
            GeneratedImage

        Raises:
            ImageGenerationError: If the collaborator is not configured, fails,
                times out, or returns no image
        """
        if not self.is_configured:
            raise ImageGenerationError("Image generation is not configured", status_code=503)

        endpoint = ImageAPIEndpoints.generate_content(self.model)
        logger.info(f"Requesting image generation with {self.model} ({len(image_data)} byte photo)")

        try:
            response = await self.client.post(
                endpoint,
                json=self.build_payload(image_data, mime_type, prompt),
                headers={APIConstants.API_KEY_HEADER: self.api_key},
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ImageGenerationError(f"Image generation timed out: {str(e)}", status_code=504)
        except httpx.HTTPStatusError as e:
            raise ImageGenerationError(
                f"Image generation failed: {e.response.status_code} - {e.response.text}"
            )
        except httpx.HTTPError as e:
            raise ImageGenerationError(f"Image generation error: {str(e)}")

        try:
            return self.parse_response(response.json())
        except ValueError as e:
            raise ImageGenerationError(f"{UNREADABLE_RESPONSE}: {str(e)}")

    @staticmethod
    def parse_response(body: dict) -> GeneratedImage:
        """
        Extract the first image part and any text parts from a response body.

        Raises:
            ImageGenerationError: If the response carries no image or cannot be read
        """
        if not isinstance(body, dict):
            raise ImageGenerationError(UNREADABLE_RESPONSE)

        image: Optional[GeneratedImage] = None
        texts = []
        try:
            for candidate in body.get("candidates") or []:
                parts = (candidate.get("content") or {}).get("parts") or []
                for part in parts:
                    inline = part.get("inlineData") or part.get("inline_data")
                    if inline and image is None and inline.get("data"):
                        image = GeneratedImage(
                            data=base64.b64decode(inline["data"], validate=True),
                            mime_type=inline.get("mimeType") or inline.get("mime_type")
                            or APIConstants.DEFAULT_IMAGE_MIME_TYPE,
                        )
                    elif part.get("text"):
                        texts.append(str(part["text"]).strip())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise ImageGenerationError(f"{UNREADABLE_RESPONSE}: {str(e)}")

        if image is None:
            raise ImageGenerationError("Image generation returned no image")

        image.description = "\n".join(t for t in texts if t) or None
        logger.info(f"Received generated image ({len(image.data)} bytes, {image.mime_type})")
        return image


# Singleton instance
_image_client: Optional[ImageGenerationClient] = None


def get_image_client() -> ImageGenerationClient:
    """
    Get or create the singleton image generation client instance.

    Returns:
        ImageGenerationClient instance
    """
    global _image_client
    if _image_client is None:
        _image_client = ImageGenerationClient()
    return _image_client
