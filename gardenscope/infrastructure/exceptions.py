"""
Infrastructure exceptions raised by external API clients.
"""


class ExternalAPIError(Exception):
    """Custom exception for external API errors."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ImageGenerationError(ExternalAPIError):
    """The image collaborator failed, timed out, or returned no image."""
    pass


class InvalidResponseError(ExternalAPIError):
    """An upstream API answered, but with a body that cannot be decoded."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message, status_code=status_code)
