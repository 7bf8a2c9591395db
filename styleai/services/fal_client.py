"""Client for the hosted image-generation endpoints."""

import logging
from typing import Any

import httpx

from ..config import FalConfig, RetryConfig
from ..errors import ConfigurationError, MalformedResponseError, ServiceUnreachableError
from ..utils.image_encoding import ChunkedBase64Encoder, detect_mime_type
from .hosted_client import HostedServiceClient

logger = logging.getLogger(__name__)


def extract_image_url(result: dict[str, Any]) -> str:
    """Pull the output URL from either response shape.

    Edit and text-to-image models answer ``{"images": [{"url": ...}]}``; the
    garment-transfer model answers ``{"image": {"url": ...}}``.
    """
    image = result.get("image") if isinstance(result, dict) else None
    if isinstance(image, dict) and image.get("url"):
        return image["url"]

    images = result.get("images") if isinstance(result, dict) else None
    if isinstance(images, list) and images:
        first = images[0]
        if isinstance(first, dict) and first.get("url"):
            return first["url"]

    raise MalformedResponseError("No image was produced by the image generation service")


class FalImageClient(HostedServiceClient):
    """Runs image models synchronously and downloads their output."""

    service_name = "Image generation service"
    # Only failures before the request reached the provider are retried
    retryable_transport_errors = (httpx.ConnectError, httpx.ConnectTimeout)

    def __init__(
        self,
        config: FalConfig,
        retry: RetryConfig,
        api_key: str | None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(retry=retry, timeout=config.timeout_seconds, transport=transport)
        self.config = config
        self.api_key = api_key

    def _auth_headers(self) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("FAL_KEY not configured")
        return {"Authorization": f"Key {self.api_key}"}

    async def run(self, endpoint: str, payload: dict[str, Any]) -> str:
        """Invoke ``endpoint`` and return the URL of the generated image."""
        logger.info("Calling %s endpoint %s", self.service_name, endpoint)
        result = await self._post_json(self.config.endpoint_url(endpoint), payload)
        return extract_image_url(result)

    async def fetch_as_data_url(self, url: str) -> str:
        """Download a generated image and inline it as a data URL.

        The body is streamed and encoded in ``download_chunk_size`` blocks so
        large images are never base64-encoded in one allocation.
        """
        encoder = ChunkedBase64Encoder(self.config.download_chunk_size)
        mime_type = None

        try:
            async with self.client.stream("GET", url) as response:
                if not response.is_success:
                    await response.aread()
                    self._raise_for_status(response)

                content_type = response.headers.get("content-type", "")
                content_type = content_type.split(";")[0].strip().lower()
                if content_type.startswith("image/"):
                    mime_type = content_type

                async for chunk in response.aiter_bytes(self.config.download_chunk_size):
                    if mime_type is None:
                        mime_type = detect_mime_type(chunk)
                    encoder.update(chunk)
        except httpx.TransportError as e:
            raise ServiceUnreachableError(f"Could not download generated image: {e}") from e

        if encoder.total_bytes == 0:
            raise MalformedResponseError("Generated image download was empty")

        logger.info("Downloaded generated image (%d bytes, %s)", encoder.total_bytes, mime_type)
        return f"data:{mime_type or 'image/png'};base64,{encoder.finish()}"
