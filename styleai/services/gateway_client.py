"""Client for the OpenAI-compatible chat-completion gateway."""

import logging
from typing import Any

import httpx

from ..config import GatewayConfig, RetryConfig
from ..errors import ConfigurationError, MalformedResponseError
from .hosted_client import HostedServiceClient

logger = logging.getLogger(__name__)


class ChatGatewayClient(HostedServiceClient):
    """Sends chat-completion requests and returns the reply text."""

    service_name = "AI Gateway"

    def __init__(
        self,
        config: GatewayConfig,
        retry: RetryConfig,
        api_key: str | None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(retry=retry, timeout=retry.timeout_seconds, transport=transport)
        self.config = config
        self.api_key = api_key

    def _auth_headers(self) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("LOVABLE_API_KEY not configured")
        return {"Authorization": f"Bearer {self.api_key}"}

    async def complete(
        self,
        model: str,
        messages: list[dict[str, Any]],
        temperature: float | None = None,
    ) -> str:
        """Run one chat completion and return ``choices[0].message.content``."""
        payload: dict[str, Any] = {"model": model, "messages": messages}
        if temperature is not None:
            payload["temperature"] = temperature

        logger.info("Calling %s with model %s", self.service_name, model)
        result = await self._post_json(self.config.url, payload)

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

        # Some providers answer with a list of content parts
        if isinstance(content, list):
            content = "".join(
                part.get("text", "") for part in content if isinstance(part, dict)
            )

        if not content or not isinstance(content, str):
            raise MalformedResponseError("No content in AI response")
        return content
