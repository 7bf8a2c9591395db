"""Shared HTTP plumbing for hosted AI services."""

import asyncio
import logging
from typing import Any

import httpx

from ..config import RetryConfig
from ..errors import (
    MalformedResponseError,
    PaymentRequiredError,
    ProviderError,
    RateLimitError,
    ServiceUnreachableError,
)

logger = logging.getLogger(__name__)


class HostedServiceClient:
    """Base client: bearer-style auth, JSON POST, bounded retries.

    Retry policy: 5xx responses and ``retryable_transport_errors`` are retried up to
    ``retry.max_attempts`` times, waiting ``backoff_seconds * attempt`` between
    attempts. 429 and 402 fail immediately with their own error types; every
    other non-2xx status fails immediately as a ``ProviderError``.
    """

    service_name = "Hosted service"
    # Transport failures worth another attempt; subclasses may narrow this
    retryable_transport_errors: tuple[type[httpx.TransportError], ...] = (httpx.TransportError,)

    def __init__(
        self,
        retry: RetryConfig,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.retry = retry
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    def _auth_headers(self) -> dict[str, str]:
        """Headers carrying the credential. Raises ConfigurationError if unset."""
        raise NotImplementedError

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        body = response.text
        if response.status_code == 429:
            raise RateLimitError(self.service_name, body)
        if response.status_code == 402:
            raise PaymentRequiredError(self.service_name, body)
        raise ProviderError(self.service_name, response.status_code, body)

    async def _post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST ``payload`` and return the decoded JSON body."""
        headers = self._auth_headers()
        max_attempts = self.retry.max_attempts

        for attempt in range(1, max_attempts + 1):
            try:
                response = await self.client.post(url, json=payload, headers=headers)
                self._raise_for_status(response)
            except httpx.TransportError as e:
                error = ServiceUnreachableError(f"Could not reach {self.service_name}: {e}")
                if not isinstance(e, self.retryable_transport_errors):
                    logger.error("%s request failed: %s", self.service_name, error.message)
                    raise error from e
            except ProviderError as e:
                if not e.is_transient:
                    logger.error("%s rejected request: %s", self.service_name, e.message)
                    raise
                error = e
            else:
                try:
                    return response.json()
                except ValueError as e:
                    raise MalformedResponseError(
                        f"{self.service_name} returned a non-JSON response"
                    ) from e

            if attempt == max_attempts:
                logger.error(
                    "%s failed after %d attempts: %s", self.service_name, attempt, error.message
                )
                raise error

            wait_time = self.retry.backoff_seconds * attempt
            logger.warning(
                "%s attempt %d/%d failed (%s), retrying in %.1fs",
                self.service_name, attempt, max_attempts, error.message, wait_time,
            )
            await asyncio.sleep(wait_time)

        # max_attempts >= 1, so the loop always returns or raises
        raise AssertionError("unreachable")

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
