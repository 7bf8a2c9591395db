"""Unit tests for the hosted-service clients' retry and error handling."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from conftest import chat_response
from styleai.config import GatewayConfig, RetryConfig
from styleai.errors import (
    ConfigurationError,
    MalformedResponseError,
    PaymentRequiredError,
    ProviderError,
    RateLimitError,
    ServiceUnreachableError,
)
from styleai.services import ChatGatewayClient


class CallRecorder:
    """MockTransport handler that replays a list of responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses[min(len(self.requests), len(self.responses)) - 1]
        if isinstance(response, Exception):
            raise response
        # Fresh copy so the same canned response can be served repeatedly
        return httpx.Response(
            response.status_code, headers=response.headers, content=response.content
        )


def make_client(handler, api_key="test-key", max_attempts=3, backoff=0.0):
    return ChatGatewayClient(
        config=GatewayConfig(),
        retry=RetryConfig(max_attempts=max_attempts, backoff_seconds=backoff),
        api_key=api_key,
        transport=httpx.MockTransport(handler),
    )


MESSAGES = [{"role": "user", "content": "hello"}]


class TestRetryPolicy:
    """Which failures are retried, and how often."""

    @pytest.mark.asyncio
    async def test_always_503_makes_exactly_max_attempts(self):
        """A permanently failing server is tried max_attempts times, then gives up."""
        recorder = CallRecorder(httpx.Response(503, text="upstream unavailable"))
        client = make_client(recorder)

        with pytest.raises(ProviderError) as exc_info:
            await client.complete("test-model", MESSAGES)

        assert len(recorder.requests) == 3
        assert exc_info.value.status_code == 503
        assert "upstream unavailable" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_attempt_ceiling_is_configurable(self):
        recorder = CallRecorder(httpx.Response(500))
        client = make_client(recorder, max_attempts=5)

        with pytest.raises(ProviderError):
            await client.complete("test-model", MESSAGES)

        assert len(recorder.requests) == 5

    @pytest.mark.asyncio
    async def test_429_is_not_retried(self):
        recorder = CallRecorder(httpx.Response(429, text="slow down"))
        client = make_client(recorder)

        with pytest.raises(RateLimitError) as exc_info:
            await client.complete("test-model", MESSAGES)

        assert len(recorder.requests) == 1
        assert "rate limit" in exc_info.value.message.lower()

    @pytest.mark.asyncio
    async def test_402_is_not_retried(self):
        recorder = CallRecorder(httpx.Response(402, text="payment required"))
        client = make_client(recorder)

        with pytest.raises(PaymentRequiredError) as exc_info:
            await client.complete("test-model", MESSAGES)

        assert len(recorder.requests) == 1
        assert "credits" in exc_info.value.message.lower()

    def test_rate_limit_and_payment_messages_differ(self):
        assert RateLimitError("svc").message != PaymentRequiredError("svc").message

    @pytest.mark.asyncio
    async def test_other_4xx_is_terminal(self):
        recorder = CallRecorder(httpx.Response(400, text="bad request"))
        client = make_client(recorder)

        with pytest.raises(ProviderError) as exc_info:
            await client.complete("test-model", MESSAGES)

        assert len(recorder.requests) == 1
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_error_body_surfaced_in_full(self):
        body = "invalid request: " + "x" * 2000
        recorder = CallRecorder(httpx.Response(400, text=body))
        client = make_client(recorder)

        with pytest.raises(ProviderError) as exc_info:
            await client.complete("test-model", MESSAGES)

        assert exc_info.value.body == body
        assert exc_info.value.message == f"AI Gateway error: 400 - {body}"

    @pytest.mark.asyncio
    async def test_read_timeouts_are_retried(self):
        recorder = CallRecorder(httpx.ReadTimeout("timed out"))
        client = make_client(recorder)

        with pytest.raises(ServiceUnreachableError):
            await client.complete("test-model", MESSAGES)

        assert len(recorder.requests) == 3

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failure(self):
        recorder = CallRecorder(
            httpx.Response(502),
            chat_response('{"ok": true}'),
        )
        client = make_client(recorder)

        content = await client.complete("test-model", MESSAGES)

        assert content == '{"ok": true}'
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_connection_errors_are_retried(self):
        recorder = CallRecorder(httpx.ConnectError("connection refused"))
        client = make_client(recorder)

        with pytest.raises(ServiceUnreachableError):
            await client.complete("test-model", MESSAGES)

        assert len(recorder.requests) == 3

    @pytest.mark.asyncio
    async def test_backoff_grows_linearly(self):
        recorder = CallRecorder(httpx.Response(503))
        client = make_client(recorder, backoff=1.5)

        with patch("styleai.services.hosted_client.asyncio.sleep", new=AsyncMock()) as sleep:
            with pytest.raises(ProviderError):
                await client.complete("test-model", MESSAGES)

        assert [call.args[0] for call in sleep.await_args_list] == [1.5, 3.0]


class TestGatewayRequests:
    """Request shape and response parsing."""

    @pytest.mark.asyncio
    async def test_missing_api_key_fails_before_any_call(self):
        recorder = CallRecorder(chat_response("{}"))
        client = make_client(recorder, api_key=None)

        with pytest.raises(ConfigurationError) as exc_info:
            await client.complete("test-model", MESSAGES)

        assert "LOVABLE_API_KEY" in exc_info.value.message
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_sends_bearer_token_and_payload(self):
        recorder = CallRecorder(chat_response("{}"))
        client = make_client(recorder)

        await client.complete("google/gemini-2.5-flash", MESSAGES, temperature=0.3)

        request = recorder.requests[0]
        assert request.headers["Authorization"] == "Bearer test-key"
        body = httpx.Response(200, content=request.content).json()
        assert body["model"] == "google/gemini-2.5-flash"
        assert body["messages"] == MESSAGES
        assert body["temperature"] == 0.3

    @pytest.mark.asyncio
    async def test_temperature_omitted_when_not_given(self):
        recorder = CallRecorder(chat_response("{}"))
        client = make_client(recorder)

        await client.complete("openai/gpt-5-mini", MESSAGES)

        body = httpx.Response(200, content=recorder.requests[0].content).json()
        assert "temperature" not in body

    @pytest.mark.asyncio
    async def test_missing_content_is_malformed(self):
        recorder = CallRecorder(httpx.Response(200, json={"choices": []}))
        client = make_client(recorder)

        with pytest.raises(MalformedResponseError):
            await client.complete("test-model", MESSAGES)

        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_content_parts_are_joined(self):
        body = {"choices": [{"message": {"content": [
            {"type": "text", "text": '{"a": '},
            {"type": "text", "text": "1}"},
        ]}}]}
        recorder = CallRecorder(httpx.Response(200, json=body))
        client = make_client(recorder)

        assert await client.complete("test-model", MESSAGES) == '{"a": 1}'
