"""Error types raised inside StyleAI components.

Public entry points (analyzers, synthesizer, pipeline) never let these escape;
they are turned into structured result objects carrying ``error`` strings.
"""


class StyleAIError(Exception):
    """Base class. ``message`` is safe to show to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(StyleAIError):
    """A required setting (usually an API key) is missing."""


class InputError(StyleAIError):
    """The user has not supplied enough input to start a generation."""


class MalformedResponseError(StyleAIError):
    """A hosted model answered, but not with something we can use."""


class ServiceUnreachableError(StyleAIError):
    """Connection failure or timeout talking to a hosted service."""


class ProviderError(StyleAIError):
    """Non-2xx response from a hosted service."""

    def __init__(self, service: str, status_code: int, body: str, message: str | None = None):
        self.service = service
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"{service} error: {status_code} - {body}")

    @property
    def is_transient(self) -> bool:
        return self.status_code >= 500


class RateLimitError(ProviderError):
    """HTTP 429. Never retried."""

    def __init__(self, service: str, body: str = ""):
        super().__init__(
            service, 429, body,
            message="Rate limit exceeded. Please wait a moment and try again.",
        )


class PaymentRequiredError(ProviderError):
    """HTTP 402. Never retried."""

    def __init__(self, service: str, body: str = ""):
        super().__init__(
            service, 402, body,
            message="AI usage credits are exhausted. Please add credits to continue.",
        )
