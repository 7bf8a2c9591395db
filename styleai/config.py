"""Configuration management for the StyleAI try-on service."""

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class GatewayConfig(BaseModel):
    """Chat-completion gateway settings."""
    url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    person_model: str = "google/gemini-2.5-flash"
    garment_model: str = "openai/gpt-5-mini"
    temperature: float = 0.3  # person analysis only


class RetryConfig(BaseModel):
    """Retry policy for hosted-service calls."""
    max_attempts: int = Field(default=3, ge=1)
    backoff_seconds: float = Field(default=1.0, ge=0.0)  # delay = backoff * attempt
    timeout_seconds: float = 60.0


class FalConfig(BaseModel):
    """Image-generation provider settings."""
    base_url: str = "https://fal.run"
    garment_transfer_endpoint: str = "fal-ai/idm-vton"
    edit_endpoint: str = "fal-ai/flux/dev/image-to-image"
    text_to_image_endpoint: str = "fal-ai/flux/dev"

    # Edit model: lower strength keeps more of the source photo
    edit_strength: float = 0.55
    edit_steps: int = 35
    edit_guidance: float = 8.5
    edit_image_size: str = "landscape_4_3"

    text_steps: int = 28
    text_guidance: float = 3.5
    text_image_size: str = "portrait_4_3"

    timeout_seconds: float = 300.0  # generation can be slow
    download_chunk_size: int = 3 * 64 * 1024

    @field_validator("download_chunk_size")
    @classmethod
    def _multiple_of_three(cls, value: int) -> int:
        if value <= 0 or value % 3:
            raise ValueError("download_chunk_size must be a positive multiple of 3")
        return value

    def endpoint_url(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/{endpoint}"


class StyleAIConfig(BaseSettings):
    """Main service configuration."""

    # Sub-configs
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    fal: FalConfig = Field(default_factory=FalConfig)

    # Secrets (loaded from .env / environment, checked at call time)
    lovable_api_key: str | None = None
    fal_key: str | None = None

    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"
        env_prefix = ""
        env_nested_delimiter = "__"
        extra = "ignore"


def load_config() -> StyleAIConfig:
    """Load configuration from environment and defaults."""
    return StyleAIConfig()
