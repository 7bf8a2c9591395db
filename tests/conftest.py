# Test fixtures and configuration
import base64
import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from styleai.config import RetryConfig, StyleAIConfig  # noqa: E402


@pytest.fixture
def sample_descriptions():
    """Sample free-text inputs as users type them."""
    return {
        "person_tall": "tall athletic build",
        "person_metric": "Woman, 172 cm, curvy with a defined waist",
        "person_imperial": "I'm 5'8\" with broad shoulders",
        "garment_dress": "red dress",
        "garment_blazer": (
            "A classic navy blazer updated with modern tailoring. Single-breasted "
            "with notch lapels. Two-button closure."
        ),
    }


@pytest.fixture
def minimal_png_bytes():
    """Minimal valid PNG image bytes."""
    return bytes([
        0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,  # PNG signature
        0x00, 0x00, 0x00, 0x0D, 0x49, 0x48, 0x44, 0x52,  # IHDR chunk
        0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01,  # 1x1 dimensions
        0x08, 0x02, 0x00, 0x00, 0x00, 0x90, 0x77, 0x53,
        0xDE, 0x00, 0x00, 0x00, 0x0C, 0x49, 0x44, 0x41,  # IDAT chunk
        0x54, 0x08, 0xD7, 0x63, 0xF8, 0xCF, 0xC0, 0x00,
        0x00, 0x00, 0x03, 0x00, 0x01, 0x00, 0x05, 0xFE,
        0xD4, 0xAA, 0x00, 0x00, 0x00, 0x00, 0x49, 0x45,  # IEND chunk
        0x4E, 0x44, 0xAE, 0x42, 0x60, 0x82
    ])


@pytest.fixture
def png_data_url(minimal_png_bytes):
    """Minimal PNG as an inline data URL."""
    return f"data:image/png;base64,{base64.b64encode(minimal_png_bytes).decode()}"


@pytest.fixture
def test_config():
    """Config with test credentials and no retry delay."""
    return StyleAIConfig(
        lovable_api_key="test-gateway-key",
        fal_key="test-fal-key",
        retry=RetryConfig(max_attempts=3, backoff_seconds=0.0, timeout_seconds=5.0),
    )


def chat_response(content: str, status_code: int = 200) -> httpx.Response:
    """Chat-completion response whose reply text is ``content``."""
    body = {"choices": [{"message": {"role": "assistant", "content": content}}]}
    return httpx.Response(status_code, json=body)


def person_reply(**overrides) -> str:
    data = {
        "skinTone": "medium, warm undertone",
        "bodyShape": "hourglass",
        "heightCm": 168,
        "ethnicity": "Latino",
        "sizeEstimate": "M",
        "notes": "Balanced proportions.",
    }
    data.update(overrides)
    return json.dumps(data)


def garment_reply(**overrides) -> str:
    data = {
        "category": "dress",
        "color": "red",
        "pattern": "solid",
        "material": "silk",
        "fit": "fitted",
        "style": "formal",
        "occasion": "date night",
        "notes": "Pair with neutral heels.",
    }
    data.update(overrides)
    return json.dumps(data)
