"""Attribute extractors - turn a photo and/or text into a structured profile."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from ..errors import MalformedResponseError, StyleAIError
from ..models import AnalysisResult, GarmentAttributes, PersonAttributes
from ..models.vocabulary import (
    BODY_SHAPES,
    GARMENT_CATEGORIES,
    GARMENT_FITS,
    GARMENT_PATTERNS,
    GARMENT_STYLES,
    SIZES,
    canonical,
)
from ..services import ChatGatewayClient
from ..utils.hints import coerce_height, parse_body_shape, parse_height_cm
from ..utils.image_encoding import encode_data_url, is_data_url

logger = logging.getLogger(__name__)


def _quoted(values: tuple[str, ...]) -> str:
    return ", ".join(f'"{v}"' for v in values)


PERSON_ANALYSIS_PROMPT = f"""You are an AI fashion stylist assistant. Analyze the provided information about a person and create a structured profile for virtual try-on and fashion recommendations.

CRITICAL INSTRUCTION: Do NOT answer "unknown" when there is any clue at all. Use the photo, the description, and logical inference to give your best estimate for EVERY field.

Extract or infer the following attributes:
- skinTone: Describe the skin tone (e.g., "fair, cool undertone", "medium-deep, warm undertone", "deep, neutral undertone")
- bodyShape: One of: {_quoted(BODY_SHAPES)}
- heightCm: Height in centimeters as a whole number, or null only if there is truly no basis for an estimate
- ethnicity: Inferred or described ethnicity (e.g., "Black", "Asian", "Caucasian", "Latino", "Mixed")
- sizeEstimate: One of: {_quoted(SIZES)}
- notes: Additional styling notes about body proportions, features, or considerations

Be respectful and objective in your analysis.

Respond ONLY with a valid JSON object in this exact format:
{{
  "skinTone": "string",
  "bodyShape": "string",
  "heightCm": number or null,
  "ethnicity": "string",
  "sizeEstimate": "string",
  "notes": "string"
}}"""


GARMENT_ANALYSIS_PROMPT = f"""You are an expert AI fashion analyst specializing in clothing analysis. Analyze the provided clothing information and create a comprehensive clothing profile.

CRITICAL INSTRUCTION: NEVER return "unknown" or null values unless absolutely impossible to estimate. Use all available context clues, fashion knowledge, and logical inference to provide your best estimate for EVERY field.

- category: Must be one of: {_quoted(GARMENT_CATEGORIES)}
- color: Primary color(s) of the item, including secondary colors if present (e.g., "navy blue", "black with white stripes")
- pattern: Must be one of: {_quoted(GARMENT_PATTERNS)}
- material: Best estimate of fabric/material (e.g., "cotton", "silk", "denim", "polyester blend")
- fit: Must be one of: {_quoted(GARMENT_FITS)}
- style: Must be one of: {_quoted(GARMENT_STYLES)}
- occasion: Best suited occasion(s) (e.g., "everyday casual", "office wear", "date night")
- notes: Styling recommendations: body types it flatters, what to pair it with, care considerations

Be confident in your analysis. Fashion experts work with visual and textual descriptions all the time.

Respond ONLY with a valid JSON object:
{{
  "category": "string",
  "color": "string",
  "pattern": "string",
  "material": "string",
  "fit": "string",
  "style": "string",
  "occasion": "string",
  "notes": "string"
}}"""


FENCE_PATTERN = re.compile(r'^```[a-zA-Z]*\s*|\s*```$')


def parse_json_response(text: str) -> dict[str, Any]:
    """Parse the JSON object in a model reply, tolerating markdown fences."""
    cleaned = FENCE_PATTERN.sub("", text.strip()).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError("Failed to parse AI response as JSON") from e
    if not isinstance(data, dict):
        raise MalformedResponseError("Failed to parse AI response as JSON")
    return data


def _text(value, fallback: str) -> str:
    """Non-empty string or the fallback. "unknown"/"null" answers count as empty."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        return fallback
    value = value.strip()
    if not value or value.lower() in ("unknown", "null", "none", "n/a"):
        return fallback
    return value


@dataclass
class ExtractionHints:
    """Optional values the user picked in the form."""
    height: str | None = None  # e.g., "172", "5'8\""
    body_shape: str | None = None  # one of BODY_SHAPES


class AttributeExtractor:
    """Base class: build the request, call the gateway, normalize the reply."""

    kind = "item"
    system_prompt = ""
    image_notice = ""
    text_label = "Description"

    def __init__(self, gateway: ChatGatewayClient, model: str, temperature: float | None = None):
        self.gateway = gateway
        self.model = model
        self.temperature = temperature

    def _prompt_parts(self, image: str | None, text: str, hints: ExtractionHints) -> list[str]:
        parts = []
        if image:
            parts.append(self.image_notice)
        if text.strip():
            parts.append(f"{self.text_label}: {text.strip()}")
        return parts

    def build_messages(
        self,
        image: str | None,
        text: str,
        hints: ExtractionHints,
    ) -> list[dict[str, Any]]:
        """System instructions plus one user turn (multimodal when an image is given)."""
        parts = self._prompt_parts(image, text, hints)
        user_message = "\n".join(parts) if parts else (
            f"No specific details provided. Please return a generic {self.kind} profile "
            f"with your best general estimates."
        )

        messages: list[dict[str, Any]] = [{"role": "system", "content": self.system_prompt}]
        if image and is_data_url(image):
            messages.append({
                "role": "user",
                "content": [
                    {"type": "image_url", "image_url": {"url": image}},
                    {"type": "text", "text": user_message},
                ],
            })
        else:
            messages.append({"role": "user", "content": user_message})
        return messages

    def normalize(self, data: dict[str, Any], image: str | None, text: str, hints: ExtractionHints):
        raise NotImplementedError

    async def extract(
        self,
        image: str | bytes | None = None,
        text: str = "",
        hints: ExtractionHints | None = None,
    ):
        """Run the extraction. Raises StyleAIError subclasses on failure."""
        hints = hints or ExtractionHints()
        text = text or ""
        if isinstance(image, bytes):
            image = encode_data_url(image)

        messages = self.build_messages(image, text, hints)
        reply = await self.gateway.complete(self.model, messages, temperature=self.temperature)
        data = parse_json_response(reply)
        return self.normalize(data, image, text, hints)

    async def analyze(
        self,
        image: str | bytes | None = None,
        text: str = "",
        hints: ExtractionHints | None = None,
    ) -> AnalysisResult:
        """Run the extraction and report the outcome as an AnalysisResult."""
        logger.info("Analyzing %s (has_image=%s, text_chars=%d)", self.kind, bool(image), len(text or ""))
        try:
            attributes = await self.extract(image, text, hints)
        except StyleAIError as e:
            logger.error("%s analysis failed: %s", self.kind.capitalize(), e.message)
            return AnalysisResult.failed(e.message)
        except Exception:
            logger.exception("Unexpected error during %s analysis", self.kind)
            return AnalysisResult.failed(f"Failed to analyze {self.kind}")
        return AnalysisResult.ok(attributes)


class PersonAnalyzer(AttributeExtractor):
    """Extracts skin tone, body shape, height and size from a person photo/description."""

    kind = "person"
    system_prompt = PERSON_ANALYSIS_PROMPT
    image_notice = "I have provided an image of the person."
    text_label = "Person description"

    def _prompt_parts(self, image, text, hints):
        parts = super()._prompt_parts(image, text, hints)
        if hints.height:
            height = parse_height_cm(hints.height, allow_bare_number=True)
            parts.append(f"Height: {height} cm" if height else f"Height: {hints.height}")
        if hints.body_shape:
            parts.append(f"Self-reported body shape: {hints.body_shape}")
        return parts

    def normalize(self, data, image, text, hints) -> PersonAttributes:
        height = (
            coerce_height(data.get("heightCm"))
            or parse_height_cm(hints.height, allow_bare_number=True)
            or parse_height_cm(text)
        )
        body_shape = (
            canonical(data.get("bodyShape"), BODY_SHAPES)
            or parse_body_shape(hints.body_shape)
            or "unknown"
        )
        return PersonAttributes(
            has_photo=bool(image),
            skin_tone=_text(data.get("skinTone"), "unknown"),
            body_shape=body_shape,
            height_cm=height,
            ethnicity=_text(data.get("ethnicity"), "unknown"),
            size_estimate=canonical(data.get("sizeEstimate"), SIZES) or "unknown",
            notes=_text(data.get("notes"), "No additional notes."),
        )


class GarmentAnalyzer(AttributeExtractor):
    """Extracts category, color, pattern, material, fit and style of a clothing item."""

    kind = "garment"
    system_prompt = GARMENT_ANALYSIS_PROMPT
    image_notice = "I have provided an image of the clothing item."
    text_label = "Clothing description"

    def normalize(self, data, image, text, hints) -> GarmentAttributes:
        return GarmentAttributes(
            has_image=bool(image),
            category=canonical(data.get("category"), GARMENT_CATEGORIES) or "unknown",
            color=_text(data.get("color"), "unknown"),
            pattern=canonical(data.get("pattern"), GARMENT_PATTERNS) or "solid",
            material=_text(data.get("material"), "unknown"),
            fit=canonical(data.get("fit"), GARMENT_FITS) or "regular",
            style=canonical(data.get("style"), GARMENT_STYLES) or "casual",
            occasion=_text(data.get("occasion"), "everyday"),
            notes=_text(data.get("notes"), "No additional notes."),
        )
