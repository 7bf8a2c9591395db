"""Image synthesizer - picks an image model and renders the try-on."""

import logging
from typing import Any

from ..agents import TryOnPromptBuilder
from ..config import FalConfig
from ..errors import StyleAIError
from ..models import GarmentAttributes, PersonAttributes, TryOnResult
from ..services import FalImageClient

logger = logging.getLogger(__name__)

ROUTE_GARMENT_TRANSFER = "garment_transfer"
ROUTE_EDIT = "edit"
ROUTE_TEXT_TO_IMAGE = "text_to_image"


def select_route(person_image: str | None, garment_image: str | None) -> str:
    """First match wins: both images, person image only, otherwise text."""
    if person_image and garment_image:
        return ROUTE_GARMENT_TRANSFER
    if person_image:
        return ROUTE_EDIT
    return ROUTE_TEXT_TO_IMAGE


class ImageSynthesizer:
    """Renders the person wearing the garment through one of three endpoints."""

    def __init__(
        self,
        fal: FalImageClient,
        config: FalConfig,
        prompt_builder: TryOnPromptBuilder | None = None,
    ):
        self.fal = fal
        self.config = config
        self.prompt_builder = prompt_builder or TryOnPromptBuilder()

    def build_request(
        self,
        route: str,
        person_image: str | None,
        garment_image: str | None,
        garment_text: str,
        person_text: str = "",
        person_attrs: PersonAttributes | None = None,
        garment_attrs: GarmentAttributes | None = None,
    ) -> tuple[str, dict[str, Any]]:
        """Return (endpoint, payload) for ``route``."""
        cfg = self.config

        if route == ROUTE_GARMENT_TRANSFER:
            description = garment_text.strip()
            if not description and garment_attrs:
                description = garment_attrs.to_description()
            return cfg.garment_transfer_endpoint, {
                "human_image_url": person_image,
                "garment_image_url": garment_image,
                "description": description or "clothing item",
            }

        if route == ROUTE_EDIT:
            prompt = self.prompt_builder.build_edit_prompt(garment_text, person_attrs, garment_attrs)
            return cfg.edit_endpoint, {
                "image_url": person_image,
                "prompt": prompt,
                "strength": cfg.edit_strength,
                "num_inference_steps": cfg.edit_steps,
                "guidance_scale": cfg.edit_guidance,
                "image_size": cfg.edit_image_size,
            }

        prompt = self.prompt_builder.build_text_to_image_prompt(
            garment_text, person_text, person_attrs, garment_attrs
        )
        return cfg.text_to_image_endpoint, {
            "prompt": prompt,
            "num_inference_steps": cfg.text_steps,
            "guidance_scale": cfg.text_guidance,
            "image_size": cfg.text_image_size,
        }

    async def synthesize(
        self,
        person_image: str | None = None,
        garment_image: str | None = None,
        garment_text: str = "",
        person_attrs: PersonAttributes | None = None,
        garment_attrs: GarmentAttributes | None = None,
        person_text: str = "",
    ) -> TryOnResult:
        """Generate the try-on image and return it inline.

        Never raises: every failure comes back as ``TryOnResult(success=False)``.
        """
        route = select_route(person_image, garment_image)
        logger.info(
            "Synthesizing via %s (person_image=%s, garment_image=%s)",
            route, bool(person_image), bool(garment_image),
        )

        try:
            endpoint, payload = self.build_request(
                route, person_image, garment_image, garment_text or "",
                person_text or "", person_attrs, garment_attrs,
            )
            image_url = await self.fal.run(endpoint, payload)
            data_url = await self.fal.fetch_as_data_url(image_url)
        except StyleAIError as e:
            logger.error("Try-on synthesis failed: %s", e.message)
            return TryOnResult(success=False, error=e.message, route=route)
        except Exception:
            logger.exception("Unexpected error during try-on synthesis")
            return TryOnResult(success=False, error="Failed to generate virtual try-on", route=route)

        return TryOnResult(success=True, image=data_url, route=route)
