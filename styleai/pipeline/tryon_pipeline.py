"""Try-on pipeline - orchestrates analysis and image generation."""

import asyncio
import logging

from ..agents import ExtractionHints, GarmentAnalyzer, PersonAnalyzer, build_garment_description
from ..config import StyleAIConfig
from ..errors import InputError
from ..models import AnalysisResult, GenerationOutcome, TryOnRequest, TryOnState
from ..services import ChatGatewayClient, FalImageClient
from .synthesizer import ImageSynthesizer

logger = logging.getLogger(__name__)

NOT_READY_MESSAGE = "Please provide both your photo/description and clothing details"


class TryOnPipeline:
    """One "Generate" action end to end.

    Flow:
    1. Check the user gave something for both person and garment
    2. Analyze person and garment concurrently
    3. Fold garment attributes into an enriched description
    4. Render the try-on image

    A failed person analysis aborts; a failed garment analysis or render is
    reported as a warning and whatever succeeded is kept.
    """

    def __init__(
        self,
        config: StyleAIConfig,
        gateway: ChatGatewayClient | None = None,
        fal: FalImageClient | None = None,
    ):
        self.config = config

        # Initialize services
        self.gateway = gateway or ChatGatewayClient(
            config=config.gateway,
            retry=config.retry,
            api_key=config.lovable_api_key,
        )
        self.fal = fal or FalImageClient(
            config=config.fal,
            retry=config.retry,
            api_key=config.fal_key,
        )

        # Initialize agents
        self.person_analyzer = PersonAnalyzer(
            self.gateway,
            model=config.gateway.person_model,
            temperature=config.gateway.temperature,
        )
        self.garment_analyzer = GarmentAnalyzer(self.gateway, model=config.gateway.garment_model)
        self.synthesizer = ImageSynthesizer(self.fal, config.fal)

    @staticmethod
    def is_ready(request: TryOnRequest) -> bool:
        return request.is_ready

    async def _analyze_garment(self, request: TryOnRequest) -> AnalysisResult:
        if not request.has_garment_input:
            # Nothing to analyze; not an error
            return AnalysisResult(success=False)
        return await self.garment_analyzer.analyze(request.garment_image, request.garment_text)

    def check_ready(self, request: TryOnRequest) -> None:
        """Raise ``InputError`` unless both person and garment have some input."""
        if not self.is_ready(request):
            raise InputError(NOT_READY_MESSAGE)

    async def generate(self, request: TryOnRequest) -> GenerationOutcome:
        """Run the whole flow and report what happened."""
        try:
            self.check_ready(request)
        except InputError as e:
            logger.info("Generation rejected: %s", e.message)
            return GenerationOutcome(status="failed", error=e.message)

        try:
            return await self._generate(request)
        except Exception:
            logger.exception("Unexpected error during generation")
            return GenerationOutcome(status="failed", error="Failed to generate your styled look")

    async def _generate(self, request: TryOnRequest) -> GenerationOutcome:
        hints = ExtractionHints(height=request.height_hint, body_shape=request.body_shape_hint)

        logger.info("Analyzing appearance and clothing...")
        person_result, garment_result = await asyncio.gather(
            self.person_analyzer.analyze(request.person_image, request.person_text, hints),
            self._analyze_garment(request),
        )

        if not person_result.success or person_result.attributes is None:
            return GenerationOutcome(
                status="failed",
                error=person_result.error or "Failed to analyze your appearance",
            )

        person_attrs = person_result.attributes
        warnings: list[str] = []

        garment_attrs = garment_result.attributes if garment_result.success else None
        if garment_result.error:
            logger.warning("Garment analysis failed, continuing with raw description")
            warnings.append(
                f"Clothing analysis failed ({garment_result.error}); "
                f"using your clothing description as-is."
            )

        description = build_garment_description(garment_attrs, request.garment_text)

        logger.info(
            "Generating %s...",
            "virtual try-on" if request.person_image else "styled look from descriptions",
        )
        tryon = await self.synthesizer.synthesize(
            person_image=request.person_image,
            garment_image=request.garment_image,
            garment_text=description,
            person_attrs=person_attrs,
            garment_attrs=garment_attrs,
            person_text=request.person_text,
        )

        if not tryon.success:
            warnings.append(tryon.error or "Generation failed, but your profiles were analyzed")
            return GenerationOutcome(
                status="partial",
                person_attrs=person_attrs,
                garment_attrs=garment_attrs,
                warnings=warnings,
            )

        logger.info("Styled look is ready (route=%s)", tryon.route)
        return GenerationOutcome(
            status="completed",
            person_attrs=person_attrs,
            garment_attrs=garment_attrs,
            generated_image=tryon.image,
            warnings=warnings,
        )

    async def generate_into(self, state: TryOnState, request: TryOnRequest) -> TryOnState:
        """Generate and fold the outcome into the user's current view state."""
        outcome = await self.generate(request)
        return state.apply(outcome)

    async def close(self):
        await self.gateway.close()
        await self.fal.close()
