"""FastAPI server for StyleAI virtual try-on.

Receives requests from the web front end with:
- personImage / garmentImage: optional base64 data URLs
- personDescription / garmentDescription: free text
- height / bodyShape: optional hints from the form
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from styleai import __version__
from styleai.agents import ExtractionHints
from styleai.config import StyleAIConfig, load_config
from styleai.models import GarmentAttributes, PersonAttributes, TryOnRequest, TryOnResult
from styleai.pipeline import TryOnPipeline
from styleai.utils.image_encoding import normalize_data_url

logger = logging.getLogger(__name__)

_config: StyleAIConfig = load_config()

# Initialize pipeline (will be done on first request)
_pipeline: TryOnPipeline | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _pipeline is not None:
        await _pipeline.close()


app = FastAPI(
    title="StyleAI API",
    description="Virtual try-on from photos or descriptions",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzePersonRequest(_CamelModel):
    person_image: str | None = None
    person_description: str = ""
    height: str | None = None
    body_shape: str | None = None


class AnalyzePersonResponse(_CamelModel):
    success: bool
    person_attributes: PersonAttributes | None = None
    error: str | None = None


class AnalyzeGarmentRequest(_CamelModel):
    garment_image: str | None = None
    garment_description: str = ""


class AnalyzeGarmentResponse(_CamelModel):
    success: bool
    garment_attributes: GarmentAttributes | None = None
    error: str | None = None


class VirtualTryOnRequest(_CamelModel):
    person_image: str | None = None
    garment_image: str | None = None
    garment_description: str = ""
    person_description: str = ""
    person_attributes: PersonAttributes | None = None
    garment_attributes: GarmentAttributes | None = None


class GenerateRequest(_CamelModel):
    person_image: str | None = None
    person_description: str = ""
    garment_image: str | None = None
    garment_description: str = ""
    height: str | None = None
    body_shape: str | None = None


class GenerateResponse(_CamelModel):
    success: bool
    person_attrs: PersonAttributes | None = None
    garment_attrs: GarmentAttributes | None = None
    generated_image: str | None = None
    error: str | None = None
    warnings: list[str] = []


def get_pipeline() -> TryOnPipeline:
    """Get or create the pipeline instance."""
    global _pipeline
    if _pipeline is None:
        _pipeline = TryOnPipeline(load_config())  # Loads from .env via pydantic-settings
    return _pipeline


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "StyleAI", "version": __version__}


@app.get("/health")
async def health():
    """Report whether both hosted-service credentials are configured."""
    config = get_pipeline().config
    gateway_ok = bool(config.lovable_api_key)
    fal_ok = bool(config.fal_key)

    return {
        "status": "ok" if gateway_ok and fal_ok else "degraded",
        "gateway": "configured" if gateway_ok else "missing",
        "fal": "configured" if fal_ok else "missing",
    }


@app.post("/api/analyze-person", response_model=AnalyzePersonResponse)
async def analyze_person(request: AnalyzePersonRequest):
    """Build a structured person profile from a photo and/or description."""
    pipeline = get_pipeline()
    result = await pipeline.person_analyzer.analyze(
        image=normalize_data_url(request.person_image),
        text=request.person_description,
        hints=ExtractionHints(height=request.height, body_shape=request.body_shape),
    )
    return AnalyzePersonResponse(
        success=result.success,
        person_attributes=result.attributes,
        error=result.error,
    )


@app.post("/api/analyze-garment", response_model=AnalyzeGarmentResponse)
async def analyze_garment(request: AnalyzeGarmentRequest):
    """Build a structured clothing profile from a photo and/or description."""
    pipeline = get_pipeline()
    result = await pipeline.garment_analyzer.analyze(
        image=normalize_data_url(request.garment_image),
        text=request.garment_description,
    )
    return AnalyzeGarmentResponse(
        success=result.success,
        garment_attributes=result.attributes,
        error=result.error,
    )


@app.post("/api/virtual-tryon", response_model=TryOnResult)
async def virtual_tryon(request: VirtualTryOnRequest):
    """Render the try-on image from already analyzed inputs."""
    pipeline = get_pipeline()
    return await pipeline.synthesizer.synthesize(
        person_image=normalize_data_url(request.person_image),
        garment_image=normalize_data_url(request.garment_image),
        garment_text=request.garment_description,
        person_attrs=request.person_attributes,
        garment_attrs=request.garment_attributes,
        person_text=request.person_description,
    )


@app.post("/api/generate", response_model=GenerateResponse)
async def generate(request: GenerateRequest):
    """Analyze both inputs and render the styled look in one call."""
    pipeline = get_pipeline()
    outcome = await pipeline.generate(TryOnRequest(
        person_image=normalize_data_url(request.person_image),
        person_text=request.person_description,
        garment_image=normalize_data_url(request.garment_image),
        garment_text=request.garment_description,
        height_hint=request.height,
        body_shape_hint=request.body_shape,
    ))
    return GenerateResponse(
        success=outcome.success,
        person_attrs=outcome.person_attrs,
        garment_attrs=outcome.garment_attrs,
        generated_image=outcome.generated_image,
        error=outcome.error,
        warnings=outcome.warnings,
    )


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=_config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
