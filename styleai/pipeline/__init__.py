"""Try-on pipeline."""

from .synthesizer import ImageSynthesizer, select_route
from .tryon_pipeline import TryOnPipeline

__all__ = ["ImageSynthesizer", "TryOnPipeline", "select_route"]
