"""Data models for the StyleAI pipeline."""

from .garment import GarmentAttributes
from .person import PersonAttributes
from .state import TryOnState
from .tryon import AnalysisResult, GenerationOutcome, TryOnRequest, TryOnResult

__all__ = [
    "PersonAttributes",
    "GarmentAttributes",
    "AnalysisResult",
    "TryOnRequest",
    "TryOnResult",
    "GenerationOutcome",
    "TryOnState",
]
