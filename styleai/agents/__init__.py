"""LLM agents for the StyleAI pipeline."""

from .attribute_extractor import (
    AttributeExtractor,
    ExtractionHints,
    GarmentAnalyzer,
    PersonAnalyzer,
    parse_json_response,
)
from .prompt_builder import TryOnPromptBuilder, build_garment_description

__all__ = [
    "AttributeExtractor",
    "ExtractionHints",
    "PersonAnalyzer",
    "GarmentAnalyzer",
    "parse_json_response",
    "TryOnPromptBuilder",
    "build_garment_description",
]
