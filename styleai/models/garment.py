"""Garment attribute model."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GarmentAttributes(BaseModel):
    """Structured representation of an analyzed clothing item."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    has_image: bool = False
    category: str = Field(default="unknown", description="One of GARMENT_CATEGORIES")
    color: str = Field(default="unknown", description="e.g., 'navy blue', 'black with white stripes'")
    pattern: str = "solid"
    material: str = Field(default="unknown", description="e.g., 'cotton', 'denim', 'silk'")
    fit: str = "regular"
    style: str = "casual"
    occasion: str = "everyday"
    notes: str = "No additional notes."

    def to_description(self) -> str:
        """Flatten the attributes into one garment description line."""
        return (
            f"{self.color} {self.category} with {self.pattern} pattern, "
            f"made of {self.material}, {self.fit} fit, {self.style} style"
        )

    def to_prompt_features(self) -> list[str]:
        """Adjective phrases for image prompts, skipping anything unknown."""
        features = []
        if self.color != "unknown":
            features.append(f"{self.color} color")
        if self.material != "unknown":
            features.append(f"made of {self.material}")
        if self.pattern and self.pattern != "solid":
            features.append(f"with {self.pattern} pattern")
        if self.fit:
            features.append(f"{self.fit} fit")
        if self.style:
            features.append(f"{self.style} style")
        return features
