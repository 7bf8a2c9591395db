"""Person attribute model."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PersonAttributes(BaseModel):
    """Structured description of the person being dressed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    has_photo: bool = False
    skin_tone: str = Field(default="unknown", description="e.g., 'medium-deep, warm undertone'")
    body_shape: str = Field(default="unknown", description="One of BODY_SHAPES, or 'unknown'")
    height_cm: int | None = Field(default=None, description="None only when no height signal existed")
    ethnicity: str = "unknown"
    size_estimate: str = Field(default="unknown", description="One of SIZES, or 'unknown'")
    notes: str = "No additional notes."

    def to_prompt_traits(self, include_build: bool = False) -> list[str]:
        """Short phrases about the person for image prompts.

        Build details (height, body shape) are only useful when there is no
        reference photo to preserve.
        """
        traits = []
        if self.skin_tone != "unknown":
            traits.append(f"{self.skin_tone} skin tone")
        if self.ethnicity != "unknown":
            traits.append(f"{self.ethnicity} ethnicity")
        if include_build:
            if self.body_shape != "unknown":
                traits.append(f"{self.body_shape} body shape")
            if self.height_cm:
                traits.append(f"about {self.height_cm} cm tall")
        return traits
