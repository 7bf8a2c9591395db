"""Per-user view state between generations."""

from pydantic import BaseModel, Field

from .garment import GarmentAttributes
from .person import PersonAttributes
from .tryon import GenerationOutcome


class TryOnState(BaseModel):
    """What the user currently sees: analyzed profiles, last image, messages.

    Immutable in practice: ``apply`` returns a new state rather than mutating.
    """

    person_attrs: PersonAttributes | None = None
    garment_attrs: GarmentAttributes | None = None
    generated_image: str | None = None
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)

    def apply(self, outcome: GenerationOutcome) -> "TryOnState":
        """Fold a generation outcome into the visible state."""
        if outcome.status == "failed":
            # Blocking error: keep whatever was on screen before
            return self.model_copy(update={"error": outcome.error, "warnings": []})

        update = {
            "person_attrs": outcome.person_attrs,
            "garment_attrs": outcome.garment_attrs,
            "error": None,
            "warnings": list(outcome.warnings),
        }
        if outcome.status == "completed":
            update["generated_image"] = outcome.generated_image
        return self.model_copy(update=update)
