"""Request and result models passed between pipeline stages."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .garment import GarmentAttributes
from .person import PersonAttributes


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisResult(_CamelModel):
    """Outcome of one attribute extraction call."""

    success: bool
    attributes: PersonAttributes | GarmentAttributes | None = None
    error: str | None = None

    @classmethod
    def ok(cls, attributes: PersonAttributes | GarmentAttributes) -> "AnalysisResult":
        return cls(success=True, attributes=attributes)

    @classmethod
    def failed(cls, error: str) -> "AnalysisResult":
        return cls(success=False, error=error)


class TryOnRequest(_CamelModel):
    """Everything the user entered for one "Generate" action.

    Images are inline data URLs.
    """

    person_image: str | None = None
    person_text: str = ""
    garment_image: str | None = None
    garment_text: str = ""
    height_hint: str | None = None
    body_shape_hint: str | None = None

    @property
    def has_person_input(self) -> bool:
        return bool(self.person_image) or bool(self.person_text.strip())

    @property
    def has_garment_input(self) -> bool:
        return bool(self.garment_image) or bool(self.garment_text.strip())

    @property
    def is_ready(self) -> bool:
        return self.has_person_input and self.has_garment_input


class TryOnResult(_CamelModel):
    """Outcome of one image synthesis call."""

    success: bool
    image: str | None = None
    error: str | None = None
    route: str | None = None  # "garment_transfer", "edit" or "text_to_image"


class GenerationOutcome(_CamelModel):
    """What the orchestrator hands back to the presentation layer."""

    status: Literal["completed", "partial", "failed"]
    person_attrs: PersonAttributes | None = None
    garment_attrs: GarmentAttributes | None = None
    generated_image: str | None = None
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == "completed"
