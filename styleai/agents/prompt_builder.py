"""Prompt builder - composes image-model prompts from descriptions and attributes."""

from ..models import GarmentAttributes, PersonAttributes


def build_garment_description(
    garment_attrs: GarmentAttributes | None,
    garment_text: str = "",
) -> str:
    """Combine analyzed attributes with whatever the user typed.

    Without attributes the user's text is used as-is.
    """
    garment_text = (garment_text or "").strip()
    if garment_attrs is None:
        return garment_text

    description = garment_attrs.to_description()
    if garment_text:
        description += f". Additional details: {garment_text}"
    return description


class TryOnPromptBuilder:
    """Builds prompts for the edit and text-to-image routes.

    The garment-transfer route takes the garment image directly and needs no
    prompt engineering.
    """

    def build_edit_prompt(
        self,
        garment_text: str,
        person_attrs: PersonAttributes | None = None,
        garment_attrs: GarmentAttributes | None = None,
    ) -> str:
        """Prompt that swaps only the clothing in the reference photo."""
        garment = garment_text.strip() or "the described outfit"

        prompt = "An ultra-realistic photograph of the EXACT SAME person in the reference image. "

        if person_attrs:
            traits = person_attrs.to_prompt_traits()
            if traits:
                prompt += f"The person has {' and '.join(traits)}. "

        prompt += f"They are now wearing: {garment}. "

        if garment_attrs:
            features = garment_attrs.to_prompt_features()
            if features:
                prompt += f"The clothing is {', '.join(features)}. "

        prompt += (
            "Keep the face IDENTICAL to the original: same facial features, expression, "
            "eyes, nose, mouth, facial structure and skin texture. "
            "Preserve the hair, pose, body shape, body proportions and background exactly. "
            "Only the clothing should change. "
            "Professional fashion photography, natural lighting, high resolution, photorealistic."
        )
        return prompt

    def build_text_to_image_prompt(
        self,
        garment_text: str,
        person_text: str = "",
        person_attrs: PersonAttributes | None = None,
        garment_attrs: GarmentAttributes | None = None,
    ) -> str:
        """Prompt that renders the whole look from scratch."""
        garment = garment_text.strip() or "a stylish outfit"

        subject = "a person"
        if person_text.strip():
            subject = f"a person described as: {person_text.strip()}"

        prompt = f"A full-body fashion photograph of {subject}. "

        if person_attrs:
            traits = person_attrs.to_prompt_traits(include_build=True)
            if person_attrs.size_estimate != "unknown":
                traits.append(f"clothing size {person_attrs.size_estimate}")
            if traits:
                prompt += f"The person has {', '.join(traits)}. "

        prompt += f"They are wearing: {garment}. "

        if garment_attrs:
            features = garment_attrs.to_prompt_features()
            if garment_attrs.occasion:
                features.append(f"suited for {garment_attrs.occasion}")
            if features:
                prompt += f"The clothing is {', '.join(features)}. "

        prompt += (
            "Natural standing pose, clothing clearly visible and well fitted to the body. "
            "Professional fashion photography, soft studio lighting, neutral background, "
            "high resolution, photorealistic."
        )
        return prompt
