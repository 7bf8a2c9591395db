"""Closed vocabularies the analysis models are allowed to answer with."""

BODY_SHAPES = ("hourglass", "pear", "apple", "rectangle", "inverted-triangle")
SIZES = ("XS", "S", "M", "L", "XL", "XXL")

GARMENT_CATEGORIES = (
    "top", "bottom", "dress", "outerwear", "footwear",
    "accessory", "swimwear", "activewear", "formal", "underwear",
)
GARMENT_PATTERNS = (
    "solid", "striped", "plaid", "floral", "geometric",
    "animal print", "paisley", "checkered", "abstract", "graphic",
)
GARMENT_FITS = ("slim", "regular", "relaxed", "oversized", "fitted", "tailored", "loose")
GARMENT_STYLES = (
    "casual", "formal", "business casual", "streetwear", "bohemian",
    "minimalist", "vintage", "athletic", "preppy", "edgy",
)


def _key(value: str) -> str:
    return " ".join(value.lower().replace("-", " ").replace("_", " ").split())


def canonical(value, vocabulary: tuple[str, ...]) -> str | None:
    """Map a loosely formatted answer onto its vocabulary entry.

    Case, hyphens and underscores are ignored, so "Inverted Triangle" matches
    "inverted-triangle". Returns None for anything outside the vocabulary.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    wanted = _key(value)
    for entry in vocabulary:
        if _key(entry) == wanted:
            return entry
    return None
