"""Unit tests for height and body-shape hint parsing."""

import pytest

from styleai.utils.hints import coerce_height, parse_body_shape, parse_height_cm


class TestParseHeight:
    """Heights written the way people type them."""

    @pytest.mark.parametrize("text,expected", [
        ("I'm 170 cm and slim", 170),
        ("height 182cm", 182),
        ("about 1.75 m tall", 175),
        ("1.6 meters", 160),
        ("5'8\" with broad shoulders", 173),
        ("6 ft 1 in", 185),
        ("5 feet", 152),
        ("tall athletic build", None),
        ("size 12 jeans", None),
        ("", None),
        (None, None),
    ])
    def test_free_text(self, text, expected):
        assert parse_height_cm(text) == expected

    def test_bare_number_only_when_allowed(self):
        assert parse_height_cm("172") is None
        assert parse_height_cm("172", allow_bare_number=True) == 172

    def test_out_of_range_discarded(self):
        assert parse_height_cm("999 cm") is None
        assert parse_height_cm("30", allow_bare_number=True) is None


class TestCoerceHeight:
    """Model answers for heightCm."""

    @pytest.mark.parametrize("value,expected", [
        (168, 168),
        (167.6, 168),
        ("170", 170),
        ("170 cm", 170),
        ("unknown", None),
        (None, None),
        (True, None),
        (float("nan"), None),
        (float("inf"), None),
        (0, None),
        ([170], None),
    ])
    def test_values(self, value, expected):
        assert coerce_height(value) == expected


class TestBodyShapeHint:

    @pytest.mark.parametrize("hint,expected", [
        ("pear", "pear"),
        ("Inverted triangle", "inverted-triangle"),
        ("", None),
        (None, None),
        ("banana", None),
    ])
    def test_hint(self, hint, expected):
        assert parse_body_shape(hint) == expected
