"""
Tests for CSS color normalization.
"""

import pytest

from odtquill.utils.color_utils import normalize_color, rgb_to_hex


class TestNormalizeColor:
    """Test cases for normalize_color."""

    @pytest.mark.parametrize("value, expected", [
        ("#abc", "#aabbcc"),
        ("#ABCDEF", "#abcdef"),
        ("#abcd", "#aabbcc"),
        ("#11223344", "#112233"),
        ("rgb(255, 0, 0)", "#ff0000"),
        ("rgba(0, 128, 255, 0.5)", "#0080ff"),
        ("rgb(0 0 255 / 50%)", "#0000ff"),
        ("rgb(100%, 50%, 0%)", "#ff8000"),
        ("Red", "#ff0000"),
        ("  navy ", "#000080"),
    ])
    def test_valid_colors(self, value, expected):
        assert normalize_color(value) == expected

    def test_channels_are_clamped_and_unparsable_channels_are_zero(self):
        assert normalize_color("rgb(300, -5, x)") == "#ff0000"

    @pytest.mark.parametrize("value", ["notacolor", "#12", "#12345", "rgb(1, 2)", "", None])
    def test_unparsable_returns_none(self, value):
        assert normalize_color(value) is None

    def test_unparsable_returns_default(self):
        assert normalize_color("bogus", "#000000") == "#000000"
        assert normalize_color(None, "#ffffff") == "#ffffff"

    def test_rgb_to_hex_clamps(self):
        assert rgb_to_hex((256, -1, 16)) == "#ff0010"
