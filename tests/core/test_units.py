"""
Tests for CSS length, font size and line height normalization.
"""

import pytest

from odtquill.utils.units import (
    DEFAULT_CONTENT_WIDTH_PX,
    cm_string_to_float,
    css_font_size_to_pt,
    css_length_to_cm,
    format_pt,
    normalize_line_height,
    parse_html_integer,
    px_to_cm,
    split_css_length,
)


class TestLengthConversion:
    """Test cases for px_to_cm and css_length_to_cm."""

    def test_px_to_cm(self):
        assert px_to_cm(96) == "2.5400cm"
        assert px_to_cm(48.0) == "1.2700cm"

    @pytest.mark.parametrize("value", [0, -10, None, float("inf"), float("nan")])
    def test_px_to_cm_rejects_non_positive(self, value):
        assert px_to_cm(value) is None

    @pytest.mark.parametrize("css, expected", [
        ("72pt", "2.5400cm"),
        ("10mm", "1.0000cm"),
        ("1in", "2.5400cm"),
        ("2cm", "2.0000cm"),
        ("96px", "2.5400cm"),
        ("48", "1.2700cm"),
        ("  96PX ", "2.5400cm"),
    ])
    def test_css_length_to_cm(self, css, expected):
        assert css_length_to_cm(css) == expected

    @pytest.mark.parametrize("css", [
        "0px", "-5px", "50%", "2em", "auto", "", None, "5vmin", "3vw", "2ex", "12px solid", "1e999px",
    ])
    def test_css_length_to_cm_unsupported(self, css):
        assert css_length_to_cm(css) is None

    def test_cm_string_to_float(self):
        assert cm_string_to_float("2.5400cm") == pytest.approx(2.54)
        assert cm_string_to_float("3 cm") == pytest.approx(3.0)
        assert cm_string_to_float("3pt") is None
        assert cm_string_to_float(None) is None

    def test_default_content_width(self):
        assert DEFAULT_CONTENT_WIDTH_PX == pytest.approx(642.52, abs=0.01)


class TestFontSize:
    """Test cases for css_font_size_to_pt."""

    @pytest.mark.parametrize("css, expected", [
        ("16px", "12pt"),
        ("11pt", "11pt"),
        ("10.5pt", "10.5pt"),
        ("1.5em", "18pt"),
        ("2rem", "24pt"),
        ("150%", "18pt"),
        ("20", "15pt"),
        ("large", "13.5pt"),
    ])
    def test_conversion(self, css, expected):
        assert css_font_size_to_pt(css) == expected

    @pytest.mark.parametrize("css", ["abc", "0px", "", None, "5vmin", "2ch", "1e999px"])
    def test_invalid(self, css):
        assert css_font_size_to_pt(css) is None

    def test_format_pt_trims_zeros(self):
        assert format_pt(12) == "12pt"
        assert format_pt(10.5) == "10.5pt"
        assert format_pt(10.256) == "10.26pt"


class TestLineHeight:
    """Test cases for normalize_line_height."""

    @pytest.mark.parametrize("css, expected", [
        ("1.5", "150%"),
        ("120%", "120%"),
        ("24px", "18pt"),
        ("14pt", "14pt"),
        ("1.2em", "120%"),
        ("1cm", "1.0000cm"),
        ("5000%", "1000%"),
    ])
    def test_normalization(self, css, expected):
        assert normalize_line_height(css) == expected

    @pytest.mark.parametrize("css", ["normal", "inherit", "initial", "", None, "0", "2vw", "1.5lines"])
    def test_keywords_and_invalid(self, css):
        assert normalize_line_height(css) is None


class TestParsing:
    """Test cases for split_css_length and parse_html_integer."""

    @pytest.mark.parametrize("css, expected", [
        ("12px", (12.0, "px")),
        (" 1.5 EM ", (1.5, "em")),
        ("50%", (50.0, "%")),
        ("3", (3.0, "")),
        ("5vmin", (5.0, "vmin")),
    ])
    def test_split_css_length(self, css, expected):
        assert split_css_length(css) == expected

    @pytest.mark.parametrize("css", ["px", "12 px 3", "1.2.3cm", "", None])
    def test_split_css_length_invalid(self, css):
        assert split_css_length(css) is None

    @pytest.mark.parametrize("value, expected", [
        ("3", 3),
        (" 7", 7),
        ("+2", 2),
        ("-4", -4),
        ("3.7", 3),
        ("1e999", 1),
        ("12abc", 12),
    ])
    def test_parse_html_integer(self, value, expected):
        assert parse_html_integer(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", ".5", None])
    def test_parse_html_integer_invalid(self, value):
        assert parse_html_integer(value) is None
