"""
Tests for the class style map and ODF property translation.
"""

import pytest

from odtquill.styles.style_map import (
    class_styles,
    combine_styles,
    font_role_for_classes,
    font_role_for_css,
    map_paragraph_properties,
    map_table_properties,
    map_table_row_properties,
    map_text_properties,
    normalize_opacity,
    parse_inline_style,
)


class TestClassStyles:
    """Test cases for editor class lookup."""

    def test_merges_classes(self):
        assert class_styles(["text-red", "font-14", "unknown"]) == {
            "color": "#ff0000",
            "font-size": "10.5pt",
        }

    def test_later_class_wins(self):
        assert class_styles(["ql-align-center", "ql-align-right"]) == {"text-align": "end"}

    def test_font_role_for_classes(self):
        assert font_role_for_classes(["x", "font-serif"]) == "serif"
        assert font_role_for_classes(["x"]) is None

    @pytest.mark.parametrize("family, expected", [
        ("'Gungsuh', serif", "gungsuh"),
        ("궁서체", "gungsuh"),
        ("Times New Roman, serif", "serif"),
        ("\"Batang\"", "serif"),
        ("Arial, sans-serif", None),
        (None, None),
    ])
    def test_font_role_for_css(self, family, expected):
        assert font_role_for_css(family) == expected


class TestTextProperties:
    """Test cases for map_text_properties."""

    def test_basic_properties(self):
        assert map_text_properties({
            "fo:font-weight": "bold",
            "fo:color": "#112233",
            "style:font-name": "Liberation Serif",
        }) == {
            "font-weight": "bold",
            "color": "#112233",
            "font-family": "Liberation Serif",
        }

    def test_decorations_combine(self):
        mapped = map_text_properties({
            "style:text-underline-style": "solid",
            "style:text-line-through-style": "none",
            "style:text-overline-style": "solid",
        })
        assert mapped["text-decoration-line"] == "underline overline"

    def test_underline_color(self):
        assert "text-decoration-color" not in map_text_properties({"style:text-underline-color": "font-color"})
        assert map_text_properties({"style:text-underline-color": "#ff0000"})["text-decoration-color"] == "#ff0000"

    def test_asian_font_size_fallback(self):
        assert map_text_properties({"style:font-size-asian": "11pt"}) == {"font-size": "11pt"}
        assert map_text_properties({"fo:font-size": "12pt", "style:font-size-asian": "11pt"}) == {"font-size": "12pt"}

    @pytest.mark.parametrize("position, expected", [
        ("super 58%", "super"),
        ("sub 58%", "sub"),
        ("0% 100%", None),
    ])
    def test_text_position(self, position, expected):
        assert map_text_properties({"style:text-position": position}).get("vertical-align") == expected

    @pytest.mark.parametrize("value, expected", [
        ("50%", "0.5"),
        ("150%", "1"),
        ("0.25", "0.25"),
        ("80", "0.8"),
        ("200", None),
        ("abc", None),
    ])
    def test_opacity(self, value, expected):
        assert normalize_opacity(value) == expected

    def test_opacity_property(self):
        assert map_text_properties({"loext:opacity": "40%"})["opacity"] == "0.4"


class TestBlockProperties:
    """Test cases for paragraph and table families."""

    def test_paragraph_properties(self):
        assert map_paragraph_properties({
            "fo:text-align": "center",
            "fo:margin-left": "1cm",
            "fo:unknown": "x",
        }) == {"text-align": "center", "margin-left": "1cm"}

    def test_table_properties(self):
        assert map_table_properties({
            "style:width": "10cm",
            "table:border-model": "collapsing",
            "table:align": "center",
        }) == {
            "width": "10cm",
            "border-collapse": "collapse",
            "margin-left": "auto",
            "margin-right": "auto",
        }

    def test_table_right_align(self):
        mapped = map_table_properties({"table:align": "right", "table:border-model": "separating"})
        assert mapped == {"margin-left": "auto", "border-collapse": "separate"}

    def test_row_keep_together(self):
        assert map_table_row_properties({"fo:keep-together": "always"}) == {"page-break-inside": "avoid"}
        assert map_table_row_properties({"fo:keep-together": "auto"}) == {}


class TestInlineStyles:
    """Test cases for inline style parsing and merging."""

    def test_parse_inline_style(self):
        assert parse_inline_style("Color: red; font-weight: bold !important; bogus; : x;") == {
            "color": "red",
            "font-weight": "bold",
        }
        assert parse_inline_style(None) == {}

    def test_combine_styles(self):
        assert combine_styles({"a": "1"}, None, {"a": "2", "b": ""}) == {"a": "2"}
