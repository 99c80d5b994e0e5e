"""
Style map for editor HTML and ODF properties.

Handles class to CSS mapping for editor classes, font role presets and the
per-family translation tables from resolved ODF properties to inline CSS.
"""

import logging
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

StyleDict = Dict[str, str]

# Editor classes, expressed as CSS declarations
STYLE_MAP: Dict[str, StyleDict] = {
    # Colors
    "text-red": {"color": "#ff0000"},
    "text-blue": {"color": "#0070ff"},
    "text-green": {"color": "#2ecc71"},
    "text-yellow": {"color": "#f1c40f"},
    "text-gray": {"color": "#555555"},
    # Font sizes
    "font-12": {"font-size": "9pt"},
    "font-14": {"font-size": "10.5pt"},
    "font-16": {"font-size": "12pt"},
    "font-18": {"font-size": "13.5pt"},
    "font-20": {"font-size": "15pt"},
    "font-24": {"font-size": "18pt"},
    # Quill sizes
    "ql-size-small": {"font-size": "8pt"},
    "ql-size-large": {"font-size": "14pt"},
    "ql-size-huge": {"font-size": "24pt"},
    # Alignment
    "center": {"text-align": "center"},
    "right": {"text-align": "end"},
    "left": {"text-align": "start"},
    "ql-align-center": {"text-align": "center"},
    "ql-align-right": {"text-align": "end"},
    "ql-align-left": {"text-align": "start"},
    "ql-align-justify": {"text-align": "justify"},
    # Text styles
    "bold": {"font-weight": "bold"},
    "italic": {"font-style": "italic"},
    "underline": {"text-decoration": "underline"},
    # Highlight
    "highlight-yellow": {"background-color": "#fff59d"},
    "highlight-green": {"background-color": "#d4efdf"},
    "highlight-blue": {"background-color": "#d6eaf8"},
    # Tables
    "table-bordered": {"border": "1px solid #444"},
    "table-borderless": {"border": "none"},
}

# Font role -> text style name pre-declared in every content.xml
FONT_FAMILY_MAP: Dict[str, str] = {
    "body": "T_Body",
    "serif": "T_Serif",
    "gungsuh": "T_Gungsuh",
}

# Classes selecting a font role
FONT_FAMILY_CLASSES: Dict[str, str] = {
    "font-body": "body",
    "font-serif": "serif",
    "font-gungsuh": "gungsuh",
}

FONT_FAMILY_ATTRIBUTE = "data-odt-font-family"


def class_styles(class_names: List[str]) -> StyleDict:
    """
    Collect CSS declarations for editor classes, later classes winning.

    Args:
        class_names: Class tokens of one element

    Returns:
        Merged CSS declarations
    """
    merged: StyleDict = {}
    for name in class_names:
        declarations = STYLE_MAP.get(name)
        if declarations:
            merged.update(declarations)
    return merged


def font_role_for_classes(class_names: List[str]) -> Optional[str]:
    role = None
    for name in class_names:
        if name in FONT_FAMILY_CLASSES:
            role = FONT_FAMILY_CLASSES[name]
    return role


def font_role_for_css(font_family: Optional[str]) -> Optional[str]:
    """Guess the font role named by a CSS font-family list."""
    if not font_family:
        return None
    lowered = font_family.lower()
    if "gungsuh" in lowered or "궁서" in font_family:
        return "gungsuh"
    families = [part.strip().strip("'\"") for part in lowered.split(",")]
    if "serif" in families or "times new roman" in families or "batang" in families:
        return "serif"
    return None


# ODF property -> CSS property, per family
PARAGRAPH_PROPERTY_MAP: List[Tuple[str, str]] = [
    ("fo:text-align", "text-align"),
    ("fo:margin-left", "margin-left"),
    ("fo:margin-right", "margin-right"),
    ("fo:margin-top", "margin-top"),
    ("fo:margin-bottom", "margin-bottom"),
    ("fo:text-indent", "text-indent"),
    ("fo:line-height", "line-height"),
    ("fo:padding", "padding"),
    ("fo:padding-left", "padding-left"),
    ("fo:padding-right", "padding-right"),
    ("fo:padding-top", "padding-top"),
    ("fo:padding-bottom", "padding-bottom"),
    ("fo:border", "border"),
    ("fo:border-left", "border-left"),
    ("fo:border-right", "border-right"),
    ("fo:border-top", "border-top"),
    ("fo:border-bottom", "border-bottom"),
    ("fo:background-color", "background-color"),
    ("style:writing-mode", "writing-mode"),
    ("style:vertical-align", "vertical-align"),
]

TEXT_PROPERTY_MAP: List[Tuple[str, str]] = [
    ("fo:font-weight", "font-weight"),
    ("fo:font-style", "font-style"),
    ("fo:font-size", "font-size"),
    ("fo:color", "color"),
    ("fo:letter-spacing", "letter-spacing"),
    ("fo:text-transform", "text-transform"),
    ("fo:background-color", "background-color"),
    ("style:text-outline", "text-outline"),
]

TABLE_PROPERTY_MAP: List[Tuple[str, str]] = [
    ("style:width", "width"),
    ("fo:margin-left", "margin-left"),
    ("fo:margin-right", "margin-right"),
    ("fo:margin-top", "margin-top"),
    ("fo:margin-bottom", "margin-bottom"),
    ("fo:border", "border"),
    ("fo:border-top", "border-top"),
    ("fo:border-right", "border-right"),
    ("fo:border-bottom", "border-bottom"),
    ("fo:border-left", "border-left"),
    ("fo:padding", "padding"),
]

TABLE_COLUMN_PROPERTY_MAP: List[Tuple[str, str]] = [
    ("style:column-width", "width"),
]

TABLE_ROW_PROPERTY_MAP: List[Tuple[str, str]] = [
    ("style:min-row-height", "min-height"),
]

TABLE_CELL_PROPERTY_MAP: List[Tuple[str, str]] = [
    ("fo:border", "border"),
    ("fo:border-left", "border-left"),
    ("fo:border-right", "border-right"),
    ("fo:border-top", "border-top"),
    ("fo:border-bottom", "border-bottom"),
    ("fo:padding", "padding"),
    ("fo:padding-left", "padding-left"),
    ("fo:padding-right", "padding-right"),
    ("fo:padding-top", "padding-top"),
    ("fo:padding-bottom", "padding-bottom"),
    ("fo:background-color", "background-color"),
    ("style:vertical-align", "vertical-align"),
]

FONT_NAME_KEYS = ("style:font-name", "style:font-name-asian", "style:font-name-complex")

DECORATION_KEYS = (
    ("style:text-underline-style", "underline"),
    ("style:text-line-through-style", "line-through"),
    ("style:text-overline-style", "overline"),
)


def _copy_properties(source: StyleDict, table: List[Tuple[str, str]]) -> StyleDict:
    mapped: StyleDict = {}
    for odf_key, css_key in table:
        value = source.get(odf_key)
        if value:
            mapped[css_key] = value
    return mapped


def _format_number(value: float) -> str:
    """Shortest decimal form, "0.5" rather than "0.50" and "1" rather than "1.0"."""
    return f"{value:g}"


def normalize_opacity(value: str) -> Optional[str]:
    """
    Normalize loext:opacity to a CSS opacity in [0, 1].

    Percentages are clamped to [0, 100]; bare numbers in [0, 1] pass through
    and numbers in (1, 100] are read as percentages.
    """
    trimmed = value.strip()
    try:
        if trimmed.endswith("%"):
            number = float(trimmed[:-1])
            return _format_number(max(0.0, min(number, 100.0)) / 100.0)
        number = float(trimmed)
    except ValueError:
        logger.debug(f"Ignoring unparsable opacity: {value!r}")
        return None
    if 0 <= number <= 1:
        return _format_number(number)
    if 1 < number <= 100:
        return _format_number(number / 100.0)
    return None


def map_paragraph_properties(source: StyleDict) -> StyleDict:
    return _copy_properties(source, PARAGRAPH_PROPERTY_MAP)


def map_text_properties(source: StyleDict) -> StyleDict:
    """
    Translate style:text-properties to CSS.

    Args:
        source: Resolved text properties

    Returns:
        CSS declarations
    """
    mapped = _copy_properties(source, TEXT_PROPERTY_MAP)
    if "font-size" not in mapped and source.get("style:font-size-asian"):
        mapped["font-size"] = source["style:font-size-asian"]

    opacity = source.get("loext:opacity")
    if opacity:
        normalized = normalize_opacity(opacity)
        if normalized is not None:
            mapped["opacity"] = normalized

    for key in FONT_NAME_KEYS:
        if source.get(key):
            mapped["font-family"] = source[key]
            break

    decorations = [
        name
        for key, name in DECORATION_KEYS
        if source.get(key) and source[key].lower() != "none"
    ]
    if decorations:
        mapped["text-decoration-line"] = " ".join(decorations)

    underline_color = source.get("style:text-underline-color")
    if underline_color and underline_color.lower() != "font-color":
        mapped["text-decoration-color"] = underline_color

    underline_width = source.get("style:text-underline-width")
    if underline_width:
        mapped["text-decoration-thickness"] = underline_width

    position = source.get("style:text-position")
    if position:
        lowered = position.lower()
        if "super" in lowered:
            mapped["vertical-align"] = "super"
        elif "sub" in lowered:
            mapped["vertical-align"] = "sub"

    return mapped


def map_table_properties(source: StyleDict) -> StyleDict:
    mapped = _copy_properties(source, TABLE_PROPERTY_MAP)
    border_model = source.get("table:border-model")
    if border_model:
        mapped["border-collapse"] = "collapse" if border_model == "collapsing" else "separate"
    align = source.get("table:align")
    if align == "center":
        mapped["margin-left"] = "auto"
        mapped["margin-right"] = "auto"
    elif align == "right":
        mapped["margin-left"] = "auto"
    return mapped


def map_table_column_properties(source: StyleDict) -> StyleDict:
    return _copy_properties(source, TABLE_COLUMN_PROPERTY_MAP)


def map_table_row_properties(source: StyleDict) -> StyleDict:
    mapped = _copy_properties(source, TABLE_ROW_PROPERTY_MAP)
    keep_together = source.get("fo:keep-together")
    if keep_together and keep_together.lower() == "always":
        mapped["page-break-inside"] = "avoid"
    return mapped


def map_table_cell_properties(source: StyleDict) -> StyleDict:
    return _copy_properties(source, TABLE_CELL_PROPERTY_MAP)


def combine_styles(*styles: Optional[StyleDict]) -> StyleDict:
    """Merge CSS dicts left to right, skipping empty values."""
    result: StyleDict = {}
    for style in styles:
        if not style:
            continue
        for key, value in style.items():
            if value:
                result[key] = value
    return result


def parse_inline_style(style: Optional[str]) -> StyleDict:
    """
    Parse an inline style attribute into a dict with lower-case keys.

    Declarations without a colon or value are dropped.
    """
    declarations: StyleDict = {}
    if not style:
        return declarations
    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = value.strip()
        if value.lower().endswith("!important"):
            value = value[: -len("!important")].strip()
        if name and value:
            declarations[name] = value
    return declarations
