"""
Units converter for CSS lengths.

Handles CSS length parsing, centimeter normalization, font size conversion
and line height normalization for the ODT model.
"""

import math
import re
import logging
from typing import Optional, Tuple, Union

logger = logging.getLogger(__name__)

PX_PER_INCH = 96.0
PT_PER_INCH = 72.0
CM_PER_INCH = 2.54
MM_PER_CM = 10.0
PT_PER_PX = 0.75
EM_BASE_PT = 12.0

# A4 (21cm) minus 2cm margins on both sides
PAGE_CONTENT_WIDTH_CM = 17.0
DEFAULT_CONTENT_WIDTH_PX = PAGE_CONTENT_WIDTH_CM / CM_PER_INCH * PX_PER_INCH

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_CSS_LENGTH = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)\s*([a-z]*|%)$")
_HTML_INTEGER = re.compile(r"^[\t\n\f\r ]*([+-]?\d+)")
_CM_STRING = re.compile(r"^([\d.]+)\s*cm$", re.IGNORECASE)

_CM_PER_UNIT = {
    "cm": 1.0,
    "mm": 1.0 / MM_PER_CM,
    "in": CM_PER_INCH,
    "pt": CM_PER_INCH / PT_PER_INCH,
}

_FONT_SIZE_KEYWORDS = {
    "xx-small": 7.0,
    "x-small": 7.5,
    "small": 10.0,
    "medium": 12.0,
    "large": 13.5,
    "x-large": 18.0,
    "xx-large": 24.0,
}

_LINE_HEIGHT_KEYWORDS = ("normal", "inherit", "initial", "unset")

Number = Union[int, float]


def parse_leading_float(value: Optional[str]) -> Optional[float]:
    """
    Parse the numeric prefix of a string.

    Args:
        value: Text such as "12.5px" or "  3"

    Returns:
        Parsed number or None when the string does not start with a number
    """
    if value is None:
        return None
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return None
    try:
        return float(match.group(0))
    except ValueError:
        return None


def split_css_length(value: Optional[str]) -> Optional[Tuple[float, str]]:
    """
    Split a CSS dimension into its number and lower-case unit.

    The whole value must match, so "5vmin" yields (5.0, "vmin") rather
    than being read as inches. Unitless numbers yield an empty unit.
    """
    if value is None:
        return None
    match = _CSS_LENGTH.match(str(value).strip().lower())
    if not match:
        return None
    return float(match.group(1)), match.group(2)


def parse_html_integer(value: Optional[str]) -> Optional[int]:
    """Parse an HTML integer attribute: leading digits after optional whitespace and sign."""
    if value is None:
        return None
    match = _HTML_INTEGER.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def _positive(number: Optional[float]) -> Optional[float]:
    """Return the number when it is finite and strictly positive."""
    if number is None or not math.isfinite(number) or number <= 0:
        return None
    return number


def format_cm(value: Number) -> str:
    """Format centimeters with 4 decimal digits."""
    return f"{value:.4f}cm"


def _trim_decimal(value: float) -> str:
    text = f"{value:.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_pt(value: Number) -> str:
    """Format points rounded to 2 decimals without trailing zeros."""
    return f"{_trim_decimal(float(value))}pt"


def format_percent(value: Number) -> str:
    """Format a percentage clamped to [0, 1000]."""
    clamped = max(0.0, min(float(value), 1000.0))
    return f"{_trim_decimal(clamped)}%"


def px_to_cm(value: Optional[Number]) -> Optional[str]:
    """
    Convert CSS pixels to a centimeter string.

    Args:
        value: Pixel value

    Returns:
        Length like "2.5400cm", or None for non-positive or non-finite input
    """
    if value is None:
        return None
    px = _positive(float(value))
    if px is None:
        return None
    cm = _positive(px / PX_PER_INCH * CM_PER_INCH)
    if cm is None:
        return None
    return format_cm(cm)


def css_length_to_cm(value: Optional[str]) -> Optional[str]:
    """
    Convert a CSS length (px, pt, in, mm, cm or unitless px) to centimeters.

    Args:
        value: CSS length string

    Returns:
        Length like "1.0000cm", or None when the value is unparsable,
        relative (%, em, vw, ...) or not strictly positive
    """
    parsed = split_css_length(value)
    if parsed is None:
        return None
    number, unit = parsed

    if unit in ("px", ""):
        return px_to_cm(number)

    factor = _CM_PER_UNIT.get(unit)
    if factor is None:
        logger.debug(f"Ignoring unsupported CSS length: {value!r}")
        return None
    number = _positive(number)
    return format_cm(number * factor) if number is not None else None


def cm_string_to_float(value: Optional[str]) -> Optional[float]:
    """Parse a "N cm" string back to a positive float."""
    if not value:
        return None
    match = _CM_STRING.match(value.strip())
    if not match:
        return None
    return _positive(parse_leading_float(match.group(1)))


def css_font_size_to_pt(value: Optional[str]) -> Optional[str]:
    """
    Convert a CSS font size to points.

    px converts at 0.75pt/px, pt passes through, em/rem/% are relative
    to a 12pt base and unitless numbers are treated as pixels.
    """
    if value is None:
        return None
    trimmed = str(value).strip().lower()
    if trimmed in _FONT_SIZE_KEYWORDS:
        return format_pt(_FONT_SIZE_KEYWORDS[trimmed])

    parsed = split_css_length(trimmed)
    if parsed is None:
        return None
    number, unit = parsed
    number = _positive(number)
    if number is None:
        return None

    if unit in ("px", ""):
        return format_pt(number * PT_PER_PX)
    if unit == "pt":
        return format_pt(number)
    if unit in ("em", "rem"):
        return format_pt(number * EM_BASE_PT)
    if unit == "%":
        return format_pt(number / 100.0 * EM_BASE_PT)

    logger.debug(f"Ignoring unsupported CSS font size: {value!r}")
    return None


def normalize_line_height(value: Optional[str]) -> Optional[str]:
    """
    Normalize a CSS line-height to an ODF fo:line-height value.

    Percentages and unitless multipliers become percentages, px/pt become
    points and absolute lengths become centimeters.
    """
    if value is None:
        return None
    lowered = str(value).strip().lower()
    if lowered in _LINE_HEIGHT_KEYWORDS:
        return None

    parsed = split_css_length(lowered)
    if parsed is None:
        return None
    number, unit = parsed
    number = _positive(number)
    if number is None:
        return None

    if unit == "%":
        return format_percent(number)
    if unit == "px":
        return format_pt(number * PT_PER_PX)
    if unit == "pt":
        return format_pt(number)
    if unit in ("em", "rem", ""):
        return format_percent(number * 100)

    return css_length_to_cm(lowered)
