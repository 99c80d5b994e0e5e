"""Utility helpers for odtquill."""

from .color_utils import normalize_color, rgb_to_hex
from .logger import configure_logging, get_logger
from .rich_logger import RichLogger, get_rich_logger, setup_logging
from .units import (
    DEFAULT_CONTENT_WIDTH_PX,
    PAGE_CONTENT_WIDTH_CM,
    css_font_size_to_pt,
    css_length_to_cm,
    normalize_line_height,
    px_to_cm,
)

__all__ = [
    "normalize_color",
    "rgb_to_hex",
    "configure_logging",
    "get_logger",
    "RichLogger",
    "get_rich_logger",
    "setup_logging",
    "DEFAULT_CONTENT_WIDTH_PX",
    "PAGE_CONTENT_WIDTH_CM",
    "css_font_size_to_pt",
    "css_length_to_cm",
    "normalize_line_height",
    "px_to_cm",
]
