"""Style handling for odtquill."""

from .style_map import FONT_FAMILY_CLASSES, FONT_FAMILY_MAP, STYLE_MAP
from .style_registry import StyleRegistry

__all__ = ["FONT_FAMILY_CLASSES", "FONT_FAMILY_MAP", "STYLE_MAP", "StyleRegistry"]
