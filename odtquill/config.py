"""
Conversion options for odtquill.

Handles document metadata defaults and the page geometry used when
normalizing measured table widths.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .utils.units import CM_PER_INCH, PAGE_CONTENT_WIDTH_CM, PX_PER_INCH

logger = logging.getLogger(__name__)

DEFAULT_BODY_FONT = "Malgun Gothic"
DEFAULT_FILENAME = "document.odt"


@dataclass
class ConversionOptions:
    """
    Options for HTML to ODT conversion.

    Args:
        title: Document title written to meta.xml
        creator: Document author written to meta.xml
        body_font: Preferred body font family
        page_content_width_cm: Width of the page content area
        content_width_px: Rendered width of the editor content area in pixels
        filename: Default output file name
    """

    title: Optional[str] = None
    creator: Optional[str] = None
    body_font: Optional[str] = DEFAULT_BODY_FONT
    page_content_width_cm: float = PAGE_CONTENT_WIDTH_CM
    content_width_px: Optional[float] = None
    filename: str = DEFAULT_FILENAME

    def effective_content_width_px(self) -> float:
        """Content width in pixels, derived from the page width when not set."""
        if self.content_width_px and self.content_width_px > 0:
            return float(self.content_width_px)
        return self.page_content_width_cm / CM_PER_INCH * PX_PER_INCH

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ConversionOptions":
        """
        Create options from a mapping, ignoring unknown keys.

        Args:
            data: Option values keyed by field name

        Returns:
            ConversionOptions
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in (data or {}).items():
            if key in known:
                values[key] = value
            else:
                logger.debug(f"Ignoring unknown conversion option: {key}")
        return cls(**values)
