"""
Style registry for ODT automatic styles.

Handles interning of text, paragraph, table, table-column and table-cell
styles during one content.xml build, and emits the collected styles as
office:automatic-styles children.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from lxml import etree

from ..exceptions import StyleError
from ..models.document import Paragraph, TextSpan
from ..utils.units import PAGE_CONTENT_WIDTH_CM, cm_string_to_float, format_cm
from ..utils.xml_utils import element
from .style_map import FONT_FAMILY_MAP

logger = logging.getLogger(__name__)

BODY_FONT = "BodyFont"
EMOJI_FONT = "EmojiFont"
GUNGSUH_FONT = "GungsuhFont"

CELL_BORDER = "0.75pt solid #c5ccd6"
CELL_PADDING = "0.20cm"

PAGE_BREAK_STYLE = "PageBreak"
DEFAULT_TABLE_ROW_STYLE = "TableRow"
DEFAULT_TABLE_COLUMN_STYLE = "TableColumn"
DEFAULT_TABLE_CELL_STYLE = "TableCell"

# Text properties selecting the font of each role
ROLE_FONT_PROPERTIES: Dict[str, Dict[str, str]] = {
    "body": {"style:font-name": BODY_FONT},
    "serif": {"fo:font-family": "serif", "style:font-family-generic": "roman"},
    "gungsuh": {"style:font-name": GUNGSUH_FONT},
}

PARAGRAPH_ATTRIBUTES = (
    ("align", "fo:text-align"),
    ("line_height", "fo:line-height"),
    ("margin_top", "fo:margin-top"),
    ("margin_bottom", "fo:margin-bottom"),
    ("margin_left", "fo:margin-left"),
    ("margin_right", "fo:margin-right"),
    ("text_indent", "fo:text-indent"),
)

SpanKey = Tuple[str, bool, bool, bool, str, str]
ParagraphKey = Tuple[Tuple[str, str], ...]


def _style(parent: etree._Element, name: str, family: str) -> etree._Element:
    return element(parent, "style:style", {"style:name": name, "style:family": family})


class StyleRegistry:
    """
    Interns automatic styles for one document build.

    Each family keeps an insertion-ordered map from a canonical key to a
    sequential name, so identical input always yields identical names.
    """

    def __init__(self, page_content_width_cm: float = PAGE_CONTENT_WIDTH_CM):
        self.page_content_width_cm = page_content_width_cm
        self._span_styles: Dict[SpanKey, str] = {}
        self._paragraph_styles: Dict[ParagraphKey, str] = {}
        self._table_styles: Dict[Tuple[str, str], str] = {}
        self._table_column_styles: Dict[str, str] = {}
        self._table_cell_styles: Dict[str, str] = {}
        self._consumed = False

    def get_span_style(self, span: TextSpan) -> Optional[str]:
        """
        Get the text style name for a span.

        Args:
            span: Text span

        Returns:
            Preset role style, interned T{n} name, or None for plain text
        """
        role = span.font_family if span.font_family in FONT_FAMILY_MAP else None
        if not span.has_formatting():
            return FONT_FAMILY_MAP[role] if role else None

        key: SpanKey = (
            role or "",
            bool(span.bold),
            bool(span.italic),
            bool(span.underline),
            span.color or "",
            span.font_size or "",
        )
        existing = self._span_styles.get(key)
        if existing:
            return existing

        name = f"T{len(self._span_styles) + 1}"
        self._span_styles[key] = name
        logger.debug(f"Registered text style {name} for {key}")
        return name

    def get_paragraph_style(self, paragraph: Paragraph) -> Optional[str]:
        """Get the PStyle{n} name for a paragraph, or None at defaults."""
        props: List[Tuple[str, str]] = []
        for field_name, attribute in PARAGRAPH_ATTRIBUTES:
            value = getattr(paragraph, field_name)
            if field_name == "align" and value == "start":
                continue
            if value:
                props.append((attribute, value))
        if not props:
            return None

        key: ParagraphKey = tuple(props)
        existing = self._paragraph_styles.get(key)
        if existing:
            return existing

        name = f"PStyle{len(self._paragraph_styles) + 1}"
        self._paragraph_styles[key] = name
        return name

    def get_table_style(self, width_pct: Optional[float] = None,
                        column_widths: Optional[Sequence[Optional[str]]] = None,
                        width_cm: Optional[str] = None) -> str:
        """
        Get the TableCustom{n} name for a table.

        Absolute widths win over relative ones: width_cm, then the sum of
        centimeter column widths, then width_pct, then the full content width.

        Args:
            width_pct: Relative width in percent of the content width
            column_widths: Column widths as centimeter strings
            width_cm: Explicit absolute width

        Returns:
            Table style name
        """
        absolute = width_cm or self._sum_column_widths(column_widths)
        if absolute:
            key = ("abs", absolute)
        elif width_pct:
            clamped = max(1.0, min(float(width_pct), 1000.0))
            key = ("rel", f"{clamped:.2f}%")
        else:
            key = ("abs", format_cm(self.page_content_width_cm))

        existing = self._table_styles.get(key)
        if existing:
            return existing

        name = f"TableCustom{len(self._table_styles) + 1}"
        self._table_styles[key] = name
        return name

    def get_table_column_style(self, width: Optional[str]) -> Optional[str]:
        value = width.strip() if width else ""
        if not value:
            return None
        existing = self._table_column_styles.get(value)
        if existing:
            return existing
        name = f"TableColumnCustom{len(self._table_column_styles) + 1}"
        self._table_column_styles[value] = name
        return name

    def get_table_cell_style(self, background: Optional[str]) -> Optional[str]:
        value = background.strip() if background else ""
        if not value:
            return None
        existing = self._table_cell_styles.get(value)
        if existing:
            return existing
        name = f"TableCellCustom{len(self._table_cell_styles) + 1}"
        self._table_cell_styles[value] = name
        return name

    def _sum_column_widths(self, column_widths: Optional[Sequence[Optional[str]]]) -> Optional[str]:
        if not column_widths:
            return None
        values = [cm_string_to_float(width) for width in column_widths]
        numbers = [value for value in values if value is not None]
        if not numbers:
            return None
        return format_cm(sum(numbers))

    def build_automatic_styles(self, parent: etree._Element) -> None:
        """
        Append base and interned styles to office:automatic-styles.

        Order: base styles, then tables, columns, cells, paragraphs and
        text styles, each in first-use order.

        Args:
            parent: office:automatic-styles element

        Raises:
            StyleError: If the registry was already emitted
        """
        if self._consumed:
            raise StyleError("Style registry already emitted", "create a new registry per document")
        self._consumed = True

        self._build_base_styles(parent)

        for (kind, value), name in self._table_styles.items():
            node = _style(parent, name, "table")
            attrs = {"table:align": "left", "table:border-model": "collapsing"}
            if kind == "abs":
                attrs["style:width"] = value
            else:
                ratio = float(value.rstrip("%")) / 100.0
                attrs["style:width"] = format_cm(self.page_content_width_cm * ratio)
                attrs["style:rel-width"] = value
            element(node, "style:table-properties", attrs)

        for width, name in self._table_column_styles.items():
            node = _style(parent, name, "table-column")
            element(node, "style:table-column-properties", {"style:column-width": width})

        for background, name in self._table_cell_styles.items():
            node = _style(parent, name, "table-cell")
            element(node, "style:table-cell-properties", {
                "fo:border": CELL_BORDER,
                "fo:padding": CELL_PADDING,
                "fo:background-color": background,
            })

        for props, name in self._paragraph_styles.items():
            node = _style(parent, name, "paragraph")
            element(node, "style:paragraph-properties", dict(props))

        for key, name in self._span_styles.items():
            role, bold, italic, underline, color, font_size = key
            attrs = dict(ROLE_FONT_PROPERTIES.get(role or "body"))
            if bold:
                attrs["fo:font-weight"] = "bold"
            if italic:
                attrs["fo:font-style"] = "italic"
            if underline:
                attrs["style:text-underline-style"] = "solid"
                attrs["style:text-underline-type"] = "single"
                attrs["style:text-underline-color"] = "font-color"
            if color:
                attrs["fo:color"] = color
            if font_size:
                attrs["fo:font-size"] = font_size
            node = _style(parent, name, "text")
            element(node, "style:text-properties", attrs)

        logger.debug(
            f"Emitted automatic styles: {len(self._span_styles)} text, "
            f"{len(self._paragraph_styles)} paragraph, {len(self._table_styles)} table, "
            f"{len(self._table_column_styles)} column, {len(self._table_cell_styles)} cell"
        )

    def _build_base_styles(self, parent: etree._Element) -> None:
        node = _style(parent, "P", "paragraph")
        element(node, "style:paragraph-properties", {
            "fo:margin-top": "0cm",
            "fo:margin-bottom": "0.42cm",
            "fo:line-height": "160%",
        })
        element(node, "style:text-properties", {"style:font-name": BODY_FONT, "fo:font-size": "12pt"})

        node = _style(parent, PAGE_BREAK_STYLE, "paragraph")
        element(node, "style:paragraph-properties", {"fo:break-before": "page"})

        node = _style(parent, "T", "text")
        element(node, "style:text-properties", {"style:font-name": BODY_FONT, "fo:font-size": "12pt"})

        for role, name in FONT_FAMILY_MAP.items():
            node = _style(parent, name, "text")
            element(node, "style:text-properties", ROLE_FONT_PROPERTIES[role])

        node = _style(parent, "Table", "table")
        element(node, "style:table-properties", {"table:align": "left", "table:border-model": "collapsing"})

        node = _style(parent, DEFAULT_TABLE_COLUMN_STYLE, "table-column")
        element(node, "style:table-column-properties")

        node = _style(parent, DEFAULT_TABLE_ROW_STYLE, "table-row")
        element(node, "style:table-row-properties")

        node = _style(parent, DEFAULT_TABLE_CELL_STYLE, "table-cell")
        element(node, "style:table-cell-properties", {"fo:border": CELL_BORDER, "fo:padding": CELL_PADDING})
