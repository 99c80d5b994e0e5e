"""
ODT content.xml renderer.

Handles rendering of the OdtDoc model into office:document-content with
interned automatic styles, font-face declarations and the page layout.
"""

import logging
import re
from typing import Optional

from lxml import etree

from ..exceptions import RenderingError
from ..models.document import (
    BLOCK_PAGE_BREAK,
    BLOCK_PARAGRAPH,
    BLOCK_TABLE,
    OdtDoc,
    Paragraph,
    Table,
    TextSpan,
)
from ..styles.style_registry import (
    DEFAULT_TABLE_CELL_STYLE,
    DEFAULT_TABLE_COLUMN_STYLE,
    DEFAULT_TABLE_ROW_STYLE,
    PAGE_BREAK_STYLE,
    StyleRegistry,
)
from ..utils.units import PAGE_CONTENT_WIDTH_CM
from ..utils.xml_utils import ODF_VERSION, element, nsmap, qn, to_xml_bytes
from .odt_templates import build_font_face_decls, build_page_layout

logger = logging.getLogger(__name__)

CONTENT_NAMESPACES = ("office", "text", "style", "table", "fo", "svg")

# Runs of two or more spaces, or a single tab
_WHITESPACE_RUN = re.compile(r"( {2,}|\t)")


def _append_text(parent: etree._Element, text: str) -> None:
    """Append character data after the last child of parent."""
    if not text:
        return
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + text
    else:
        parent.text = (parent.text or "") + text


def append_span_text(parent: etree._Element, text: str) -> None:
    """
    Append text to a text:span, encoding whitespace the ODF way.

    A run of N spaces keeps one literal space followed by text:s for the
    remaining N-1 (with text:c when more than one); tabs become text:tab.

    Args:
        parent: Element receiving the text
        text: Text without line breaks
    """
    for piece in _WHITESPACE_RUN.split(text):
        if not piece:
            continue
        if piece == "\t":
            element(parent, "text:tab")
        elif len(piece) >= 2 and piece.strip(" ") == "":
            _append_text(parent, " ")
            extra = len(piece) - 1
            element(parent, "text:s", {"text:c": str(extra) if extra > 1 else None})
        else:
            _append_text(parent, piece)


class OdtXmlRenderer:
    """
    Renders an OdtDoc into content.xml.

    A fresh StyleRegistry is created for every render() call, so repeated
    renders of the same document produce identical bytes.
    """

    def __init__(self, doc: OdtDoc, page_content_width_cm: float = PAGE_CONTENT_WIDTH_CM):
        """
        Initialize renderer.

        Args:
            doc: Document model to render
            page_content_width_cm: Content width used for default table sizing
        """
        self.doc = doc
        self.page_content_width_cm = page_content_width_cm
        self.registry: Optional[StyleRegistry] = None
        self._table_counter = 0

    def render(self) -> bytes:
        """
        Render content.xml.

        Returns:
            UTF-8 encoded XML document

        Raises:
            RenderingError: If a body block carries a value of the wrong kind
        """
        self.registry = StyleRegistry(self.page_content_width_cm)
        self._table_counter = 0

        root = etree.Element(qn("office:document-content"), nsmap=nsmap(*CONTENT_NAMESPACES))
        root.set(qn("office:version"), ODF_VERSION)
        build_font_face_decls(root, self.doc.styles.body_font)
        automatic = element(root, "office:automatic-styles")
        build_page_layout(automatic)

        body = element(root, "office:body")
        office_text = element(body, "office:text")
        for block in self.doc.body:
            self._render_block(office_text, block)

        self.registry.build_automatic_styles(automatic)
        logger.debug(f"Rendered content.xml with {len(self.doc.body)} blocks, {self._table_counter} tables")
        return to_xml_bytes(root)

    def _render_block(self, parent: etree._Element, block) -> None:
        if block.type == BLOCK_PARAGRAPH:
            if not isinstance(block.value, Paragraph):
                raise RenderingError("Paragraph block without paragraph value", repr(block.value))
            self._render_paragraph(parent, block.value)
        elif block.type == BLOCK_TABLE:
            if not isinstance(block.value, Table):
                raise RenderingError("Table block without table value", repr(block.value))
            self._render_table(parent, block.value)
        elif block.type == BLOCK_PAGE_BREAK:
            element(parent, "text:p", {"text:style-name": PAGE_BREAK_STYLE})
        else:
            raise RenderingError("Unknown block type", block.type)

    def _render_paragraph(self, parent: etree._Element, paragraph: Paragraph) -> etree._Element:
        node = element(parent, "text:p", {
            "text:style-name": self.registry.get_paragraph_style(paragraph),
        })
        for span in paragraph.spans:
            self._render_span(node, span)
        return node

    def _render_span(self, paragraph_node: etree._Element, span: TextSpan) -> None:
        style_name = self.registry.get_span_style(span)
        for index, token in enumerate(span.text.split("\n")):
            if index > 0:
                element(paragraph_node, "text:line-break")
            if not token:
                continue
            span_node = element(paragraph_node, "text:span", {"text:style-name": style_name})
            append_span_text(span_node, token)

    def _render_table(self, parent: etree._Element, table: Table) -> None:
        self._table_counter += 1
        column_count = table.column_count()
        table_style = self.registry.get_table_style(table.width_pct, table.column_widths, table.width_cm)

        table_node = element(parent, "table:table", {
            "table:name": f"Table{self._table_counter}",
            "table:style-name": table_style,
        })

        widths = table.column_widths or []
        for index in range(column_count):
            width = widths[index] if index < len(widths) else None
            column_style = self.registry.get_table_column_style(width) or DEFAULT_TABLE_COLUMN_STYLE
            element(table_node, "table:table-column", {"table:style-name": column_style})

        for row_index, row in enumerate(table.rows):
            if row.span_width() != column_count:
                logger.debug(
                    f"Table{self._table_counter} row {row_index} spans {row.span_width()} "
                    f"of {column_count} columns"
                )
            row_node = element(table_node, "table:table-row", {"table:style-name": DEFAULT_TABLE_ROW_STYLE})
            for cell in row.cells:
                cell_style = self.registry.get_table_cell_style(cell.background_color) or DEFAULT_TABLE_CELL_STYLE
                cell_node = element(row_node, "table:table-cell", {
                    "table:style-name": cell_style,
                    "table:number-columns-spanned": str(cell.col_span) if cell.col_span and cell.col_span > 1 else None,
                    "table:number-rows-spanned": str(cell.row_span) if cell.row_span and cell.row_span > 1 else None,
                })
                if not cell.paragraphs:
                    element(cell_node, "text:p")
                for paragraph in cell.paragraphs:
                    self._render_paragraph(cell_node, paragraph)


def build_content_xml(doc: OdtDoc) -> bytes:
    """Render content.xml for a document."""
    return OdtXmlRenderer(doc).render()
