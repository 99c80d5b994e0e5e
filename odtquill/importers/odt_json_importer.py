"""
ODT JSON importer.

Converts a resolved-style ODT JSON node tree into an HTML fragment for a
contenteditable editing surface.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..models.odt_json import OdtNode
from ..styles.style_map import (
    StyleDict,
    combine_styles,
    map_paragraph_properties,
    map_table_cell_properties,
    map_table_column_properties,
    map_table_properties,
    map_table_row_properties,
    map_text_properties,
)

logger = logging.getLogger(__name__)

PAGE_BREAK_TOKEN = "<!--odt-page-break-->"
TABLE_CLASS = "odt-table"

PARAGRAPH_PROPERTIES = "style:paragraph-properties"
TEXT_PROPERTIES = "style:text-properties"
TABLE_PROPERTIES = "style:table-properties"
TABLE_COLUMN_PROPERTIES = "style:table-column-properties"
TABLE_ROW_PROPERTIES = "style:table-row-properties"
TABLE_CELL_PROPERTIES = "style:table-cell-properties"

# Elements that produce no output at all
IGNORED_ELEMENTS = frozenset({
    "text:sequence-decls",
    "text:sequence-decl",
    "text:bookmark",
    "text:bookmark-start",
    "text:bookmark-end",
    "office:annotation",
    "office:annotation-end",
    "table:covered-table-cell",
})


def escape_html(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def escape_html_attr(text: str) -> str:
    return escape_html(text).replace("`", "&#96;")


def style_attr(style: StyleDict) -> str:
    """Render a CSS dict as a style attribute, or "" when empty."""
    entries = [(key, value) for key, value in style.items() if value]
    if not entries:
        return ""
    value = "; ".join(f"{key}: {raw.replace(chr(34), chr(39))}" for key, raw in entries)
    return f' style="{value}"'


def _parse_int(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    digits = value.strip()
    sign = ""
    if digits[:1] in "+-":
        sign, digits = digits[0], digits[1:]
    end = 0
    while end < len(digits) and digits[end].isdigit():
        end += 1
    if end == 0:
        return None
    return int(sign + digits[:end])


def _span_attr(value: Optional[str], name: str) -> str:
    parsed = _parse_int(value)
    if parsed is None or parsed <= 1:
        return ""
    return f' {name}="{parsed}"'


class JsonToHtmlConverter:
    """
    Converter from resolved-style ODT JSON to HTML.

    Dispatches on element name over a closed set of ODF elements; every
    other element is flattened into its converted children.
    """

    def __init__(self):
        self._handlers = {
            "text:p": self._convert_paragraph,
            "text:h": self._convert_paragraph,
            "text:span": self._convert_span,
            "text:s": self._convert_space,
            "text:tab": lambda node: "&emsp;",
            "text:line-break": lambda node: "<br />",
            "text:soft-page-break": lambda node: PAGE_BREAK_TOKEN,
            "table:table": self._convert_table,
            "table:table-header-rows": self._convert_header_rows,
            "table:table-row": lambda node: self._convert_table_row(node, "td"),
            "table:table-cell": lambda node: self._convert_table_cell(node, "td"),
            "draw:image": self._convert_image,
        }

    def convert(self, document: Optional[Mapping[str, Any]]) -> str:
        """
        Convert an ODT JSON document to HTML.

        Args:
            document: Mapping with a "content" root node, or None

        Returns:
            HTML fragment; "" when there is no office:text
        """
        if not document or not isinstance(document, Mapping):
            return ""
        content = document.get("content")
        if not content:
            return ""

        root = OdtNode.from_dict(content)
        office_text = root.find("office:text")
        if office_text is None:
            logger.debug("No office:text node in document content")
            return ""

        html = self._convert_nodes(office_text.children)
        logger.debug(f"Converted {len(office_text.children)} top-level nodes to {len(html)} chars of HTML")
        return html

    def _convert_nodes(self, nodes: List[OdtNode]) -> str:
        return "".join(self._convert_node(node) for node in nodes)

    def _convert_node(self, node: OdtNode) -> str:
        if node.is_text():
            return escape_html(node.text_content or "")
        if node.name in IGNORED_ELEMENTS:
            return ""
        handler = self._handlers.get(node.name)
        if handler is not None:
            return handler(node)
        return self._convert_nodes(node.children)

    def _is_block_child(self, node: OdtNode) -> bool:
        if node.name in ("table:table", "draw:text-box"):
            return True
        if node.name == "draw:frame":
            return any(self._is_block_child(child) for child in node.children)
        return False

    def _convert_paragraph(self, node: OdtNode) -> str:
        style = style_attr(combine_styles(
            map_paragraph_properties(node.get_resolved_properties(PARAGRAPH_PROPERTIES)),
            map_text_properties(node.get_resolved_properties(TEXT_PROPERTIES)),
        ))
        if not node.children:
            return f"<p{style}><br /></p>"

        segments: List[str] = []
        inline: List[str] = []

        def flush() -> None:
            if not inline:
                return
            content = "".join(inline)
            segments.append(f"<p{style}>{content or '<br />'}</p>")
            inline.clear()

        # Tables and text boxes cannot live inside <p>; split around them
        for child in node.children:
            if self._is_block_child(child):
                flush()
                block_html = self._convert_node(child)
                if block_html:
                    segments.append(block_html)
            else:
                inline.append(self._convert_node(child))
        flush()

        if not segments:
            return f"<p{style}><br /></p>"
        return "".join(segments)

    def _convert_span(self, node: OdtNode) -> str:
        style = style_attr(map_text_properties(node.get_resolved_properties(TEXT_PROPERTIES)))
        content = self._convert_nodes(node.children)
        if not style and content:
            return content
        return f"<span{style}>{content or '&nbsp;'}</span>"

    def _convert_space(self, node: OdtNode) -> str:
        count = _parse_int(node.get_attribute("text:c")) or 1
        return "&nbsp;" * max(count, 1)

    def _convert_table(self, node: OdtNode) -> str:
        style = style_attr(map_table_properties(node.get_resolved_properties(TABLE_PROPERTIES)))
        columns = [child for child in node.children if child.name == "table:table-column"]
        header_groups = [child for child in node.children if child.name == "table:table-header-rows"]
        body_rows = [child for child in node.children if child.name == "table:table-row"]

        parts: List[str] = []
        if columns:
            parts.append(self._convert_columns(columns))
        header_rows = [
            self._convert_table_row(row, "th")
            for group in header_groups
            for row in group.children
            if row.name == "table:table-row"
        ]
        if header_rows:
            parts.append(f"<thead>{''.join(header_rows)}</thead>")
        if body_rows:
            rows = "".join(self._convert_table_row(row, "td") for row in body_rows)
            parts.append(f"<tbody>{rows}</tbody>")

        return f'<table class="{TABLE_CLASS}"{style}>{"".join(parts)}</table>'

    def _convert_columns(self, columns: List[OdtNode]) -> str:
        items: List[str] = []
        for column in columns:
            style = style_attr(map_table_column_properties(
                column.get_resolved_properties(TABLE_COLUMN_PROPERTIES)
            ))
            repeat = max(_parse_int(column.get_attribute("table:number-columns-repeated")) or 1, 1)
            items.append(f"<col{style} />" * repeat)
        return f"<colgroup>{''.join(items)}</colgroup>"

    def _convert_header_rows(self, node: OdtNode) -> str:
        rows = "".join(self._convert_table_row(child, "th") for child in node.children)
        return f"<thead>{rows}</thead>" if rows else ""

    def _convert_table_row(self, node: OdtNode, cell_tag: str) -> str:
        style = style_attr(map_table_row_properties(node.get_resolved_properties(TABLE_ROW_PROPERTIES)))
        cells: List[str] = []
        for child in node.children:
            if child.name == "table:table-cell":
                cells.append(self._convert_table_cell(child, cell_tag))
            else:
                cells.append(self._convert_node(child))
        return f"<tr{style}>{''.join(cells)}</tr>"

    def _convert_table_cell(self, node: OdtNode, tag: str) -> str:
        style = style_attr(combine_styles(
            map_table_cell_properties(node.get_resolved_properties(TABLE_CELL_PROPERTIES)),
            map_text_properties(node.get_resolved_properties(TEXT_PROPERTIES)),
        ))
        attrs = (
            style
            + _span_attr(node.get_attribute("table:number-columns-spanned"), "colspan")
            + _span_attr(node.get_attribute("table:number-rows-spanned"), "rowspan")
        )
        content = self._convert_nodes(node.children)
        return f"<{tag}{attrs}>{content or '<br />'}</{tag}>"

    def _convert_image(self, node: OdtNode) -> str:
        href = node.get_attribute("xlink:href") or ""
        mime = node.get_attribute("draw:mime-type")
        parts = [f'data-odt-src="{escape_html_attr(href)}"']
        if href:
            parts.append(f'src="{escape_html_attr(href)}"')
        if mime:
            parts.append(f'data-odt-mime="{escape_html_attr(mime)}"')
        return f"<img {' '.join(parts)} />"


def odt_json_to_html(document: Optional[Dict[str, Any]]) -> str:
    """Convert an ODT JSON document to an HTML fragment."""
    return JsonToHtmlConverter().convert(document)
