"""
HTML parser - converts editor HTML into the ODT document model.

Handles:
- Block segmentation of paragraphs, lists, tables and page breaks
- Inline run extraction with inherited character formatting
- Table sizing from explicit widths or measured layout geometry
- Length, font size and color normalization
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

import lxml.html
from lxml import etree

from ..config import ConversionOptions
from ..models.document import (
    BLOCK_PAGE_BREAK,
    BLOCK_PARAGRAPH,
    BLOCK_TABLE,
    FONT_FAMILY_ROLES,
    OdtBlock,
    OdtDoc,
    OdtMeta,
    OdtStyles,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    TextSpan,
)
from ..styles.style_map import (
    FONT_FAMILY_ATTRIBUTE,
    class_styles,
    font_role_for_classes,
    font_role_for_css,
    parse_inline_style,
)
from ..utils.color_utils import normalize_color
from ..utils.units import (
    css_font_size_to_pt,
    css_length_to_cm,
    format_cm,
    normalize_line_height,
    parse_html_integer,
    parse_leading_float,
    px_to_cm,
)
from .table_geometry import MAX_COL_SPAN, MAX_ROW_SPAN, LayoutProbe, TableMeasurement, measure_tables

logger = logging.getLogger(__name__)

PAGE_BREAK_COMMENT = "odt-page-break"
PAGE_BREAK_CLASS = "page-break"
PAGE_BREAK_ATTRIBUTE = "data-page-break"

LIST_INDENT_CM = 0.635
BULLET_MARKER = "• "

PARAGRAPH_TAGS = frozenset({"p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre"})
CONTAINER_CAPABLE_TAGS = frozenset({"div", "blockquote"})
# Paragraph tags that still produce a visible blank line when empty
BLANK_LINE_TAGS = frozenset({"p", "div", "pre"})

BLOCK_TAGS = frozenset({
    "p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre",
    "ul", "ol", "li", "table", "section", "article", "header", "footer",
    "main", "nav", "aside", "figure", "dl", "dt", "dd", "form", "hr",
    "address", "details", "summary", "fieldset",
})

SKIPPED_TAGS = frozenset({
    "script", "style", "head", "title", "meta", "link", "template", "noscript",
    "colgroup", "col", "hr", "img",
})

BLOCK_TAG_SPAN_STYLES: Dict[str, Dict[str, Any]] = {
    "h1": {"bold": True, "font_size": "24pt"},
    "h2": {"bold": True, "font_size": "20pt"},
    "h3": {"bold": True, "font_size": "18pt"},
    "h4": {"bold": True, "font_size": "16pt"},
    "h5": {"bold": True, "font_size": "14pt"},
    "h6": {"bold": True, "font_size": "12pt"},
}

INLINE_TAG_STYLES: Dict[str, Dict[str, Any]] = {
    "strong": {"bold": True},
    "b": {"bold": True},
    "em": {"italic": True},
    "i": {"italic": True},
    "u": {"underline": True},
    "ins": {"underline": True},
}

ALIGN_VALUES = {
    "center": "center",
    "right": "end",
    "end": "end",
    "justify": "justify",
    "left": "start",
    "start": "start",
}

PARAGRAPH_LAYOUT_PROPERTIES = (
    ("margin-top", "margin_top"),
    ("margin-bottom", "margin_bottom"),
    ("margin-left", "margin_left"),
    ("margin-right", "margin_right"),
    ("text-indent", "text_indent"),
)

_ASCII_WHITESPACE = re.compile(r"[ \t\n\r\f]+")
_PERCENT = re.compile(r"([\d.]+)\s*%")
_FULL_DOCUMENT = re.compile(r"<\s*(html|body)[\s>]", re.IGNORECASE)

SpanStyle = Dict[str, Any]


@dataclass
class ElementStyles:
    """Formatting an element contributes to its content."""

    span: SpanStyle
    align: Optional[str]
    layout: Dict[str, str]


class _BuildContext:
    """Per-build state: measured geometry and the table cursor."""

    def __init__(self, measurements: List[TableMeasurement], page_width_cm: float):
        self.measurements = measurements
        self.page_width_cm = page_width_cm
        self.cursor = 0
        # Paragraphs that already carry a list marker
        self.marked = set()

    def next_measurement(self) -> Optional[TableMeasurement]:
        index = self.cursor
        self.cursor += 1
        if index < len(self.measurements):
            return self.measurements[index]
        return None


def _tag(el) -> Optional[str]:
    """Lower-case tag name, or None for comments and processing instructions."""
    if not isinstance(el.tag, str):
        return None
    return el.tag.lower()


def _classes(el) -> List[str]:
    return (el.get("class") or "").split()


def _is_page_break_comment(el) -> bool:
    return el.tag is etree.Comment and (el.text or "").strip() == PAGE_BREAK_COMMENT


def _is_page_break_marker(el) -> bool:
    return el.get(PAGE_BREAK_ATTRIBUTE) is not None or PAGE_BREAK_CLASS in _classes(el)


def _contains_block(el) -> bool:
    return any(_tag(child) in BLOCK_TAGS for child in el.iterdescendants())


def _has_block_children(el) -> bool:
    return any(_tag(child) in BLOCK_TAGS for child in el)


def merge_span_styles(base: SpanStyle, *others: SpanStyle) -> SpanStyle:
    """Merge span styles left to right; None values do not override."""
    merged = dict(base)
    for style in others:
        for key, value in style.items():
            if value is not None:
                merged[key] = value
    return merged


def make_span(text: str, style: SpanStyle) -> TextSpan:
    """Create a span, keeping default-valued fields at None."""
    return TextSpan(
        text=text,
        bold=True if style.get("bold") else None,
        italic=True if style.get("italic") else None,
        underline=True if style.get("underline") else None,
        color=style.get("color") or None,
        font_size=style.get("font_size") or None,
        font_family=style.get("font_family") or None,
    )


def merge_adjacent_spans(spans: List[TextSpan]) -> List[TextSpan]:
    """
    Merge adjacent spans with identical formatting.

    Empty spans are dropped.

    Args:
        spans: Spans in reading order

    Returns:
        New list where no two neighbours share a format key
    """
    merged: List[TextSpan] = []
    for span in spans:
        if not span.text:
            continue
        if merged and merged[-1].format_key() == span.format_key():
            merged[-1] = merged[-1].copy(text=merged[-1].text + span.text)
        else:
            merged.append(span.copy())
    return merged


def css_to_styles(css: Dict[str, str]) -> ElementStyles:
    """
    Translate CSS declarations into span, alignment and layout styles.

    Args:
        css: Lower-case CSS declarations

    Returns:
        ElementStyles
    """
    span: SpanStyle = {}

    weight = css.get("font-weight", "").lower()
    if weight:
        numeric = parse_leading_float(weight)
        if "bold" in weight or (numeric is not None and numeric >= 600):
            span["bold"] = True
        elif weight in ("normal", "lighter") or (numeric is not None and numeric < 600):
            span["bold"] = False

    font_style = css.get("font-style", "").lower()
    if "italic" in font_style or "oblique" in font_style:
        span["italic"] = True
    elif font_style == "normal":
        span["italic"] = False

    decoration = (css.get("text-decoration-line") or css.get("text-decoration") or "").lower()
    if "underline" in decoration:
        span["underline"] = True
    elif decoration == "none":
        span["underline"] = False

    color = normalize_color(css.get("color"))
    if color:
        span["color"] = color

    font_size = css_font_size_to_pt(css.get("font-size"))
    if font_size:
        span["font_size"] = font_size

    role = font_role_for_css(css.get("font-family"))
    if role:
        span["font_family"] = role

    align = ALIGN_VALUES.get(css.get("text-align", "").strip().lower())

    layout: Dict[str, str] = {}
    line_height = normalize_line_height(css.get("line-height"))
    if line_height:
        layout["line_height"] = line_height
    for css_key, field_name in PARAGRAPH_LAYOUT_PROPERTIES:
        value = css_length_to_cm(css.get(css_key))
        if value:
            layout[field_name] = value

    return ElementStyles(span=span, align=align, layout=layout)


def collect_css_styles(el) -> Dict[str, str]:
    """Class styles first, then presentational attributes, then inline style."""
    css = class_styles(_classes(el))
    if _tag(el) == "font" and el.get("color"):
        css["color"] = el.get("color")
    css.update(parse_inline_style(el.get("style")))
    return css


def get_element_styles(el) -> ElementStyles:
    tag = _tag(el) or ""
    styles = css_to_styles(collect_css_styles(el))

    role = None
    attribute_role = (el.get(FONT_FAMILY_ATTRIBUTE) or "").strip().lower()
    if attribute_role in FONT_FAMILY_ROLES:
        role = attribute_role
    role = role or font_role_for_classes(_classes(el))

    styles.span = merge_span_styles(
        BLOCK_TAG_SPAN_STYLES.get(tag, {}),
        INLINE_TAG_STYLES.get(tag, {}),
        styles.span,
        {"font_family": role},
    )
    return styles


def _span_count(value: Optional[str], limit: int = MAX_COL_SPAN) -> Optional[int]:
    """Parse a colspan/rowspan/span attribute, clamped to [1, limit]; 1 comes back as None."""
    number = parse_html_integer(value)
    if number is None or number <= 1:
        return None
    return min(number, limit)


class HtmlToDocModel:
    """
    Converter from editor HTML to OdtDoc.

    Styles are read from the parsed HTML only; rendered geometry enters
    solely through an optional LayoutProbe and is used for table widths.
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        """
        Initialize converter.

        Args:
            options: Conversion options (document meta, page and content widths)
        """
        self.options = options or ConversionOptions()

    def convert(self, html: Optional[str], probe: Optional[LayoutProbe] = None) -> OdtDoc:
        """
        Convert an HTML string to an OdtDoc.

        Args:
            html: Editor HTML (fragment or full document)
            probe: Optional source of rendered table geometry

        Returns:
            Fully populated OdtDoc
        """
        doc = OdtDoc(
            meta=OdtMeta(title=self.options.title, creator=self.options.creator),
            styles=OdtStyles(body_font=self.options.body_font),
        )

        root = self._parse(html)
        if root is None:
            return doc

        ctx = _BuildContext(
            measure_tables(probe, self.options.effective_content_width_px()),
            self.options.page_content_width_cm,
        )
        doc.body = self._collect_blocks(root, ctx, {}, None)
        logger.debug(
            f"Converted HTML to {len(doc.body)} blocks "
            f"({len(doc.paragraphs())} paragraphs, {len(doc.tables())} tables)"
        )
        return doc

    def _parse(self, html: Optional[str]):
        if not html or not html.strip():
            return None
        if _FULL_DOCUMENT.search(html):
            return lxml.html.document_fromstring(html).body
        return lxml.html.fragment_fromstring(html, create_parent="div")

    def _collect_blocks(self, container, ctx: _BuildContext, inherited: SpanStyle,
                        inherited_align: Optional[str], list_level: int = 0) -> List[OdtBlock]:
        """
        Segment the children of a container into blocks.

        Loose text and inline elements between blocks are gathered into
        implicit paragraphs.
        """
        blocks: List[OdtBlock] = []
        pending: List[Any] = []

        def flush() -> None:
            if not pending:
                return
            spans = self._extract_spans(pending, inherited, preserve=False)
            pending.clear()
            if spans:
                blocks.append(OdtBlock.paragraph(Paragraph(spans=spans, align=inherited_align)))

        if container.text:
            pending.append(container.text)

        for child in container:
            tag = _tag(child)
            if _is_page_break_comment(child):
                flush()
                blocks.append(OdtBlock.page_break())
            elif tag is None:
                pass
            elif _is_page_break_marker(child):
                flush()
                blocks.append(OdtBlock.page_break())
            elif tag in SKIPPED_TAGS:
                pass
            elif tag == "table":
                flush()
                blocks.append(OdtBlock.table(self._convert_table(child, ctx, inherited, inherited_align)))
            elif tag in ("ul", "ol"):
                flush()
                blocks.extend(self._convert_list(child, ctx, inherited, inherited_align, list_level))
            elif tag in PARAGRAPH_TAGS and not (tag in CONTAINER_CAPABLE_TAGS and _has_block_children(child)):
                flush()
                paragraph = self._element_to_paragraph(child, inherited, inherited_align)
                if paragraph is not None:
                    blocks.append(OdtBlock.paragraph(paragraph))
            elif tag in BLOCK_TAGS or _contains_block(child):
                flush()
                styles = get_element_styles(child)
                blocks.extend(self._collect_blocks(
                    child,
                    ctx,
                    merge_span_styles(inherited, styles.span),
                    styles.align or inherited_align,
                    list_level,
                ))
            else:
                pending.append(child)

            if child.tail:
                pending.append(child.tail)

        flush()
        return blocks

    def _element_to_paragraph(self, el, inherited: SpanStyle,
                              inherited_align: Optional[str]) -> Optional[Paragraph]:
        styles = get_element_styles(el)
        base = merge_span_styles(inherited, styles.span)
        tag = _tag(el)
        preserve = tag == "pre"

        nodes: List[Any] = []
        if el.text:
            nodes.append(el.text[1:] if preserve and el.text.startswith("\n") else el.text)
        for child in el:
            nodes.append(child)
            if child.tail:
                nodes.append(child.tail)

        spans = self._extract_spans(nodes, base, preserve=preserve)
        if not spans and tag not in BLANK_LINE_TAGS:
            return None

        paragraph = Paragraph(spans=spans, align=styles.align or inherited_align)
        for field_name, value in styles.layout.items():
            setattr(paragraph, field_name, value)
        return paragraph

    def _extract_spans(self, nodes: List[Any], style: SpanStyle, preserve: bool) -> List[TextSpan]:
        """
        Flatten text and inline elements into merged spans.

        One trailing line break (the editor's placeholder <br>) is removed
        and, outside <pre>, ASCII whitespace is collapsed and trimmed at
        the paragraph edges.
        """
        raw: List[TextSpan] = []
        self._walk_inline(nodes, style, raw, preserve)

        if not preserve:
            raw = self._collapse_whitespace(raw)

        if raw and raw[-1].text.endswith("\n"):
            raw[-1] = raw[-1].copy(text=raw[-1].text[:-1])

        return merge_adjacent_spans(raw)

    def _walk_inline(self, nodes: List[Any], style: SpanStyle, out: List[TextSpan],
                     preserve: bool = False) -> None:
        for node in nodes:
            if isinstance(node, str):
                # Outside <pre> only <br> may produce "\n"
                text = node if preserve else _ASCII_WHITESPACE.sub(" ", node)
                if text:
                    out.append(make_span(text, style))
                continue

            tag = _tag(node)
            if tag is None or tag in SKIPPED_TAGS:
                if tag == "img":
                    logger.debug("Skipping inline image during export")
                continue
            if tag == "br":
                out.append(make_span("\n", style))
                continue

            child_style = merge_span_styles(style, get_element_styles(node).span)
            children: List[Any] = []
            if node.text:
                children.append(node.text)
            for child in node:
                children.append(child)
                if child.tail:
                    children.append(child.tail)
            self._walk_inline(children, child_style, out, preserve)

    def _collapse_whitespace(self, spans: List[TextSpan]) -> List[TextSpan]:
        result: List[TextSpan] = []
        after_space = True
        for span in spans:
            if span.text == "\n":
                if result:
                    result[-1] = result[-1].copy(text=result[-1].text.rstrip(" "))
                result.append(span)
                after_space = True
                continue
            text = _ASCII_WHITESPACE.sub(" ", span.text)
            if after_space:
                text = text.lstrip(" ")
            if not text:
                continue
            after_space = text.endswith(" ")
            result.append(span.copy(text=text))

        while result:
            trimmed = result[-1].text.rstrip(" ")
            if trimmed:
                result[-1] = result[-1].copy(text=trimmed)
                break
            result.pop()
        return result

    def _convert_list(self, list_el, ctx: _BuildContext, inherited: SpanStyle,
                      inherited_align: Optional[str], level: int) -> List[OdtBlock]:
        """
        Convert <ul>/<ol> items into marker-prefixed paragraphs.

        Nested lists follow their parent item, indented one step per level.
        """
        ordered = _tag(list_el) == "ol"
        start = parse_html_integer(list_el.get("start")) if ordered else None
        number = start if start is not None else 1
        list_styles = get_element_styles(list_el)
        list_inherited = merge_span_styles(inherited, list_styles.span)
        indent = format_cm(LIST_INDENT_CM * level) if level > 0 else None

        blocks: List[OdtBlock] = []
        for item in list_el:
            if _tag(item) != "li":
                continue
            marker = f"{number}. " if ordered else BULLET_MARKER
            number += 1

            item_styles = get_element_styles(item)
            item_inherited = merge_span_styles(list_inherited, item_styles.span)
            item_align = item_styles.align or list_styles.align or inherited_align
            item_blocks = self._collect_blocks(item, ctx, item_inherited, item_align, level + 1)

            first = item_blocks[0] if item_blocks else None
            if (first is not None and first.type == BLOCK_PARAGRAPH
                    and id(first.value) not in ctx.marked):
                paragraph = first.value
                if paragraph.spans:
                    head = paragraph.spans[0]
                    paragraph.spans[0] = head.copy(text=marker + head.text)
                else:
                    paragraph.spans = [make_span(marker, item_inherited)]
            else:
                paragraph = Paragraph(spans=[make_span(marker, item_inherited)], align=item_align)
                item_blocks.insert(0, OdtBlock.paragraph(paragraph))
            for field_name, value in item_styles.layout.items():
                setattr(paragraph, field_name, value)

            for block in item_blocks:
                if block.type != BLOCK_PARAGRAPH or id(block.value) in ctx.marked:
                    continue
                if indent and not block.value.margin_left:
                    block.value.margin_left = indent
                ctx.marked.add(id(block.value))
            blocks.extend(item_blocks)
        return blocks

    def _convert_table(self, table_el, ctx: _BuildContext, inherited: SpanStyle,
                       inherited_align: Optional[str]) -> Table:
        """
        Convert a <table> element.

        The measurement cursor advances for every table, including nested
        ones, so measurements stay aligned with document order.
        """
        measurement = ctx.next_measurement()
        table = Table()

        explicit_cm = self._table_width_cm(table_el)
        explicit_pct = self._table_width_pct(table_el)
        if explicit_cm:
            table.width_cm = explicit_cm
        elif explicit_pct is not None:
            table.width_pct = explicit_pct
        elif measurement is not None and measurement.table_ratio and measurement.table_ratio > 0:
            ratio = min(max(measurement.table_ratio, 0.01), 1.0)
            table.width_cm = format_cm(ctx.page_width_cm * ratio)

        rows = self._table_rows(table_el)
        table.column_widths = self._merge_column_widths(
            self._explicit_column_widths(table_el, rows),
            self._measured_column_widths(measurement, ctx.page_width_cm),
        )

        table_styles = get_element_styles(table_el)
        table_inherited = merge_span_styles(inherited, table_styles.span)
        for row_el in rows:
            row = TableRow()
            row_inherited = merge_span_styles(table_inherited, get_element_styles(row_el).span)
            for cell_el in self._row_cells(row_el):
                row.cells.append(self._convert_cell(cell_el, ctx, row_inherited, inherited_align))
            table.rows.append(row)
        return table

    def _convert_cell(self, cell_el, ctx: _BuildContext, inherited: SpanStyle,
                      inherited_align: Optional[str]) -> TableCell:
        css = collect_css_styles(cell_el)
        styles = get_element_styles(cell_el)
        background = normalize_color(css.get("background-color")) or normalize_color(cell_el.get("bgcolor"))

        blocks = self._collect_blocks(
            cell_el,
            ctx,
            merge_span_styles(inherited, styles.span),
            styles.align or inherited_align,
        )
        return TableCell(
            paragraphs=self._flatten_paragraphs(blocks),
            col_span=_span_count(cell_el.get("colspan")),
            row_span=_span_count(cell_el.get("rowspan"), MAX_ROW_SPAN),
            background_color=background,
        )

    def _flatten_paragraphs(self, blocks: List[OdtBlock]) -> List[Paragraph]:
        """Paragraphs of blocks, with nested tables unrolled row by row."""
        paragraphs: List[Paragraph] = []
        for block in blocks:
            if block.type == BLOCK_PARAGRAPH:
                paragraphs.append(block.value)
            elif block.type == BLOCK_TABLE:
                for row in block.value.rows:
                    for cell in row.cells:
                        paragraphs.extend(cell.paragraphs)
            elif block.type == BLOCK_PAGE_BREAK:
                logger.debug("Dropping page break inside table cell")
        return paragraphs

    def _table_rows(self, table_el) -> List[Any]:
        rows = []
        for child in table_el:
            tag = _tag(child)
            if tag == "tr":
                rows.append(child)
            elif tag in ("thead", "tbody", "tfoot"):
                rows.extend(row for row in child if _tag(row) == "tr")
        return rows

    def _row_cells(self, row_el) -> List[Any]:
        return [cell for cell in row_el if _tag(cell) in ("td", "th")]

    def _table_width_cm(self, table_el) -> Optional[str]:
        inline = parse_inline_style(table_el.get("style")).get("width")
        for candidate in (inline, table_el.get("width"), class_styles(_classes(table_el)).get("width")):
            width = css_length_to_cm(candidate)
            if width:
                return width
        return None

    def _table_width_pct(self, table_el) -> Optional[float]:
        source = parse_inline_style(table_el.get("style")).get("width") or table_el.get("width")
        if not source:
            return None
        match = _PERCENT.search(source)
        if not match:
            return None
        try:
            return float(match.group(1))
        except ValueError:
            return None

    def _explicit_column_widths(self, table_el, rows: List[Any]) -> List[Optional[str]]:
        """
        Column widths from <colgroup>, data-colwidth and cell widths.

        Earlier sources win; a column keeps the first width found.
        """
        widths: Dict[int, str] = {}

        for colgroup in table_el:
            if _tag(colgroup) != "colgroup":
                continue
            index = 0
            for col in colgroup:
                if _tag(col) != "col":
                    continue
                span = _span_count(col.get("span")) or 1
                source = parse_inline_style(col.get("style")).get("width") or col.get("width")
                width = css_length_to_cm(source)
                for _ in range(span):
                    if width:
                        widths.setdefault(index, width)
                    index += 1
            break

        for row in rows:
            column = 0
            for cell in self._row_cells(row):
                span = _span_count(cell.get("colspan")) or 1
                candidates = []
                for part in (cell.get("data-colwidth") or "").split(","):
                    number = parse_leading_float(part)
                    if number is not None and number > 0:
                        candidates.append(number)
                inline_width = css_length_to_cm(parse_inline_style(cell.get("style")).get("width"))
                attr_width = css_length_to_cm(cell.get("width"))
                for offset in range(span):
                    index = column + offset
                    if index not in widths and candidates:
                        px = candidates[offset] if offset < len(candidates) else candidates[0]
                        width = px_to_cm(px)
                        if width:
                            widths[index] = width
                    if index not in widths and inline_width:
                        widths[index] = inline_width
                    if index not in widths and attr_width:
                        widths[index] = attr_width
                column += span

        if not widths:
            return []
        return [widths.get(index) for index in range(max(widths) + 1)]

    def _measured_column_widths(self, measurement: Optional[TableMeasurement],
                                page_width_cm: float) -> List[Optional[str]]:
        if measurement is None:
            return []
        widths: List[Optional[str]] = []
        for ratio in measurement.column_ratios:
            if ratio is None or ratio <= 0:
                widths.append(None)
            else:
                widths.append(format_cm(page_width_cm * min(max(ratio, 0.001), 1.0)))
        return widths

    def _merge_column_widths(self, explicit: List[Optional[str]],
                             measured: List[Optional[str]]) -> Optional[List[Optional[str]]]:
        length = max(len(explicit), len(measured))
        merged = []
        for index in range(length):
            value = explicit[index] if index < len(explicit) else None
            if value is None and index < len(measured):
                value = measured[index]
            merged.append(value)
        return merged if any(merged) else None


def convert_html_to_odt_doc(html: Optional[str], probe: Optional[LayoutProbe] = None,
                            content_width_px: Optional[float] = None,
                            options: Optional[ConversionOptions] = None) -> OdtDoc:
    """
    Convert editor HTML to an OdtDoc.

    Args:
        html: Editor HTML
        probe: Optional source of rendered table geometry
        content_width_px: Rendered content area width; overrides options
        options: Conversion options

    Returns:
        OdtDoc
    """
    options = options or ConversionOptions()
    if content_width_px is not None:
        options = replace(options, content_width_px=content_width_px)
    return HtmlToDocModel(options).convert(html, probe)
