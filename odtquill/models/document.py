"""
Export-side document model.

Intermediate tree produced from editor HTML and rendered into ODT content
XML. Optional fields stay None while they hold their default value so the
renderer can decide unambiguously whether to emit an attribute.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

ALIGN_VALUES = ("start", "center", "end", "justify")
FONT_FAMILY_ROLES = ("body", "serif", "gungsuh")

BLOCK_PARAGRAPH = "paragraph"
BLOCK_TABLE = "table"
BLOCK_PAGE_BREAK = "page_break"
BLOCK_TYPES = (BLOCK_PARAGRAPH, BLOCK_TABLE, BLOCK_PAGE_BREAK)

FormatKey = Tuple[bool, bool, bool, str, str, str]


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class TextSpan:
    """One run of text sharing a single formatting combination."""

    text: str
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    color: Optional[str] = None
    font_size: Optional[str] = None
    font_family: Optional[str] = None

    def format_key(self) -> FormatKey:
        """Formatting identity used for run merging; None equals False/""."""
        return (
            bool(self.bold),
            bool(self.italic),
            bool(self.underline),
            self.color or "",
            self.font_size or "",
            self.font_family or "",
        )

    def has_formatting(self) -> bool:
        """True when any character formatting besides the font role is set."""
        return bool(self.bold or self.italic or self.underline or self.color or self.font_size)

    def copy(self, **changes: Any) -> "TextSpan":
        data = dict(self.__dict__)
        data.update(changes)
        return TextSpan(**data)

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "text": self.text,
            "bold": self.bold,
            "italic": self.italic,
            "underline": self.underline,
            "color": self.color,
            "fontSize": self.font_size,
            "fontFamily": self.font_family,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextSpan":
        return cls(
            text=str(data.get("text", "")),
            bold=data.get("bold"),
            italic=data.get("italic"),
            underline=data.get("underline"),
            color=data.get("color"),
            font_size=data.get("fontSize"),
            font_family=data.get("fontFamily"),
        )


@dataclass
class Paragraph:
    """A paragraph; an empty span list is a visible blank line."""

    spans: List[TextSpan] = field(default_factory=list)
    align: Optional[str] = None
    line_height: Optional[str] = None
    margin_top: Optional[str] = None
    margin_bottom: Optional[str] = None
    margin_left: Optional[str] = None
    margin_right: Optional[str] = None
    text_indent: Optional[str] = None

    LAYOUT_FIELDS = (
        "line_height",
        "margin_top",
        "margin_bottom",
        "margin_left",
        "margin_right",
        "text_indent",
    )

    def get_text(self) -> str:
        return "".join(span.text for span in self.spans)

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "spans": [span.to_dict() for span in self.spans],
            "align": self.align,
            "lineHeight": self.line_height,
            "marginTop": self.margin_top,
            "marginBottom": self.margin_bottom,
            "marginLeft": self.margin_left,
            "marginRight": self.margin_right,
            "textIndent": self.text_indent,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Paragraph":
        return cls(
            spans=[TextSpan.from_dict(span) for span in data.get("spans") or []],
            align=data.get("align"),
            line_height=data.get("lineHeight"),
            margin_top=data.get("marginTop"),
            margin_bottom=data.get("marginBottom"),
            margin_left=data.get("marginLeft"),
            margin_right=data.get("marginRight"),
            text_indent=data.get("textIndent"),
        )


@dataclass
class TableCell:
    paragraphs: List[Paragraph] = field(default_factory=list)
    col_span: Optional[int] = None
    row_span: Optional[int] = None
    background_color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "paragraphs": [p.to_dict() for p in self.paragraphs],
            "colSpan": self.col_span,
            "rowSpan": self.row_span,
            "backgroundColor": self.background_color,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableCell":
        return cls(
            paragraphs=[Paragraph.from_dict(p) for p in data.get("paragraphs") or []],
            col_span=data.get("colSpan"),
            row_span=data.get("rowSpan"),
            background_color=data.get("backgroundColor"),
        )


@dataclass
class TableRow:
    cells: List[TableCell] = field(default_factory=list)

    def span_width(self) -> int:
        """Number of grid columns this row's physical cells occupy."""
        return sum(cell.col_span or 1 for cell in self.cells)

    def to_dict(self) -> Dict[str, Any]:
        return {"cells": [cell.to_dict() for cell in self.cells]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableRow":
        return cls(cells=[TableCell.from_dict(c) for c in data.get("cells") or []])


@dataclass
class Table:
    """
    Table with sizing hints.

    width_pct is relative to the page content width; width_cm and
    column_widths are absolute centimeter strings.
    """

    rows: List[TableRow] = field(default_factory=list)
    width_pct: Optional[float] = None
    width_cm: Optional[str] = None
    column_widths: Optional[List[Optional[str]]] = None

    def column_count(self) -> int:
        """Maximum, across all rows, of the summed column spans."""
        if not self.rows:
            return 0
        return max(row.span_width() for row in self.rows)

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "rows": [row.to_dict() for row in self.rows],
            "widthPct": self.width_pct,
            "widthCm": self.width_cm,
            "columnWidths": list(self.column_widths) if self.column_widths is not None else None,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Table":
        widths = data.get("columnWidths")
        return cls(
            rows=[TableRow.from_dict(r) for r in data.get("rows") or []],
            width_pct=data.get("widthPct"),
            width_cm=data.get("widthCm"),
            column_widths=list(widths) if widths is not None else None,
        )


@dataclass
class OdtBlock:
    """Tagged body block: paragraph, table or page break."""

    type: str
    value: Union[Paragraph, Table, None] = None

    def __post_init__(self):
        if self.type not in BLOCK_TYPES:
            raise ValueError(f"Unknown block type: {self.type}")

    @classmethod
    def paragraph(cls, value: Paragraph) -> "OdtBlock":
        return cls(BLOCK_PARAGRAPH, value)

    @classmethod
    def table(cls, value: Table) -> "OdtBlock":
        return cls(BLOCK_TABLE, value)

    @classmethod
    def page_break(cls) -> "OdtBlock":
        return cls(BLOCK_PAGE_BREAK, None)

    def to_dict(self) -> Dict[str, Any]:
        if self.value is None:
            return {"type": self.type}
        return {"type": self.type, "value": self.value.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OdtBlock":
        block_type = data.get("type")
        if block_type == BLOCK_PARAGRAPH:
            return cls.paragraph(Paragraph.from_dict(data.get("value") or {}))
        if block_type == BLOCK_TABLE:
            return cls.table(Table.from_dict(data.get("value") or {}))
        return cls(str(block_type), None)


@dataclass
class OdtMeta:
    title: Optional[str] = None
    creator: Optional[str] = None


@dataclass
class OdtStyles:
    body_font: Optional[str] = None


@dataclass
class OdtDoc:
    """Root of the export-side model; body is in reading order."""

    meta: OdtMeta = field(default_factory=OdtMeta)
    styles: OdtStyles = field(default_factory=OdtStyles)
    body: List[OdtBlock] = field(default_factory=list)

    def paragraphs(self) -> List[Paragraph]:
        """Top-level paragraphs, in order."""
        return [block.value for block in self.body if block.type == BLOCK_PARAGRAPH]

    def tables(self) -> List[Table]:
        return [block.value for block in self.body if block.type == BLOCK_TABLE]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": _compact({"title": self.meta.title, "creator": self.meta.creator}),
            "styles": _compact({"bodyFont": self.styles.body_font}),
            "body": [block.to_dict() for block in self.body],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OdtDoc":
        meta = data.get("meta") or {}
        styles = data.get("styles") or {}
        return cls(
            meta=OdtMeta(title=meta.get("title"), creator=meta.get("creator")),
            styles=OdtStyles(body_font=styles.get("bodyFont")),
            body=[OdtBlock.from_dict(block) for block in data.get("body") or []],
        )
