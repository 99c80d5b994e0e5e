"""
Table geometry for HTML to ODT conversion.

Handles rendered table measurements: the LayoutProbe interface through
which rendered widths reach the converter, a static probe loaded from
captured geometry, and the normalization of pixel widths into ratios of
the content area.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from ..exceptions import ParsingError

logger = logging.getLogger(__name__)

# Limits browsers apply to HTMLTableCellElement.colSpan and rowSpan
MAX_COL_SPAN = 1000
MAX_ROW_SPAN = 65534


def _positive(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        return None
    return number


@dataclass
class CellBox:
    """Rendered width of one physical cell."""

    width_px: Optional[float] = None
    col_span: int = 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CellBox":
        span = data.get("colSpan", data.get("col_span", 1))
        try:
            span = min(max(int(span), 1), MAX_COL_SPAN)
        except (TypeError, ValueError, OverflowError):
            span = 1
        return cls(width_px=_positive(data.get("width", data.get("width_px"))), col_span=span)


@dataclass
class TableBox:
    """Rendered width of a table and of the cells of each row."""

    width_px: Optional[float] = None
    rows: List[List[CellBox]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableBox":
        rows = []
        for row in data.get("rows") or []:
            cells = row.get("cells") if isinstance(row, dict) else row
            rows.append([CellBox.from_dict(cell) for cell in cells or [] if isinstance(cell, dict)])
        return cls(width_px=_positive(data.get("width", data.get("width_px"))), rows=rows)


@dataclass
class TableMeasurement:
    """Table and column widths as fractions of the content width."""

    table_ratio: Optional[float] = None
    column_ratios: List[Optional[float]] = field(default_factory=list)


class LayoutProbe(Protocol):
    """Source of rendered table geometry, tables in document pre-order."""

    def table_boxes(self) -> Sequence[TableBox]:
        ...


class StaticLayoutProbe:
    """
    Layout probe serving fixed geometry.

    Geometry is typically captured from a browser rendering of the editor
    and stored as JSON: a list of {"width": px, "rows": [[{"width": px,
    "colSpan": n}, ...], ...]} objects.
    """

    def __init__(self, tables: Optional[Sequence[Union[TableBox, Dict[str, Any]]]] = None):
        self._tables: List[TableBox] = [
            table if isinstance(table, TableBox) else TableBox.from_dict(table)
            for table in tables or []
        ]

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "StaticLayoutProbe":
        """
        Load geometry from a JSON file.

        Args:
            path: File holding a list of tables, or {"tables": [...]}

        Returns:
            StaticLayoutProbe

        Raises:
            ParsingError: If the file cannot be read or is not valid geometry JSON
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ParsingError(f"Cannot read layout geometry: {path}", str(e)) from e

        if isinstance(data, dict):
            data = data.get("tables")
        if not isinstance(data, list):
            raise ParsingError(f"Layout geometry must be a list of tables: {path}")
        return cls([table for table in data if isinstance(table, dict)])

    def table_boxes(self) -> Sequence[TableBox]:
        return list(self._tables)


def measure_table_layout(box: TableBox, content_width_px: float) -> TableMeasurement:
    """
    Normalize rendered widths against the content area.

    Each column takes the widest value seen in any row, where a cell
    contributes its width divided by its column span to every column it
    covers.

    Args:
        box: Rendered table geometry
        content_width_px: Content area width in pixels

    Returns:
        TableMeasurement with None for unmeasurable values
    """
    if not content_width_px or content_width_px <= 0:
        return TableMeasurement()

    table_width = _positive(box.width_px)
    table_ratio = table_width / content_width_px if table_width else None

    column_count = max((sum(max(cell.col_span, 1) for cell in row) for row in box.rows), default=0)
    widths: List[Optional[float]] = [None] * column_count

    for row in box.rows:
        column = 0
        for cell in row:
            span = max(cell.col_span, 1)
            width = _positive(cell.width_px)
            per_column = width / span if width else None
            for offset in range(span):
                index = column + offset
                if index >= column_count or per_column is None:
                    continue
                current = widths[index]
                if current is None or per_column > current:
                    widths[index] = per_column
            column += span

    column_ratios = [width / content_width_px if width else None for width in widths]
    return TableMeasurement(table_ratio=table_ratio, column_ratios=column_ratios)


def measure_tables(probe: Optional[LayoutProbe], content_width_px: float) -> List[TableMeasurement]:
    """Measure every table the probe reports, in order."""
    if probe is None or not content_width_px or content_width_px <= 0:
        return []
    measurements = [measure_table_layout(box, content_width_px) for box in probe.table_boxes()]
    logger.debug(f"Measured {len(measurements)} tables against {content_width_px:.2f}px")
    return measurements
