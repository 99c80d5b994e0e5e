"""HTML parsing into the ODT document model."""

from .html_parser import HtmlToDocModel, convert_html_to_odt_doc, merge_adjacent_spans
from .table_geometry import (
    CellBox,
    LayoutProbe,
    StaticLayoutProbe,
    TableBox,
    TableMeasurement,
    measure_table_layout,
)

__all__ = [
    "HtmlToDocModel",
    "convert_html_to_odt_doc",
    "merge_adjacent_spans",
    "CellBox",
    "LayoutProbe",
    "StaticLayoutProbe",
    "TableBox",
    "TableMeasurement",
    "measure_table_layout",
]
