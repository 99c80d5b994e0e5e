"""Document models for odtquill."""

from .document import (
    BLOCK_PAGE_BREAK,
    BLOCK_PARAGRAPH,
    BLOCK_TABLE,
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
from .odt_json import OdtNode

__all__ = [
    "BLOCK_PAGE_BREAK",
    "BLOCK_PARAGRAPH",
    "BLOCK_TABLE",
    "OdtBlock",
    "OdtDoc",
    "OdtMeta",
    "OdtStyles",
    "Paragraph",
    "Table",
    "TableCell",
    "TableRow",
    "TextSpan",
    "OdtNode",
]
