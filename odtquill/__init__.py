"""
odtquill - conversion between resolved ODT JSON, editor HTML and ODT files.

Import path: ODT JSON -> HTML (JsonToHtmlConverter).
Export path: HTML -> OdtDoc (HtmlToDocModel) -> content.xml (OdtXmlRenderer)
-> .odt archive (OdtPackager).
"""

from .config import ConversionOptions
from .exceptions import (
    OdtQuillError,
    PackagingError,
    ParsingError,
    RenderingError,
    StyleError,
)
from .export import OdtPackager, OdtXmlRenderer, make_odt
from .importers import JsonToHtmlConverter, markdown_to_html, odt_json_to_html
from .models import OdtBlock, OdtDoc, Paragraph, Table, TableCell, TableRow, TextSpan
from .parser import HtmlToDocModel, StaticLayoutProbe, convert_html_to_odt_doc
from .styles import StyleRegistry
from .version import __version__

__all__ = [
    "ConversionOptions",
    "OdtQuillError",
    "PackagingError",
    "ParsingError",
    "RenderingError",
    "StyleError",
    "OdtPackager",
    "OdtXmlRenderer",
    "make_odt",
    "JsonToHtmlConverter",
    "markdown_to_html",
    "odt_json_to_html",
    "OdtBlock",
    "OdtDoc",
    "Paragraph",
    "Table",
    "TableCell",
    "TableRow",
    "TextSpan",
    "HtmlToDocModel",
    "StaticLayoutProbe",
    "convert_html_to_odt_doc",
    "StyleRegistry",
    "__version__",
]
