"""Importers producing editor HTML."""

from .markdown_importer import markdown_to_html
from .odt_json_importer import PAGE_BREAK_TOKEN, JsonToHtmlConverter, odt_json_to_html

__all__ = ["PAGE_BREAK_TOKEN", "JsonToHtmlConverter", "markdown_to_html", "odt_json_to_html"]
