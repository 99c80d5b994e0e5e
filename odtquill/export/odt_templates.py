"""
Auxiliary ODT package parts.

Builds styles.xml, meta.xml, settings.xml and META-INF/manifest.xml, and
the font-face declarations and page layout shared with content.xml.
"""

import logging
from datetime import datetime
from typing import Optional

from lxml import etree

from ..utils.xml_utils import (
    ODF_VERSION,
    ODT_MIMETYPE,
    element,
    nsmap,
    qn,
    to_xml_bytes,
)
from ..version import __version__

logger = logging.getLogger(__name__)

GENERATOR = f"odtquill/{__version__}"

PAGE_LAYOUT_NAME = "PageLayout"
MASTER_PAGE_NAME = "Standard"

PAGE_LAYOUT = {
    "fo:page-width": "21cm",
    "fo:page-height": "29.7cm",
    "fo:margin-top": "2cm",
    "fo:margin-bottom": "2cm",
    "fo:margin-left": "2cm",
    "fo:margin-right": "2cm",
}

BODY_FONT_FAMILY = (
    "'Malgun Gothic','Nanum Gothic','Apple SD Gothic Neo',"
    "'Segoe UI Emoji','Apple Color Emoji','Noto Color Emoji',Arial"
)
EMOJI_FONT_FAMILY = "'Segoe UI Emoji','Apple Color Emoji','Noto Color Emoji'"
GUNGSUH_FONT_FAMILY = "'Gungsuh','궁서','GungsuhChe','궁서체'"

PACKAGE_PARTS = ("content.xml", "styles.xml", "meta.xml", "settings.xml")


def _root(name: str, *prefixes: str) -> etree._Element:
    root = etree.Element(qn(name), nsmap=nsmap(*prefixes))
    root.set(qn("office:version"), ODF_VERSION)
    return root


def build_font_face_decls(parent: etree._Element, body_font: Optional[str] = None) -> etree._Element:
    """
    Append office:font-face-decls with BodyFont, EmojiFont and GungsuhFont.

    Args:
        parent: Document root element
        body_font: Optional font family placed in front of the BodyFont chain

    Returns:
        The font-face-decls element
    """
    body_family = BODY_FONT_FAMILY
    font_name = body_font.strip().strip("'\"") if body_font else ""
    if font_name and f"'{font_name}'" not in BODY_FONT_FAMILY:
        body_family = f"'{font_name}',{BODY_FONT_FAMILY}"

    decls = element(parent, "office:font-face-decls")
    element(decls, "style:font-face", {
        "style:name": "BodyFont",
        "svg:font-family": body_family,
        "style:font-family-generic": "system",
        "style:font-pitch": "variable",
    })
    element(decls, "style:font-face", {
        "style:name": "EmojiFont",
        "svg:font-family": EMOJI_FONT_FAMILY,
        "style:font-family-generic": "system",
        "style:font-pitch": "variable",
    })
    element(decls, "style:font-face", {
        "style:name": "GungsuhFont",
        "svg:font-family": GUNGSUH_FONT_FAMILY,
    })
    return decls


def build_page_layout(parent: etree._Element) -> etree._Element:
    """Append the A4 page layout with 2cm margins."""
    layout = element(parent, "style:page-layout", {"style:name": PAGE_LAYOUT_NAME})
    element(layout, "style:page-layout-properties", PAGE_LAYOUT)
    return layout


def styles_xml(body_font: Optional[str] = None) -> bytes:
    """
    Build styles.xml.

    Holds the default paragraph and text styles, the page layout and the
    Standard master page.
    """
    root = _root("office:document-styles", "office", "style", "text", "fo", "svg")
    build_font_face_decls(root, body_font)

    styles = element(root, "office:styles")
    paragraph = element(styles, "style:default-style", {"style:family": "paragraph"})
    element(paragraph, "style:paragraph-properties", {
        "fo:margin-top": "0cm",
        "fo:margin-bottom": "0cm",
        "fo:line-height": "140%",
        "fo:text-indent": "0cm",
    })
    element(paragraph, "style:text-properties", {"style:font-name": "BodyFont", "fo:font-size": "12pt"})

    text = element(styles, "style:default-style", {"style:family": "text"})
    element(text, "style:text-properties", {"style:font-name": "BodyFont", "fo:font-size": "12pt"})

    automatic = element(root, "office:automatic-styles")
    build_page_layout(automatic)

    master = element(root, "office:master-styles")
    element(master, "style:master-page", {
        "style:name": MASTER_PAGE_NAME,
        "style:page-layout-name": PAGE_LAYOUT_NAME,
    })
    return to_xml_bytes(root)


def format_creation_date(value: datetime) -> str:
    """ISO 8601 timestamp without microseconds."""
    return value.replace(microsecond=0).isoformat()


def meta_xml(title: Optional[str], creator: Optional[str], creation_date: datetime) -> bytes:
    """
    Build meta.xml.

    Args:
        title: Document title, omitted when empty
        creator: Document author, omitted when empty
        creation_date: Timestamp written as meta:creation-date

    Returns:
        Serialized XML
    """
    root = _root("office:document-meta", "office", "dc", "meta")
    meta = element(root, "office:meta")
    element(meta, "meta:generator").text = GENERATOR
    if title:
        element(meta, "dc:title").text = title
    if creator:
        element(meta, "dc:creator").text = creator
    element(meta, "meta:creation-date").text = format_creation_date(creation_date)
    return to_xml_bytes(root)


def settings_xml() -> bytes:
    root = _root("office:document-settings", "office", "config")
    settings = element(root, "office:settings")
    item_set = element(settings, "config:config-item-set", {"config:name": "ooo:view-settings"})
    item = element(item_set, "config:config-item", {"config:name": "ZoomType", "config:type": "short"})
    item.text = "0"
    return to_xml_bytes(root)


def manifest_xml() -> bytes:
    """Build META-INF/manifest.xml listing the package root and XML parts."""
    root = etree.Element(qn("manifest:manifest"), nsmap=nsmap("manifest"))
    root.set(qn("manifest:version"), ODF_VERSION)
    element(root, "manifest:file-entry", {
        "manifest:full-path": "/",
        "manifest:version": ODF_VERSION,
        "manifest:media-type": ODT_MIMETYPE,
    })
    for part in PACKAGE_PARTS:
        element(root, "manifest:file-entry", {
            "manifest:full-path": part,
            "manifest:media-type": "text/xml",
        })
    return to_xml_bytes(root)
