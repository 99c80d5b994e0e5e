"""
XML utilities for ODF documents.

Handles namespace handling and qualified name resolution for lxml element
builders.
"""

import logging
from typing import Dict, Optional

from lxml import etree

logger = logging.getLogger(__name__)

ODF_VERSION = "1.3"
ODT_MIMETYPE = "application/vnd.oasis.opendocument.text"

NAMESPACES: Dict[str, str] = {
    'office': 'urn:oasis:names:tc:opendocument:xmlns:office:1.0',
    'text': 'urn:oasis:names:tc:opendocument:xmlns:text:1.0',
    'style': 'urn:oasis:names:tc:opendocument:xmlns:style:1.0',
    'table': 'urn:oasis:names:tc:opendocument:xmlns:table:1.0',
    'fo': 'urn:oasis:names:tc:opendocument:xmlns:xsl-fo-compatible:1.0',
    'svg': 'urn:oasis:names:tc:opendocument:xmlns:svg-compatible:1.0',
    'dc': 'http://purl.org/dc/elements/1.1/',
    'meta': 'urn:oasis:names:tc:opendocument:xmlns:meta:1.0',
    'config': 'urn:oasis:names:tc:opendocument:xmlns:config:1.0',
    'manifest': 'urn:oasis:names:tc:opendocument:xmlns:manifest:1.0',
}


def qn(name: str) -> str:
    """
    Resolve a prefixed name like "text:p" to Clark notation.

    Args:
        name: Prefixed XML name

    Returns:
        "{namespace-uri}local" string understood by lxml
    """
    prefix, _, local = name.partition(':')
    if not local:
        return name
    try:
        return f"{{{NAMESPACES[prefix]}}}{local}"
    except KeyError:
        raise ValueError(f"Unknown ODF namespace prefix: {prefix}") from None


def nsmap(*prefixes: str) -> Dict[str, str]:
    """Build an lxml nsmap for the given prefixes, in order."""
    return {prefix: NAMESPACES[prefix] for prefix in prefixes}


def element(parent: Optional[etree._Element], name: str,
            attributes: Optional[Dict[str, Optional[str]]] = None) -> etree._Element:
    """
    Create an ODF element, optionally as a child of parent.

    Args:
        parent: Parent element, or None for a root element
        name: Prefixed element name such as "text:span"
        attributes: Prefixed attribute names mapped to values; None values are skipped

    Returns:
        The new element
    """
    attrib = {
        qn(key): value
        for key, value in (attributes or {}).items()
        if value is not None
    }
    if parent is None:
        return etree.Element(qn(name), attrib)
    return etree.SubElement(parent, qn(name), attrib)


def to_xml_bytes(root: etree._Element, pretty_print: bool = False) -> bytes:
    """Serialize an element tree as a UTF-8 XML document."""
    return etree.tostring(
        root,
        xml_declaration=True,
        encoding='UTF-8',
        pretty_print=pretty_print,
    )
