"""ODT export for odtquill."""

from .odt_packager import OdtPackager, make_odt
from .odt_xml_renderer import OdtXmlRenderer, build_content_xml

__all__ = ["OdtPackager", "OdtXmlRenderer", "build_content_xml", "make_odt"]
