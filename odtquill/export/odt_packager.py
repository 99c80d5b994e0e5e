"""
ODT packager - builds ODT archives from document models.

Uses OdtXmlRenderer to generate content.xml and packs it with the
auxiliary parts into a ZIP archive with mimetype stored first.
"""

from __future__ import annotations

import io
import logging
import zipfile
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..exceptions import PackagingError
from ..models.document import OdtDoc
from ..utils.xml_utils import ODT_MIMETYPE
from .odt_templates import manifest_xml, meta_xml, settings_xml, styles_xml
from .odt_xml_renderer import OdtXmlRenderer

logger = logging.getLogger(__name__)

# ZIP timestamps cannot predate 1980
_MIN_ZIP_DATE = (1980, 1, 1, 0, 0, 0)


class OdtPackager:
    """
    Packs an OdtDoc into an ODT (ZIP) archive.

    Entries are written in a fixed order: mimetype (stored, uncompressed),
    content.xml, styles.xml, meta.xml, settings.xml and the manifest (all
    deflated).
    """

    def __init__(self, doc: OdtDoc, creation_date: Optional[datetime] = None,
                 page_content_width_cm: Optional[float] = None):
        """
        Initialize packager.

        Args:
            doc: Document model to package
            creation_date: Timestamp for meta.xml and ZIP entries (defaults to now, UTC)
            page_content_width_cm: Content width passed to the renderer
        """
        self.doc = doc
        self.creation_date = creation_date or datetime.now(timezone.utc)
        self.page_content_width_cm = page_content_width_cm

    def _zip_date(self) -> Tuple[int, int, int, int, int, int]:
        date_time = self.creation_date.timetuple()[:6]
        return max(date_time, _MIN_ZIP_DATE)

    def parts(self) -> List[Tuple[str, bytes]]:
        """
        Generate all package parts in archive order.

        Returns:
            List of (entry name, content) pairs
        """
        if self.page_content_width_cm is not None:
            renderer = OdtXmlRenderer(self.doc, self.page_content_width_cm)
        else:
            renderer = OdtXmlRenderer(self.doc)
        return [
            ("mimetype", ODT_MIMETYPE.encode("ascii")),
            ("content.xml", renderer.render()),
            ("styles.xml", styles_xml(self.doc.styles.body_font)),
            ("meta.xml", meta_xml(self.doc.meta.title, self.doc.meta.creator, self.creation_date)),
            ("settings.xml", settings_xml()),
            ("META-INF/manifest.xml", manifest_xml()),
        ]

    def build(self) -> bytes:
        """
        Build the archive in memory.

        Returns:
            ODT file content

        Raises:
            PackagingError: If the archive cannot be assembled
        """
        buffer = io.BytesIO()
        date_time = self._zip_date()
        try:
            with zipfile.ZipFile(buffer, "w") as archive:
                for name, content in self.parts():
                    info = zipfile.ZipInfo(name, date_time)
                    info.compress_type = zipfile.ZIP_STORED if name == "mimetype" else zipfile.ZIP_DEFLATED
                    info.external_attr = 0o644 << 16
                    archive.writestr(info, content)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, OSError) as e:
            raise PackagingError("Failed to assemble ODT archive", str(e)) from e

        data = buffer.getvalue()
        logger.debug(f"Built ODT archive: {len(data)} bytes")
        return data

    def save(self, output_path: Union[str, Path]) -> Path:
        """
        Build the archive and write it to disk.

        Args:
            output_path: Destination .odt file

        Returns:
            Path of the written file

        Raises:
            PackagingError: If the archive cannot be built or written
        """
        output_path = Path(output_path)
        data = self.build()
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(data)
        except OSError as e:
            raise PackagingError(f"Failed to write ODT file: {output_path}", str(e)) from e

        logger.info(f"Document exported to ODT: {output_path}")
        return output_path


def make_odt(doc: OdtDoc, filename: Union[str, Path] = "document.odt",
             creation_date: Optional[datetime] = None) -> Path:
    """Package a document and save it as filename."""
    return OdtPackager(doc, creation_date=creation_date).save(filename)
