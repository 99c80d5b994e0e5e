"""
Pytest configuration for odtquill
"""

import logging
import sys
from pathlib import Path

import pytest

from odtquill.models import OdtBlock, OdtDoc, Paragraph, Table, TableCell, TableRow, TextSpan


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid handlers left by the CLI."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    # Cleanup after test
    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def sample_doc():
    """Document with a styled paragraph, a page break and a 2x2 table."""
    cell = lambda text: TableCell(paragraphs=[Paragraph(spans=[TextSpan(text)])])
    table = Table(rows=[
        TableRow(cells=[cell("A1"), cell("B1")]),
        TableRow(cells=[cell("A2"), cell("B2")]),
    ])
    doc = OdtDoc()
    doc.meta.title = "Sample"
    doc.body = [
        OdtBlock.paragraph(Paragraph(spans=[
            TextSpan("Hello "),
            TextSpan("world", bold=True),
        ], align="center")),
        OdtBlock.page_break(),
        OdtBlock.table(table),
    ]
    return doc


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    # Ignore logging errors during tests
    logging.raiseExceptions = False
