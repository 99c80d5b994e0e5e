"""
Tests for conversion options and logging setup.
"""

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from odtquill.config import ConversionOptions
from odtquill.exceptions import OdtQuillError, PackagingError
from odtquill.utils.logger import configure_logging, get_logger, resolve_level
from odtquill.utils.rich_logger import RichLogger, setup_logging


class TestConversionOptions:
    """Test cases for ConversionOptions."""

    def test_defaults(self):
        options = ConversionOptions()
        assert options.page_content_width_cm == 17.0
        assert options.body_font == "Malgun Gothic"
        assert options.filename == "document.odt"
        assert options.effective_content_width_px() == pytest.approx(642.52, abs=0.01)

    def test_explicit_content_width(self):
        assert ConversionOptions(content_width_px=800).effective_content_width_px() == 800.0
        assert ConversionOptions(content_width_px=0).effective_content_width_px() == pytest.approx(642.52, abs=0.01)

    def test_from_dict_ignores_unknown_keys(self):
        options = ConversionOptions.from_dict({"title": "T", "bogus": 1})
        assert options.title == "T"
        assert ConversionOptions.from_dict(None) == ConversionOptions()


class TestErrors:
    """Test cases for the exception hierarchy."""

    def test_message_with_details(self):
        error = PackagingError("Failed", "disk full")
        assert isinstance(error, OdtQuillError)
        assert str(error) == "Failed: disk full"
        assert str(OdtQuillError("Plain")) == "Plain"


class TestLogging:
    """Test cases for logging helpers."""

    def test_resolve_level(self):
        assert resolve_level("debug") == logging.DEBUG
        with pytest.raises(ValueError):
            resolve_level("LOUD")

    def test_get_logger_requires_name(self):
        assert get_logger("odtquill.test").name == "odtquill.test"
        with pytest.raises(ValueError):
            get_logger("")

    def test_setup_logging_rich(self):
        setup_logging("INFO", use_rich=True)
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert any(isinstance(handler, RichHandler) for handler in root.handlers)

    def test_setup_logging_plain(self):
        setup_logging("DEBUG", use_rich=False)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], RichHandler)

    def test_configure_logging_replaces_handlers(self):
        configure_logging("ERROR")
        configure_logging("WARNING")
        assert len(logging.getLogger().handlers) == 1

    def test_rich_logger_output(self):
        buffer = io.StringIO()
        rich_logger = RichLogger(console=Console(file=buffer, force_terminal=False))
        rich_logger.success("done")
        rich_logger.failure("broken")
        rich_logger.table("Summary", {"blocks": 3})
        output = buffer.getvalue()
        assert "✓ done" in output
        assert "✗ broken" in output
        assert "blocks" in output
