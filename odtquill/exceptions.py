"""Custom exceptions for odtquill."""

from typing import Optional


class OdtQuillError(Exception):
    """Base exception for odtquill errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ParsingError(OdtQuillError):
    """Exception raised when an input document cannot be read."""

    pass


class StyleError(OdtQuillError):
    """Exception raised on style registry misuse."""

    pass


class RenderingError(OdtQuillError):
    """Exception raised during content XML rendering."""

    pass


class PackagingError(OdtQuillError):
    """Exception raised while assembling or writing the ODT archive."""

    pass
