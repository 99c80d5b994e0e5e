"""
Rich logging for odtquill.

Provides colorful console logging using the rich library.
"""

import logging
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .logger import configure_logging, resolve_level


class RichLogger:
    """
    Logger wrapper with rich formatting helpers.
    """

    def __init__(self, name: str = "odtquill", level: str = "INFO",
                 console: Optional[Console] = None):
        """
        Initialize rich logger.

        Args:
            name: Logger name
            level: Log level
            console: Console used for success/failure output (stderr by default)
        """
        self.name = name
        self.console = console or Console(stderr=True)
        self.logger = logging.getLogger(name)
        self.logger.setLevel(resolve_level(level))

    def debug(self, message: str, *args: Any) -> None:
        self.logger.debug(message, *args)

    def info(self, message: str, *args: Any) -> None:
        self.logger.info(message, *args)

    def warning(self, message: str, *args: Any) -> None:
        self.logger.warning(message, *args)

    def error(self, message: str, *args: Any) -> None:
        self.logger.error(message, *args)

    def success(self, message: str) -> None:
        """Print a success line."""
        self.console.print(f"[green]✓ {message}[/green]")

    def failure(self, message: str) -> None:
        """Print a failure line."""
        self.console.print(f"[red]✗ {message}[/red]")

    def table(self, title: str, data: Dict[str, Any]) -> None:
        """Display key/value data in a rich table."""
        table = Table(title=title)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="magenta")
        for key, value in data.items():
            table.add_row(str(key), str(value))
        self.console.print(table)


def get_rich_logger(name: str = "odtquill", level: str = "INFO") -> RichLogger:
    """
    Get rich logger instance.

    Args:
        name: Logger name
        level: Log level

    Returns:
        RichLogger instance
    """
    return RichLogger(name, level)


def setup_logging(level: str = "INFO", use_rich: bool = True) -> None:
    """
    Setup logging for the application.

    Args:
        level: Log level
        use_rich: Whether to use a RichHandler instead of a plain stream handler
    """
    if not use_rich:
        configure_logging(level)
        return

    rich_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))

    root_logger = logging.getLogger()
    root_logger.setLevel(resolve_level(level))
    root_logger.handlers.clear()
    root_logger.addHandler(rich_handler)
