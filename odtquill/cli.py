"""
Command-line interface for odtquill.

Usage:
    odtquill import document.json --output document.html
    odtquill export document.html --output document.odt --geometry tables.json
    odtquill model document.html --output document.model.json
    odtquill markdown notes.md --output notes.html
    odtquill version
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConversionOptions
from .exceptions import OdtQuillError, ParsingError
from .utils.logger import LOG_LEVELS
from .utils.rich_logger import get_rich_logger, setup_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="odtquill",
        description="odtquill - ODT JSON, editor HTML and ODT conversion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  odtquill import document.json -o document.html
  odtquill export document.html -o document.odt
  odtquill export document.html --geometry tables.json --content-width-px 794
  odtquill model document.html -o model.json
  odtquill markdown notes.md -o notes.html
  odtquill version
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Log level (default: WARNING)"
    )
    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Use plain logging output instead of rich"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    import_parser = subparsers.add_parser("import", help="Convert ODT JSON to editor HTML")
    import_parser.add_argument("input", help="Input ODT JSON file")
    import_parser.add_argument("-o", "--output", help="Output HTML file (default: input name with .html)")

    export_parser = subparsers.add_parser("export", help="Convert editor HTML to ODT")
    export_parser.add_argument("input", help="Input HTML file")
    export_parser.add_argument("-o", "--output", help="Output ODT file (default: input name with .odt)")
    export_parser.add_argument("--geometry", help="JSON file with rendered table geometry")
    export_parser.add_argument(
        "--content-width-px",
        type=float,
        help="Rendered width of the editor content area in pixels"
    )
    export_parser.add_argument("--title", help="Document title")
    export_parser.add_argument("--creator", help="Document author")

    model_parser = subparsers.add_parser("model", help="Dump the document model of editor HTML as JSON")
    model_parser.add_argument("input", help="Input HTML file")
    model_parser.add_argument("-o", "--output", help="Output JSON file (default: input name with .json)")
    model_parser.add_argument("--geometry", help="JSON file with rendered table geometry")
    model_parser.add_argument("--content-width-px", type=float, help="Rendered content width in pixels")

    markdown_parser = subparsers.add_parser("markdown", help="Convert Markdown to editor HTML")
    markdown_parser.add_argument("input", help="Input Markdown file")
    markdown_parser.add_argument("-o", "--output", help="Output HTML file (default: input name with .html)")

    subparsers.add_parser("version", help="Show version information")

    return parser


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParsingError(f"Cannot read input file: {path}", str(e)) from e


def _write_text(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OdtQuillError(f"Cannot write output file: {path}", str(e)) from e


def _build_doc(args):
    from .parser.html_parser import HtmlToDocModel
    from .parser.table_geometry import StaticLayoutProbe

    options = ConversionOptions(
        title=getattr(args, "title", None),
        creator=getattr(args, "creator", None),
        content_width_px=args.content_width_px,
    )
    probe = StaticLayoutProbe.from_json_file(args.geometry) if args.geometry else None
    html = _read_text(Path(args.input))
    return HtmlToDocModel(options).convert(html, probe)


def cmd_import(args) -> int:
    """Handle import command."""
    from .importers.odt_json_importer import odt_json_to_html

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(".html")

    try:
        document = json.loads(_read_text(input_path))
    except ValueError as e:
        raise ParsingError(f"Invalid JSON: {input_path}", str(e)) from e
    if not isinstance(document, dict):
        raise ParsingError(f"ODT JSON must be an object: {input_path}")

    html = odt_json_to_html(document)
    _write_text(output_path, html)
    get_rich_logger().success(f"Saved: {output_path}")
    return 0


def cmd_export(args) -> int:
    """Handle export command."""
    from .export.odt_packager import OdtPackager

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(".odt")

    doc = _build_doc(args)
    OdtPackager(doc).save(output_path)
    get_rich_logger().success(f"Saved: {output_path} ({len(doc.body)} blocks)")
    return 0


def cmd_model(args) -> int:
    """Handle model command."""
    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(".json")

    doc = _build_doc(args)
    _write_text(output_path, json.dumps(doc.to_dict(), indent=2, ensure_ascii=False))
    get_rich_logger().success(f"Saved: {output_path}")
    return 0


def cmd_markdown(args) -> int:
    """Handle markdown command."""
    from .importers.markdown_importer import markdown_to_html

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(".html")

    _write_text(output_path, markdown_to_html(_read_text(input_path)))
    get_rich_logger().success(f"Saved: {output_path}")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"odtquill v{__version__}")
    print("ODT JSON, editor HTML and ODT conversion")
    return 0


COMMANDS = {
    "import": cmd_import,
    "export": cmd_export,
    "model": cmd_model,
    "markdown": cmd_markdown,
    "version": cmd_version,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, use_rich=not args.no_rich)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    input_name = getattr(args, "input", None)
    if input_name and not Path(input_name).exists():
        get_rich_logger().failure(f"File not found: {input_name}")
        return 1

    try:
        return handler(args)
    except OdtQuillError as e:
        logger.debug("Command failed", exc_info=True)
        get_rich_logger().failure(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
