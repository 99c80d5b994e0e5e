"""
Markdown importer.

Converts Markdown to editor HTML with marko (GitHub flavored), keeping
blank lines and runs of spaces visible in the editor.
"""

import logging
import re
from typing import List

import marko
from marko.html_renderer import HTMLRenderer

logger = logging.getLogger(__name__)

BLANK_PLACEHOLDER = "@@ODTQUILL_BLANK_PARAGRAPH@@"

_EXTRA_NEWLINES = re.compile(r"\n{2}(\n+)")
_BLANK_PARAGRAPH = re.compile(r"<p>\s*" + re.escape(BLANK_PLACEHOLDER) + r"\s*</p>")
_LEFTOVER_PLACEHOLDER = re.compile(re.escape(BLANK_PLACEHOLDER) + r"(\n\n)?")
_FENCED_BLOCK = re.compile(
    r"^ {0,3}(?P<fence>(?P<char>[`~])(?P=char){2,})[^\n]*\n.*?(?:^ {0,3}(?P=fence)(?P=char)*[ \t]*$|\Z)",
    re.MULTILINE | re.DOTALL,
)
_TAG = re.compile(r"(<[^>]*>)")
_TAG_NAME = re.compile(r"^</?\s*([a-zA-Z0-9]+)")
_SPACE_RUN = re.compile(r" {2,}")

# Text inside these elements keeps its spaces untouched
SKIPPED_TAGS = frozenset({"pre", "code", "script", "style"})


class EditorHTMLRenderer(HTMLRenderer):
    """HTML renderer turning every line break into <br />."""

    def render_line_break(self, element) -> str:
        return "<br />\n"


def _placeholder_lines(match: "re.Match[str]") -> str:
    extra = len(match.group(1))
    return "\n\n" + f"{BLANK_PLACEHOLDER}\n\n" * extra


def _inject_blank_placeholders(source: str) -> str:
    """Mark each blank line beyond the first with a placeholder paragraph, outside fenced code."""
    source = source.replace("\r\n", "\n")
    parts: List[str] = []
    position = 0
    for match in _FENCED_BLOCK.finditer(source):
        parts.append(_EXTRA_NEWLINES.sub(_placeholder_lines, source[position:match.start()]))
        parts.append(match.group(0))
        position = match.end()
    parts.append(_EXTRA_NEWLINES.sub(_placeholder_lines, source[position:]))
    return "".join(parts)


def _restore_blank_placeholders(html: str) -> str:
    html = _BLANK_PARAGRAPH.sub("<p><br /></p>", html)
    # Placeholders that ended up inside indented code or raw HTML go back to blank lines
    return _LEFTOVER_PLACEHOLDER.sub(lambda match: "\n" if match.group(1) else "", html)


def preserve_consecutive_spaces(html: str) -> str:
    """
    Keep runs of spaces visible outside pre, code, script and style.

    A run of N spaces becomes one space followed by N-1 &nbsp;.
    """
    parts: List[str] = []
    skip_depth = 0
    for piece in _TAG.split(html):
        if piece.startswith("<"):
            match = _TAG_NAME.match(piece)
            if match and match.group(1).lower() in SKIPPED_TAGS and not piece.endswith("/>"):
                skip_depth += -1 if piece.startswith("</") else 1
                skip_depth = max(skip_depth, 0)
            parts.append(piece)
        elif skip_depth == 0 and "  " in piece:
            parts.append(_SPACE_RUN.sub(lambda m: " " + "&nbsp;" * (len(m.group(0)) - 1), piece))
        else:
            parts.append(piece)
    return "".join(parts)


def markdown_to_html(md: str) -> str:
    """
    Convert Markdown to editor HTML.

    Args:
        md: Markdown source

    Returns:
        HTML fragment
    """
    converter = marko.Markdown(extensions=["gfm"], renderer=EditorHTMLRenderer)
    html = converter(_inject_blank_placeholders(md))
    html = _restore_blank_placeholders(html)
    html = preserve_consecutive_spaces(html)
    logger.debug(f"Converted {len(md)} chars of Markdown to {len(html)} chars of HTML")
    return html
