# structurizr_site/markup.py
from __future__ import annotations

import html
import logging
import subprocess

import markdown

from .constants import ASCIIDOCTOR_CMD_DEFAULT
from .errors import MarkupRenderError

log = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS: list[str] = [
    "extra",
    "toc",
    "tables",
    "fenced_code",
]


def markdown_to_html(text: str) -> str:
    try:
        return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS, output_format="html")
    except Exception as e:
        raise MarkupRenderError(f"Markdown conversion failed: {e}") from e


def asciidoc_to_html(text: str, command: str = ASCIIDOCTOR_CMD_DEFAULT) -> str:
    """Convert AsciiDoc to an embeddable HTML fragment via the asciidoctor CLI."""
    try:
        result = subprocess.run(
            [command, "--embedded", "--safe-mode", "secure", "-o", "-", "-"],
            input=text.encode("utf-8"),
            capture_output=True,
            timeout=60,
            check=False,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        raise MarkupRenderError(f"AsciiDoc conversion failed: {e}") from e

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise MarkupRenderError(f"asciidoctor exited {result.returncode}: {stderr}")
    return result.stdout.decode("utf-8", errors="replace")


def literal_html(text: str) -> str:
    return f'<pre class="literal">{html.escape(text)}</pre>'


def render_markup(text: str, fmt: str = "Markdown") -> str:
    """Render a documentation block to HTML, degrading to literal text on failure."""
    if not text.strip():
        return ""
    try:
        if fmt.lower() == "asciidoc":
            return asciidoc_to_html(text)
        return markdown_to_html(text)
    except MarkupRenderError as e:
        log.warning("%s; rendering as literal text", e)
        return literal_html(text)
