# structurizr_site/svg.py
from __future__ import annotations

import logging
import re
import subprocess
from typing import Mapping, Protocol, Sequence

from .constants import PLANTUML_CMD_DEFAULT
from .errors import RenderError
from .plantuml import export_view
from .workspace import ViewDefinition, Workspace

log = logging.getLogger(__name__)

_XML_PROLOG_RE = re.compile(r"^\s*<\?xml[^>]*\?>\s*")


class SvgRenderer(Protocol):
    """Produces an SVG document for one view definition.

    Implementations must be deterministic for a given input and safe to call
    from several threads at once.
    """

    def render(self, view: ViewDefinition, workspace: Workspace, links: Mapping[str, str]) -> str:
        ...


def strip_xml_prolog(svg: str) -> str:
    """Drop the `<?xml ...?>` prolog so the SVG can be inlined into HTML."""
    return _XML_PROLOG_RE.sub("", svg, count=1)


class PlantUmlSvgRenderer:
    """Render views by piping C4-PlantUML source through the `plantuml` executable."""

    def __init__(self, command: Sequence[str] = (PLANTUML_CMD_DEFAULT,), timeout: float = 120.0) -> None:
        self.command = tuple(command)
        self.timeout = timeout

    def render(self, view: ViewDefinition, workspace: Workspace, links: Mapping[str, str]) -> str:
        source = export_view(workspace, view, links)
        cmd = [*self.command, "-tsvg", "-pipe", "-charset", "UTF-8"]
        try:
            result = subprocess.run(
                cmd,
                input=source.encode("utf-8"),
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise RenderError(f"PlantUML not found: {self.command[0]}", view_key=view.key) from e
        except subprocess.TimeoutExpired as e:
            raise RenderError(
                f"PlantUML timed out after {self.timeout:g}s rendering view {view.key!r}",
                view_key=view.key,
            ) from e

        svg = result.stdout.decode("utf-8", errors="replace")
        if result.returncode != 0 or "<svg" not in svg:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise RenderError(
                f"PlantUML failed for view {view.key!r} (exit {result.returncode}): {stderr or 'no output'}",
                view_key=view.key,
            )

        log.debug("rendered view %s (%d bytes of SVG)", view.key, len(svg))
        return strip_xml_prolog(svg)
