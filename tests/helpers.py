from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Mapping

from structurizr_site.errors import RenderError
from structurizr_site.workspace import Element, ViewDefinition, Workspace

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"
WORKSPACE_JSON = FIXTURE_DIR / "workspace.json"


class FakeRenderer:
    """Deterministic stand-in for PlantUML that records every call."""

    def __init__(self, failing: frozenset[str] = frozenset()) -> None:
        self.failing = failing
        self.calls: list[tuple[str, dict[str, str]]] = []
        self._lock = threading.Lock()

    def render(self, view: ViewDefinition, workspace: Workspace, links: Mapping[str, str]) -> str:
        with self._lock:
            self.calls.append((view.key, dict(links)))
        if view.key in self.failing:
            raise RenderError(f"cannot render view {view.key!r}", view_key=view.key)
        anchors = "".join(f'<a href="{href}">{eid}</a>' for eid, href in sorted(links.items()))
        return f'<svg data-view="{view.key}">{anchors}</svg>'


def load_fixture_dict() -> dict[str, Any]:
    return json.loads(WORKSPACE_JSON.read_text(encoding="utf-8"))


def system_named(workspace: Workspace, name: str) -> Element:
    for system in workspace.software_systems:
        if system.name == name:
            return system
    raise KeyError(name)
