# structurizr_site/io.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .constants import WORKSPACE_SUFFIXES
from .errors import WorkspaceParseError

log = logging.getLogger(__name__)


def _parse_document(raw: str, path: Path) -> Any:
    if path.suffix.lower() == ".json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise WorkspaceParseError(
                f"Failed to parse JSON workspace {path}: line {e.lineno}, column {e.colno}: {e.msg}"
            ) from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise WorkspaceParseError(f"Failed to parse YAML workspace {path}: {e}") from e


def _resolve_workspace_file(path: Path) -> Path:
    """Accept either a workspace file or a directory holding `workspace.json`/`.yaml`."""
    if path.is_dir():
        for suffix in WORKSPACE_SUFFIXES:
            candidate = path / f"workspace{suffix}"
            if candidate.is_file():
                return candidate
        raise WorkspaceParseError(
            f"No workspace file found in {path} "
            f"(expected workspace{'|'.join(WORKSPACE_SUFFIXES)})"
        )
    return path


def load_workspace(path: Path) -> dict[str, Any]:
    """Load a Structurizr workspace export (JSON or YAML) as a plain mapping."""
    if not path.exists():
        raise WorkspaceParseError(f"Workspace not found: {path}")

    path = _resolve_workspace_file(path)
    if path.suffix.lower() not in WORKSPACE_SUFFIXES:
        raise WorkspaceParseError(
            f"Unsupported workspace file type {path.suffix!r} for {path}; "
            f"expected one of {', '.join(WORKSPACE_SUFFIXES)}"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise WorkspaceParseError(f"Failed to read workspace {path}: {e}") from e

    data = _parse_document(raw, path)
    if not isinstance(data, dict):
        raise WorkspaceParseError(
            f"Top-level workspace must be a mapping in {path}, got {type(data).__name__}"
        )
    if not isinstance(data.get("model", {}), dict):
        raise WorkspaceParseError(f"workspace.model must be a mapping in {path}")
    if not isinstance(data.get("views", {}), dict):
        raise WorkspaceParseError(f"workspace.views must be a mapping in {path}")
    configuration = (data.get("views") or {}).get("configuration") or {}
    if not isinstance(configuration, dict):
        raise WorkspaceParseError(f"workspace.views.configuration must be a mapping in {path}")
    for properties in (data.get("properties"), configuration.get("properties")):
        if properties is not None and not isinstance(properties, dict):
            raise WorkspaceParseError(f"workspace properties must be a mapping in {path}")

    log.debug("loaded workspace %s (%d bytes)", path, len(raw))
    return data
