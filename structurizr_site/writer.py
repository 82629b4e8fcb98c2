from __future__ import annotations

import logging
from pathlib import Path

from .errors import OutputPathCollisionError

log = logging.getLogger(__name__)


class OutputWriter:
    """Writes site files below `root`, refusing to write any path twice per run."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self._owners: dict[str, str] = {}

    @property
    def written(self) -> tuple[str, ...]:
        return tuple(self._owners)

    def write(self, relative_path: str, content: str, *, owner: str = "") -> Path:
        previous = self._owners.get(relative_path)
        if previous is not None:
            raise OutputPathCollisionError(
                f"output path {relative_path!r} produced by both {previous or '<unknown>'} "
                f"and {owner or '<unknown>'}"
            )
        self._owners[relative_path] = owner

        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        log.debug("wrote %s", path)
        return path
