from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(levelname_lower)s: %(message)s"


class LowercaseLevelFormatter(logging.Formatter):
    """Formats records as ``warning: message`` like the rest of the CLI output."""

    def format(self, record: logging.LogRecord) -> str:
        record.levelname_lower = record.levelname.lower()
        return super().format(record)


def configure_logging(verbose: bool = False) -> None:
    root = logging.getLogger("structurizr_site")
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LowercaseLevelFormatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.propagate = False
