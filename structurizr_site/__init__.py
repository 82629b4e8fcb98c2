"""Static documentation site generator for Structurizr workspaces."""
from __future__ import annotations

__version__ = "0.4.0"
