from __future__ import annotations


class SiteGenerationError(Exception):
    """Base class for all errors raised while generating a site."""


class WorkspaceParseError(SiteGenerationError):
    """The workspace source could not be read or is structurally invalid."""


class RenderError(SiteGenerationError):
    """A diagram could not be rendered for a view definition."""

    def __init__(self, message: str, *, view_key: str = "") -> None:
        super().__init__(message)
        self.view_key = view_key


class OutputPathCollisionError(SiteGenerationError):
    """Two pages resolved to the same output path."""


class MarkupRenderError(SiteGenerationError):
    """A Markdown/AsciiDoc block could not be converted to HTML."""
