from __future__ import annotations

from dataclasses import dataclass

from ..constants import (
    COLOR_PRIMARY_DEFAULT,
    COLOR_SECONDARY_DEFAULT,
    PROP_COLOR_PRIMARY,
    PROP_COLOR_SECONDARY,
)
from ..svg import SvgRenderer
from ..workspace import Workspace


@dataclass(frozen=True)
class GeneratorContext:
    """Everything a page view model may read while it is being built.

    Passed explicitly into every builder; there is no module-level state.
    """

    workspace: Workspace
    renderer: SvgRenderer
    site_title: str = ""

    @property
    def title(self) -> str:
        return self.site_title or self.workspace.name

    @property
    def primary_color(self) -> str:
        return self.workspace.properties.get(PROP_COLOR_PRIMARY) or COLOR_PRIMARY_DEFAULT

    @property
    def secondary_color(self) -> str:
        return self.workspace.properties.get(PROP_COLOR_SECONDARY) or COLOR_SECONDARY_DEFAULT
