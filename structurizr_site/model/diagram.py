from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from ..workspace import ViewDefinition
from .context import GeneratorContext
from .urls import element_url, puml_path, relative_href, slugify


def _element_links(context: GeneratorContext, view: ViewDefinition, page_url: str) -> Mapping[str, str]:
    """Element id -> href for every element in the view that has a page."""
    workspace = context.workspace
    links: dict[str, str] = {}
    for element in workspace.view_elements(view):
        url = element_url(workspace, element)
        if url is not None:
            links[element.id] = relative_href(page_url, url)
    return MappingProxyType(links)


@dataclass(frozen=True)
class DiagramViewModel:
    """One rendered diagram on one page.

    Built through `build`, which computes the element links and renders the
    SVG; a `RenderError` from the renderer propagates out of it. The links are
    relative to `page_url` and are baked into the SVG, which is why a view
    shown on two pages is rendered twice.
    """

    view: ViewDefinition
    page_url: str
    key: str
    title: str
    description: str
    anchor: str
    puml_href: str
    element_links: Mapping[str, str]
    svg: str

    @classmethod
    def build(
        cls,
        context: GeneratorContext,
        view: ViewDefinition,
        page_url: str,
        anchor: Optional[str] = None,
    ) -> "DiagramViewModel":
        links = _element_links(context, view, page_url)
        return cls(
            view=view,
            page_url=page_url,
            key=view.key,
            title=context.workspace.view_title(view),
            description=view.description,
            anchor=anchor or f"diagram-{slugify(view.key)}",
            puml_href=relative_href(page_url, puml_path(view.key)),
            element_links=links,
            svg=context.renderer.render(view, context.workspace, links),
        )

    def __repr__(self) -> str:
        return f"DiagramViewModel(key={self.key!r}, page_url={self.page_url!r})"


def build_diagrams(
    context: GeneratorContext, views: Iterable[ViewDefinition], page_url: str
) -> tuple[DiagramViewModel, ...]:
    """Diagrams for one page, in view order, with anchors unique on that page."""
    used: set[str] = set()
    diagrams: list[DiagramViewModel] = []
    for view in views:
        base = f"diagram-{slugify(view.key)}"
        anchor, n = base, 1
        while anchor in used:
            n += 1
            anchor = f"{base}-{n}"
        used.add(anchor)
        diagrams.append(DiagramViewModel.build(context, view, page_url, anchor))
    return tuple(diagrams)


@dataclass(frozen=True)
class DiagramIndexEntry:
    title: str
    anchor: str


@dataclass(frozen=True)
class DiagramIndexViewModel:
    entries: tuple[DiagramIndexEntry, ...] = ()

    @classmethod
    def of(cls, diagrams: Sequence[DiagramViewModel]) -> "DiagramIndexViewModel":
        return cls(tuple(DiagramIndexEntry(d.title, d.anchor) for d in diagrams))

    @property
    def visible(self) -> bool:
        return len(self.entries) > 1
