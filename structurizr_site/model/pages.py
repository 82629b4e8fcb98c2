from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from ..constants import STYLESHEET
from ..markup import render_markup
from ..workspace import Documentation, Element, Relationship, ViewDefinition, Workspace
from .context import GeneratorContext
from .diagram import DiagramIndexViewModel, DiagramViewModel, build_diagrams
from .kinds import PageKind, Scope, SYSTEM_PAGE_KINDS, Tab
from .urls import element_url, page_url, relative_href, slugify


@dataclass(frozen=True)
class Breadcrumb:
    title: str
    href: Optional[str] = None


@dataclass(frozen=True)
class NavLink:
    title: str
    href: str
    active: bool = False


@dataclass(frozen=True)
class RenderedSection:
    title: str
    anchor: str
    html: str


@dataclass(frozen=True)
class HomeContent:
    description: str
    sections: tuple[RenderedSection, ...] = ()


@dataclass(frozen=True)
class ElementRow:
    name: str
    description: str
    href: Optional[str] = None


@dataclass(frozen=True)
class SystemListContent:
    rows: tuple[ElementRow, ...] = ()


@dataclass(frozen=True)
class ContainerListContent:
    """Containers of a system that have their own component page."""

    rows: tuple[ElementRow, ...] = ()


@dataclass(frozen=True)
class DependencyRow:
    element: str
    description: str
    technology: str
    href: Optional[str] = None


@dataclass(frozen=True)
class DependenciesContent:
    inbound: tuple[DependencyRow, ...] = ()
    outbound: tuple[DependencyRow, ...] = ()


@dataclass(frozen=True)
class RenderedDecision:
    id: str
    title: str
    date: str
    status: str
    anchor: str
    html: str


@dataclass(frozen=True)
class DecisionsContent:
    decisions: tuple[RenderedDecision, ...] = ()


PageContent = Union[
    HomeContent, SystemListContent, ContainerListContent, DependenciesContent, DecisionsContent, None
]


@dataclass(frozen=True)
class PageViewModel:
    """Data needed to render exactly one page.

    Every kind shares the shape `diagrams / visible / diagram_index / tab`;
    kind-specific data lives in `content`.
    """

    kind: PageKind
    title: str
    url: str
    visible: bool
    diagrams: tuple[DiagramViewModel, ...] = ()
    diagram_index: DiagramIndexViewModel = DiagramIndexViewModel()
    content: PageContent = None
    # Relative href of the nearest ancestor page; redirect target when not visible.
    parent_href: Optional[str] = None
    site_title: str = ""
    stylesheet_href: str = STYLESHEET
    breadcrumbs: tuple[Breadcrumb, ...] = ()
    tabs: tuple[NavLink, ...] = ()
    menu: tuple[NavLink, ...] = ()
    theme: tuple[str, str] = ("", "")
    system: Optional[Element] = field(default=None, compare=False)
    container: Optional[Element] = field(default=None, compare=False)

    @property
    def tab(self) -> Tab:
        return self.kind.tab


# -- pure filters ------------------------------------------------------------


def views_for_page(
    workspace: Workspace,
    kind: PageKind,
    system: Optional[Element] = None,
    container: Optional[Element] = None,
) -> tuple[ViewDefinition, ...]:
    """View definitions shown on a page, in declaration order."""
    if kind is PageKind.WORKSPACE_HOME:
        return workspace.system_landscape_views()
    if kind is PageKind.CONTAINER_HOME:
        return workspace.container_component_views(container) if container is not None else ()
    if system is None:
        return ()
    if kind is PageKind.SYSTEM_CONTEXT:
        return workspace.system_context_views(system)
    if kind is PageKind.SYSTEM_STRUCTURE:
        return workspace.container_views(system)
    if kind is PageKind.SYSTEM_COMPONENT:
        return workspace.component_views(system)
    if kind is PageKind.SYSTEM_DYNAMIC:
        return workspace.dynamic_views(system)
    if kind is PageKind.SYSTEM_DEPLOYMENT:
        return workspace.deployment_views(system)
    return ()


def page_visible(
    workspace: Workspace,
    kind: PageKind,
    system: Optional[Element] = None,
    container: Optional[Element] = None,
) -> bool:
    """Whether a page has content; decided from the model alone, never by rendering."""
    if kind in (PageKind.WORKSPACE_HOME, PageKind.SOFTWARE_SYSTEM_LIST, PageKind.SYSTEM_HOME):
        return True
    if kind is PageKind.WORKSPACE_DECISIONS:
        return bool(workspace.documentation_of().decisions)
    if system is None:
        return False
    if kind is PageKind.SYSTEM_DEPENDENCIES:
        inbound, outbound = workspace.dependencies_of(system)
        return bool(inbound or outbound)
    if kind is PageKind.SYSTEM_DECISIONS:
        return bool(workspace.documentation_of(system).decisions)
    return bool(views_for_page(workspace, kind, system, container))


# -- navigation --------------------------------------------------------------


def _parent_url(kind: PageKind, system: Optional[Element]) -> Optional[str]:
    if kind is PageKind.WORKSPACE_HOME:
        return None
    if kind.scope is Scope.WORKSPACE:
        return page_url(PageKind.WORKSPACE_HOME)
    if kind is PageKind.SYSTEM_HOME:
        return page_url(PageKind.SOFTWARE_SYSTEM_LIST)
    if kind.scope is Scope.CONTAINER:
        return page_url(PageKind.SYSTEM_COMPONENT, system)
    return page_url(PageKind.SYSTEM_HOME, system)


def _breadcrumbs(
    ctx: GeneratorContext,
    kind: PageKind,
    system: Optional[Element],
    container: Optional[Element],
    url: str,
) -> tuple[Breadcrumb, ...]:
    trail: list[tuple[str, str]] = [(ctx.title, page_url(PageKind.WORKSPACE_HOME))]
    if kind.scope is not Scope.WORKSPACE and system is not None:
        trail.append((PageKind.SOFTWARE_SYSTEM_LIST.label, page_url(PageKind.SOFTWARE_SYSTEM_LIST)))
        trail.append((system.name, page_url(PageKind.SYSTEM_HOME, system)))
        if kind.scope is Scope.CONTAINER and container is not None:
            component = PageKind.SYSTEM_COMPONENT
            trail.append((component.label, page_url(component, system)))
            trail.append((container.name, url))
        elif kind is not PageKind.SYSTEM_HOME:
            trail.append((kind.label, url))
    elif kind is not PageKind.WORKSPACE_HOME:
        trail.append((kind.label, url))

    crumbs = [Breadcrumb(title, relative_href(url, target)) for title, target in trail[:-1]]
    crumbs.append(Breadcrumb(trail[-1][0]))
    return tuple(crumbs)


def _tabs(ctx: GeneratorContext, kind: PageKind, system: Optional[Element], url: str) -> tuple[NavLink, ...]:
    if kind.scope is Scope.WORKSPACE or system is None:
        return ()
    return tuple(
        NavLink(k.label, relative_href(url, page_url(k, system)), active=k.tab is kind.tab)
        for k in SYSTEM_PAGE_KINDS
        if page_visible(ctx.workspace, k, system)
    )


def _menu(ctx: GeneratorContext, kind: PageKind, system: Optional[Element], url: str) -> tuple[NavLink, ...]:
    ws = ctx.workspace
    links = [
        NavLink(k.label, relative_href(url, page_url(k)), active=k is kind)
        for k in (PageKind.WORKSPACE_HOME, PageKind.SOFTWARE_SYSTEM_LIST, PageKind.WORKSPACE_DECISIONS)
        if page_visible(ws, k)
    ]
    for other in ws.internal_software_systems:
        links.append(
            NavLink(
                other.name,
                relative_href(url, page_url(PageKind.SYSTEM_HOME, other)),
                active=system is not None and other.id == system.id,
            )
        )
    return tuple(links)


def _page(
    ctx: GeneratorContext,
    kind: PageKind,
    system: Optional[Element] = None,
    container: Optional[Element] = None,
    *,
    visible: bool,
    diagrams: tuple[DiagramViewModel, ...] = (),
    content: PageContent = None,
) -> PageViewModel:
    url = page_url(kind, system, container)
    parent = _parent_url(kind, system)
    if container is not None and system is not None:
        title = f"{system.name} | {container.name}"
    elif system is not None:
        title = f"{system.name} | {kind.label}"
    else:
        title = kind.label
    return PageViewModel(
        kind=kind,
        title=title,
        url=url,
        visible=visible,
        diagrams=diagrams,
        diagram_index=DiagramIndexViewModel.of(diagrams),
        content=content,
        parent_href=relative_href(url, parent) if parent is not None else None,
        site_title=ctx.title,
        stylesheet_href=relative_href(url, STYLESHEET),
        breadcrumbs=_breadcrumbs(ctx, kind, system, container, url),
        tabs=_tabs(ctx, kind, system, url),
        menu=_menu(ctx, kind, system, url),
        theme=(ctx.primary_color, ctx.secondary_color),
        system=system,
        container=container,
    )


# -- content -----------------------------------------------------------------


def _sections(documentation: Documentation) -> tuple[RenderedSection, ...]:
    return tuple(
        RenderedSection(s.title, f"section-{slugify(s.title)}", render_markup(s.content, s.format))
        for s in documentation.sections
    )


def _decisions(documentation: Documentation) -> tuple[RenderedDecision, ...]:
    return tuple(
        RenderedDecision(
            id=d.id,
            title=d.title,
            date=d.date,
            status=d.status,
            anchor=f"decision-{slugify(d.id or d.title)}",
            html=render_markup(d.content, d.format),
        )
        for d in documentation.decisions
    )


def _dependency_rows(ctx: GeneratorContext, rels: tuple[Relationship, ...], *, inbound: bool, url: str) -> tuple[DependencyRow, ...]:
    rows: list[DependencyRow] = []
    for rel in rels:
        other = ctx.workspace.element(rel.source_id if inbound else rel.destination_id)
        if other is None:
            continue
        target = element_url(ctx.workspace, other)
        rows.append(
            DependencyRow(
                element=other.name,
                description=rel.description,
                technology=rel.technology,
                href=relative_href(url, target) if target is not None else None,
            )
        )
    return tuple(rows)


def _container_rows(ctx: GeneratorContext, system: Element, url: str) -> tuple[ElementRow, ...]:
    ws = ctx.workspace
    return tuple(
        ElementRow(c.name, c.description, relative_href(url, page_url(PageKind.CONTAINER_HOME, system, c)))
        for c in ws.containers_of(system)
        if ws.container_component_views(c)
    )


# -- builders ----------------------------------------------------------------


def _diagram_page(
    ctx: GeneratorContext,
    kind: PageKind,
    system: Optional[Element] = None,
    container: Optional[Element] = None,
    content: PageContent = None,
) -> PageViewModel:
    url = page_url(kind, system, container)
    views = views_for_page(ctx.workspace, kind, system, container)
    diagrams = build_diagrams(ctx, views, url)
    return _page(ctx, kind, system, container, visible=bool(views), diagrams=diagrams, content=content)


def workspace_home_page(ctx: GeneratorContext) -> PageViewModel:
    ws = ctx.workspace
    url = page_url(PageKind.WORKSPACE_HOME)
    diagrams = build_diagrams(ctx, views_for_page(ws, PageKind.WORKSPACE_HOME), url)
    content = HomeContent(ws.description, _sections(ws.documentation_of()))
    return _page(ctx, PageKind.WORKSPACE_HOME, visible=True, diagrams=diagrams, content=content)


def software_system_list_page(ctx: GeneratorContext) -> PageViewModel:
    ws = ctx.workspace
    url = page_url(PageKind.SOFTWARE_SYSTEM_LIST)
    rows = []
    for system in ws.software_systems:
        href = None if ws.is_external(system) else relative_href(url, page_url(PageKind.SYSTEM_HOME, system))
        rows.append(ElementRow(system.name, system.description, href))
    return _page(ctx, PageKind.SOFTWARE_SYSTEM_LIST, visible=True, content=SystemListContent(tuple(rows)))


def workspace_decisions_page(ctx: GeneratorContext) -> PageViewModel:
    decisions = _decisions(ctx.workspace.documentation_of())
    return _page(ctx, PageKind.WORKSPACE_DECISIONS, visible=bool(decisions), content=DecisionsContent(decisions))


def software_system_home_page(ctx: GeneratorContext, system: Element) -> PageViewModel:
    content = HomeContent(system.description, _sections(ctx.workspace.documentation_of(system)))
    return _page(ctx, PageKind.SYSTEM_HOME, system, visible=True, content=content)


def software_system_context_page(ctx: GeneratorContext, system: Element) -> PageViewModel:
    return _diagram_page(ctx, PageKind.SYSTEM_CONTEXT, system)


def software_system_structure_page(ctx: GeneratorContext, system: Element) -> PageViewModel:
    return _diagram_page(ctx, PageKind.SYSTEM_STRUCTURE, system)


def software_system_component_page(ctx: GeneratorContext, system: Element) -> PageViewModel:
    """Every component view of the system, plus links to the per-container pages."""
    url = page_url(PageKind.SYSTEM_COMPONENT, system)
    content = ContainerListContent(_container_rows(ctx, system, url))
    return _diagram_page(ctx, PageKind.SYSTEM_COMPONENT, system, content=content)


def software_system_dynamic_page(ctx: GeneratorContext, system: Element) -> PageViewModel:
    return _diagram_page(ctx, PageKind.SYSTEM_DYNAMIC, system)


def software_system_deployment_page(ctx: GeneratorContext, system: Element) -> PageViewModel:
    return _diagram_page(ctx, PageKind.SYSTEM_DEPLOYMENT, system)


def software_system_dependencies_page(ctx: GeneratorContext, system: Element) -> PageViewModel:
    url = page_url(PageKind.SYSTEM_DEPENDENCIES, system)
    inbound, outbound = ctx.workspace.dependencies_of(system)
    content = DependenciesContent(
        inbound=_dependency_rows(ctx, inbound, inbound=True, url=url),
        outbound=_dependency_rows(ctx, outbound, inbound=False, url=url),
    )
    return _page(
        ctx,
        PageKind.SYSTEM_DEPENDENCIES,
        system,
        visible=bool(content.inbound or content.outbound),
        content=content,
    )


def software_system_decisions_page(ctx: GeneratorContext, system: Element) -> PageViewModel:
    decisions = _decisions(ctx.workspace.documentation_of(system))
    return _page(ctx, PageKind.SYSTEM_DECISIONS, system, visible=bool(decisions), content=DecisionsContent(decisions))


def container_page(ctx: GeneratorContext, system: Element, container: Element) -> PageViewModel:
    return _diagram_page(ctx, PageKind.CONTAINER_HOME, system, container)


WorkspaceBuilder = Callable[[GeneratorContext], PageViewModel]
SystemBuilder = Callable[[GeneratorContext, Element], PageViewModel]
ContainerBuilder = Callable[[GeneratorContext, Element, Element], PageViewModel]

WORKSPACE_BUILDERS: dict[PageKind, WorkspaceBuilder] = {
    PageKind.WORKSPACE_HOME: workspace_home_page,
    PageKind.SOFTWARE_SYSTEM_LIST: software_system_list_page,
    PageKind.WORKSPACE_DECISIONS: workspace_decisions_page,
}

SYSTEM_BUILDERS: dict[PageKind, SystemBuilder] = {
    PageKind.SYSTEM_HOME: software_system_home_page,
    PageKind.SYSTEM_CONTEXT: software_system_context_page,
    PageKind.SYSTEM_STRUCTURE: software_system_structure_page,
    PageKind.SYSTEM_COMPONENT: software_system_component_page,
    PageKind.SYSTEM_DYNAMIC: software_system_dynamic_page,
    PageKind.SYSTEM_DEPLOYMENT: software_system_deployment_page,
    PageKind.SYSTEM_DEPENDENCIES: software_system_dependencies_page,
    PageKind.SYSTEM_DECISIONS: software_system_decisions_page,
}

CONTAINER_BUILDERS: dict[PageKind, ContainerBuilder] = {
    PageKind.CONTAINER_HOME: container_page,
}


def build_page(
    ctx: GeneratorContext,
    kind: PageKind,
    system: Optional[Element] = None,
    container: Optional[Element] = None,
) -> PageViewModel:
    """Build the view model for any page kind."""
    if kind.scope is Scope.WORKSPACE:
        return WORKSPACE_BUILDERS[kind](ctx)
    if system is None:
        raise ValueError(f"{kind.name} pages need a software system")
    if kind.scope is Scope.CONTAINER:
        if container is None:
            raise ValueError(f"{kind.name} pages need a container")
        return CONTAINER_BUILDERS[kind](ctx, system, container)
    return SYSTEM_BUILDERS[kind](ctx, system)


def build_diagnostic_page(
    ctx: GeneratorContext,
    kind: PageKind,
    system: Optional[Element],
    container: Optional[Element] = None,
) -> PageViewModel:
    """Navigation-only view model used for the placeholder of a failed page."""
    return _page(ctx, kind, system, container, visible=True)
