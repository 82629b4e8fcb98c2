from __future__ import annotations

from html import escape
from typing import Callable, Optional

from ..model.kinds import DIAGRAM_PAGE_KINDS, PageKind
from ..model.pages import (
    ContainerListContent,
    DecisionsContent,
    DependenciesContent,
    DependencyRow,
    HomeContent,
    PageViewModel,
    SystemListContent,
)
from .diagram import diagram, diagram_index
from .shell import page_shell, redirect_up_page

BodyFn = Callable[[PageViewModel], str]


def _link_or_text(title: str, href: Optional[str]) -> str:
    if href is None:
        return escape(title)
    return f'<a href="{escape(href)}">{escape(title)}</a>'


def _diagrams_body(page: PageViewModel) -> str:
    parts = [diagram_index(page.diagram_index)]
    parts.extend(diagram(d) for d in page.diagrams)
    return "\n".join(p for p in parts if p)


def _home_body(page: PageViewModel) -> str:
    content = page.content
    if not isinstance(content, HomeContent):
        raise TypeError(f"{page.kind.name} page needs HomeContent, got {type(content).__name__}")

    parts: list[str] = []
    if content.description:
        parts.append(f'<p class="lead">{escape(content.description)}</p>')
    if len(content.sections) > 1:
        items = "".join(
            f'<li><a href="#{escape(s.anchor)}">{escape(s.title)}</a></li>' for s in content.sections
        )
        parts.append(f'<nav class="toc"><ol>{items}</ol></nav>')
    for section in content.sections:
        parts.append(f'<section class="documentation" id="{escape(section.anchor)}">{section.html}</section>')
    if page.diagrams:
        parts.append(_diagrams_body(page))
    return "\n".join(parts)


def _system_list_body(page: PageViewModel) -> str:
    content = page.content
    if not isinstance(content, SystemListContent):
        raise TypeError(f"{page.kind.name} page needs SystemListContent, got {type(content).__name__}")

    rows = "".join(
        f"<tr><td>{_link_or_text(row.name, row.href)}</td><td>{escape(row.description)}</td></tr>"
        for row in content.rows
    )
    return (
        '<table class="table">'
        "<thead><tr><th>Name</th><th>Description</th></tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table>"
    )


def _component_body(page: PageViewModel) -> str:
    content = page.content
    if not isinstance(content, ContainerListContent):
        raise TypeError(f"{page.kind.name} page needs ContainerListContent, got {type(content).__name__}")

    parts = [_diagrams_body(page)]
    if content.rows:
        rows = "".join(
            f"<tr><td>{_link_or_text(row.name, row.href)}</td><td>{escape(row.description)}</td></tr>"
            for row in content.rows
        )
        parts.append(
            "<h2>Containers</h2>"
            '<table class="table">'
            "<thead><tr><th>Name</th><th>Description</th></tr></thead>"
            f"<tbody>{rows}</tbody>"
            "</table>"
        )
    return "\n".join(parts)


def _dependency_table(title: str, rows: tuple[DependencyRow, ...], column: str) -> str:
    if not rows:
        return ""
    body = "".join(
        "<tr>"
        f"<td>{_link_or_text(row.element, row.href)}</td>"
        f"<td>{escape(row.description)}</td>"
        f"<td>{escape(row.technology)}</td>"
        "</tr>"
        for row in rows
    )
    return (
        f"<h2>{escape(title)}</h2>"
        '<table class="table">'
        f"<thead><tr><th>{escape(column)}</th><th>Description</th><th>Technology</th></tr></thead>"
        f"<tbody>{body}</tbody>"
        "</table>"
    )


def _dependencies_body(page: PageViewModel) -> str:
    content = page.content
    if not isinstance(content, DependenciesContent):
        raise TypeError(f"{page.kind.name} page needs DependenciesContent, got {type(content).__name__}")
    return "\n".join(
        part
        for part in (
            _dependency_table("Inbound", content.inbound, "Source"),
            _dependency_table("Outbound", content.outbound, "Destination"),
        )
        if part
    )


def _decisions_body(page: PageViewModel) -> str:
    content = page.content
    if not isinstance(content, DecisionsContent):
        raise TypeError(f"{page.kind.name} page needs DecisionsContent, got {type(content).__name__}")

    rows = "".join(
        "<tr>"
        f'<td>{escape(d.id)}</td><td><a href="#{escape(d.anchor)}">{escape(d.title)}</a></td>'
        f"<td>{escape(d.date)}</td><td>{escape(d.status)}</td>"
        "</tr>"
        for d in content.decisions
    )
    parts = [
        '<table class="table">'
        "<thead><tr><th>ID</th><th>Title</th><th>Date</th><th>Status</th></tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table>"
    ]
    for d in content.decisions:
        parts.append(
            f'<section class="decision" id="{escape(d.anchor)}">'
            f"<h2>{escape(d.id)}. {escape(d.title)}</h2>"
            f'<p class="meta">{escape(d.status)} {escape(d.date)}</p>'
            f"{d.html}"
            "</section>"
        )
    return "\n".join(parts)


PAGE_BODIES: dict[PageKind, BodyFn] = {
    PageKind.WORKSPACE_HOME: _home_body,
    PageKind.SYSTEM_HOME: _home_body,
    PageKind.SOFTWARE_SYSTEM_LIST: _system_list_body,
    PageKind.SYSTEM_DEPENDENCIES: _dependencies_body,
    PageKind.WORKSPACE_DECISIONS: _decisions_body,
    PageKind.SYSTEM_DECISIONS: _decisions_body,
    **{kind: _diagrams_body for kind in DIAGRAM_PAGE_KINDS},
    PageKind.SYSTEM_COMPONENT: _component_body,
    PageKind.CONTAINER_HOME: _diagrams_body,
}


def render_page(page: PageViewModel) -> str:
    """Render a page view model to a complete HTML document."""
    if not page.visible:
        return redirect_up_page(page)
    return page_shell(page, PAGE_BODIES[page.kind](page))


def render_diagnostic_page(page: PageViewModel, message: str) -> str:
    """Placeholder for a page whose diagrams could not be rendered."""
    body = (
        '<div class="notification is-danger">'
        "<p><strong>This page could not be generated.</strong></p>"
        f"<pre>{escape(message)}</pre>"
        "</div>"
    )
    return page_shell(page, body)
