from __future__ import annotations

import hashlib
import posixpath
import re
from typing import Optional

from ..constants import INDEX_FILE, PUML_DIR, SOFTWARE_SYSTEMS_DIR
from ..workspace import Element, Workspace
from .kinds import PageKind, Scope

_SLUG_RE = re.compile(r"[^a-z0-9]+")
_FILE_STEM_RE = re.compile(r"[^A-Za-z0-9._-]+")


def slugify(name: str) -> str:
    """Lower-case `name` and collapse runs of other characters into `-`."""
    slug = _SLUG_RE.sub("-", name.lower()).strip("-")
    return slug or "unnamed"


def page_url(kind: PageKind, system: Optional[Element] = None, container: Optional[Element] = None) -> str:
    """Site-relative URL of a page; directories end with `/`, the root is ``""``."""
    if kind.scope is Scope.WORKSPACE:
        return f"{kind.dirname}/" if kind.dirname else ""
    if system is None:
        raise ValueError(f"{kind.name} pages need a software system")
    base = f"{SOFTWARE_SYSTEMS_DIR}/{slugify(system.name)}/"
    if kind.scope is Scope.CONTAINER:
        if container is None:
            raise ValueError(f"{kind.name} pages need a container")
        return f"{base}{kind.dirname}/{slugify(container.name)}/"
    return f"{base}{kind.dirname}/" if kind.dirname else base


def output_path(url: str) -> str:
    return f"{url}{INDEX_FILE}"


def puml_path(view_key: str) -> str:
    """PlantUML source file of a view; keys that are not safe file stems get a hash suffix."""
    stem = _FILE_STEM_RE.sub("_", view_key)
    if stem != view_key:
        stem = f"{stem}-{hashlib.sha1(view_key.encode('utf-8')).hexdigest()[:8]}"
    return f"{PUML_DIR}/{stem}.puml"


def relative_href(from_url: str, to: str) -> str:
    """Relative link from the page at `from_url` to a page URL or a file path."""
    base = from_url.rstrip("/") or "."
    target = to.rstrip("/") or "."
    rel = posixpath.relpath(target, base)
    if to == "" or to.endswith("/"):
        return "./" if rel == "." else f"{rel}/"
    return rel


def element_url(workspace: Workspace, element: Element) -> Optional[str]:
    """URL of the page documenting `element`, or None when it has no page."""
    if element.reference_id is not None:
        target = workspace.element(element.reference_id)
        return element_url(workspace, target) if target is not None else None

    system = workspace.software_system_of(element)
    if system is None or workspace.is_external(system):
        return None
    if element.kind == "SoftwareSystem":
        return page_url(PageKind.SYSTEM_HOME, system)
    if element.kind == "Container":
        if workspace.container_component_views(element):
            return page_url(PageKind.CONTAINER_HOME, system, element)
        return page_url(PageKind.SYSTEM_STRUCTURE, system)
    if element.kind == "Component":
        container = workspace.element(element.parent_id)
        if container is None:
            return page_url(PageKind.SYSTEM_COMPONENT, system)
        return page_url(PageKind.CONTAINER_HOME, system, container)
    return None
