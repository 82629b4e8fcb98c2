# structurizr_site/workspace.py
"""Read-only adapter over a loaded Structurizr workspace mapping.

The loader hands us the raw JSON/YAML structure; this module turns it into
frozen value objects once and exposes the pre-filtered accessors the page view
models need ("dynamic views belonging to software system X", ...). Nothing
here renders or caches across pages: every accessor is a pure filter over the
snapshot taken in `Workspace.from_dict`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from .constants import (
    EXTERNAL_LOCATION,
    EXTERNAL_TAG_DEFAULT,
    PROP_EXTERNAL_TAG,
    VIEW_SECTIONS,
)

VIEW_KIND_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "systemLandscape": "System Landscape",
        "systemContext": "System Context",
        "container": "Container",
        "component": "Component",
        "dynamic": "Dynamic",
        "deployment": "Deployment",
    }
)


@dataclass(frozen=True)
class Relationship:
    id: str
    source_id: str
    destination_id: str
    description: str = ""
    technology: str = ""
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Element:
    id: str
    kind: str
    name: str
    description: str = ""
    technology: str = ""
    tags: tuple[str, ...] = ()
    parent_id: Optional[str] = None
    location: str = ""
    # Container/software system instances point at the element they deploy.
    reference_id: Optional[str] = None
    environment: str = ""

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


@dataclass(frozen=True)
class ViewRelationship:
    id: str
    order: str = ""
    description: str = ""


@dataclass(frozen=True)
class ViewDefinition:
    kind: str
    key: str
    title: str = ""
    description: str = ""
    scope_id: Optional[str] = None
    environment: str = ""
    element_ids: tuple[str, ...] = ()
    relationships: tuple[ViewRelationship, ...] = ()


@dataclass(frozen=True)
class DocumentationSection:
    title: str
    content: str
    format: str = "Markdown"
    order: int = 0


@dataclass(frozen=True)
class Decision:
    id: str
    title: str
    content: str = ""
    date: str = ""
    status: str = ""
    format: str = "Markdown"


@dataclass(frozen=True)
class Documentation:
    sections: tuple[DocumentationSection, ...] = ()
    decisions: tuple[Decision, ...] = ()


def _str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, (str, int, float)):
        return str(value)
    return default


def _tags(value: Any) -> tuple[str, ...]:
    if not isinstance(value, str):
        return ()
    return tuple(t.strip() for t in value.split(",") if t.strip())


def _items(value: Any) -> Iterator[dict[str, Any]]:
    """Yield only mapping items of a list; everything else is left to validation."""
    if not isinstance(value, list):
        return
    for item in value:
        if isinstance(item, dict):
            yield item


_HEADING_RE = re.compile(r"^\s*(?:#+|=+)\s+(.+?)\s*$", re.MULTILINE)


def _section_title(raw: dict[str, Any], content: str, position: int) -> str:
    title = _str(raw.get("title")).strip()
    if title:
        return title
    match = _HEADING_RE.search(content)
    if match:
        return match.group(1)
    filename = _str(raw.get("filename")).strip()
    if filename:
        return filename.rsplit("/", 1)[-1].rsplit(".", 1)[0]
    return f"Section {position}"


def _parse_documentation(raw: Any) -> Documentation:
    if not isinstance(raw, dict):
        return Documentation()

    sections: list[DocumentationSection] = []
    for i, sec in enumerate(_items(raw.get("sections")), start=1):
        content = _str(sec.get("content"))
        try:
            order = int(sec.get("order", i))
        except (TypeError, ValueError):
            order = i
        sections.append(
            DocumentationSection(
                title=_section_title(sec, content, i),
                content=content,
                format=_str(sec.get("format"), "Markdown"),
                order=order,
            )
        )
    # Stable: equal `order` keeps declaration order.
    sections.sort(key=lambda s: s.order)

    decisions = tuple(
        Decision(
            id=_str(dec.get("id")),
            title=_str(dec.get("title"), _str(dec.get("id"))),
            content=_str(dec.get("content")),
            date=_str(dec.get("date")),
            status=_str(dec.get("status")),
            format=_str(dec.get("format"), "Markdown"),
        )
        for dec in _items(raw.get("decisions"))
    )
    return Documentation(sections=tuple(sections), decisions=decisions)


class _GraphBuilder:
    """Flattens the nested model mapping into elements and relationships."""

    def __init__(self) -> None:
        self.elements: dict[str, Element] = {}
        self.relationships: dict[str, Relationship] = {}
        self.documentation: dict[str, Documentation] = {}

    def add(
        self,
        raw: dict[str, Any],
        kind: str,
        *,
        parent_id: Optional[str] = None,
        reference_key: Optional[str] = None,
        environment: str = "",
    ) -> Element:
        element_id = _str(raw.get("id"))
        reference_id = _str(raw.get(reference_key)) if reference_key else ""
        name = _str(raw.get("name"))
        if not name and reference_id in self.elements:
            name = self.elements[reference_id].name
        element = Element(
            id=element_id,
            kind=kind,
            name=name or element_id,
            description=_str(raw.get("description")),
            technology=_str(raw.get("technology")),
            tags=_tags(raw.get("tags")),
            parent_id=parent_id,
            location=_str(raw.get("location")),
            reference_id=reference_id or None,
            environment=_str(raw.get("environment"), environment),
        )
        if element_id:
            self.elements[element_id] = element

        for rel in _items(raw.get("relationships")):
            rel_id = _str(rel.get("id"))
            if not rel_id:
                continue
            self.relationships[rel_id] = Relationship(
                id=rel_id,
                source_id=_str(rel.get("sourceId"), element_id),
                destination_id=_str(rel.get("destinationId")),
                description=_str(rel.get("description")),
                technology=_str(rel.get("technology")),
                tags=_tags(rel.get("tags")),
            )
        return element

    def add_deployment_node(self, raw: dict[str, Any], parent_id: Optional[str] = None) -> None:
        node = self.add(raw, "DeploymentNode", parent_id=parent_id)
        env = node.environment
        for child in _items(raw.get("children")):
            self.add_deployment_node(child, parent_id=node.id)
        for inst in _items(raw.get("softwareSystemInstances")):
            self.add(inst, "SoftwareSystemInstance", parent_id=node.id,
                     reference_key="softwareSystemId", environment=env)
        for inst in _items(raw.get("containerInstances")):
            self.add(inst, "ContainerInstance", parent_id=node.id,
                     reference_key="containerId", environment=env)
        for infra in _items(raw.get("infrastructureNodes")):
            self.add(infra, "InfrastructureNode", parent_id=node.id, environment=env)

    def build(self, model: dict[str, Any]) -> None:
        for person in _items(model.get("people")):
            self.add(person, "Person")

        for system_raw in _items(model.get("softwareSystems")):
            system = self.add(system_raw, "SoftwareSystem")
            self.documentation[system.id] = _parse_documentation(system_raw.get("documentation"))
            for container_raw in _items(system_raw.get("containers")):
                container = self.add(container_raw, "Container", parent_id=system.id)
                for component_raw in _items(container_raw.get("components")):
                    self.add(component_raw, "Component", parent_id=container.id)

        # Instances reference containers/systems by id, so nodes go last.
        for node_raw in _items(model.get("deploymentNodes")):
            self.add_deployment_node(node_raw)


def _parse_views(views: dict[str, Any]) -> tuple[ViewDefinition, ...]:
    out: list[ViewDefinition] = []
    for section, kind in VIEW_SECTIONS:
        for raw in _items(views.get(section)):
            scope = raw.get("softwareSystemId") or raw.get("containerId") or raw.get("elementId")
            out.append(
                ViewDefinition(
                    kind=kind,
                    key=_str(raw.get("key")),
                    title=_str(raw.get("title")),
                    description=_str(raw.get("description")),
                    scope_id=_str(scope) or None,
                    environment=_str(raw.get("environment")),
                    element_ids=tuple(
                        _str(e.get("id")) for e in _items(raw.get("elements")) if e.get("id") is not None
                    ),
                    relationships=tuple(
                        ViewRelationship(
                            id=_str(r.get("id")),
                            order=_str(r.get("order")),
                            description=_str(r.get("description")),
                        )
                        for r in _items(raw.get("relationships"))
                        if r.get("id") is not None
                    ),
                )
            )
    return tuple(out)


def _parse_properties(data: dict[str, Any]) -> dict[str, str]:
    props: dict[str, str] = {}
    sources = [
        data.get("properties"),
        ((data.get("views") or {}).get("configuration") or {}).get("properties"),
    ]
    for source in sources:
        if isinstance(source, dict):
            props.update({str(k): _str(v) for k, v in source.items()})
    return props


@dataclass(frozen=True)
class Workspace:
    name: str
    description: str
    properties: Mapping[str, str]
    elements: Mapping[str, Element]
    relationships: tuple[Relationship, ...]
    views: tuple[ViewDefinition, ...]
    documentation: Documentation = Documentation()
    element_documentation: Mapping[str, Documentation] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Workspace":
        builder = _GraphBuilder()
        builder.build(data.get("model") or {})
        return cls(
            name=_str(data.get("name"), "Workspace"),
            description=_str(data.get("description")),
            properties=MappingProxyType(_parse_properties(data)),
            elements=MappingProxyType(builder.elements),
            relationships=tuple(builder.relationships.values()),
            views=_parse_views(data.get("views") or {}),
            documentation=_parse_documentation(data.get("documentation")),
            element_documentation=MappingProxyType(builder.documentation),
        )

    # -- elements ----------------------------------------------------------

    def element(self, element_id: Optional[str]) -> Optional[Element]:
        if element_id is None:
            return None
        return self.elements.get(element_id)

    def _of_kind(self, kind: str) -> tuple[Element, ...]:
        return tuple(e for e in self.elements.values() if e.kind == kind)

    @property
    def external_tag(self) -> str:
        return self.properties.get(PROP_EXTERNAL_TAG) or EXTERNAL_TAG_DEFAULT

    @property
    def software_systems(self) -> tuple[Element, ...]:
        return self._of_kind("SoftwareSystem")

    def is_external(self, system: Element) -> bool:
        return system.location == EXTERNAL_LOCATION or system.has_tag(self.external_tag)

    @property
    def internal_software_systems(self) -> tuple[Element, ...]:
        return tuple(s for s in self.software_systems if not self.is_external(s))

    def children_of(self, parent: Element, kind: str) -> tuple[Element, ...]:
        return tuple(e for e in self.elements.values() if e.parent_id == parent.id and e.kind == kind)

    def containers_of(self, system: Element) -> tuple[Element, ...]:
        return self.children_of(system, "Container")

    def software_system_of(self, element: Element) -> Optional[Element]:
        """Walk up the parent chain to the owning software system, if any."""
        current: Optional[Element] = element
        while current is not None:
            if current.kind == "SoftwareSystem":
                return current
            if current.reference_id is not None:
                current = self.element(current.reference_id)
                continue
            current = self.element(current.parent_id)
        return None

    # -- documentation -----------------------------------------------------

    def documentation_of(self, element: Optional[Element] = None) -> Documentation:
        if element is None:
            return self.documentation
        return self.element_documentation.get(element.id, Documentation())

    # -- relationships -----------------------------------------------------

    def dependencies_of(self, system: Element) -> tuple[tuple[Relationship, ...], tuple[Relationship, ...]]:
        """Return (inbound, outbound) relationships crossing the system boundary."""

        def owner(element_id: str) -> Optional[str]:
            el = self.element(element_id)
            sys_el = self.software_system_of(el) if el is not None else None
            return sys_el.id if sys_el is not None else None

        inbound: list[Relationship] = []
        outbound: list[Relationship] = []
        for rel in self.relationships:
            src_el = self.element(rel.source_id)
            dst_el = self.element(rel.destination_id)
            if src_el is None or dst_el is None:
                continue
            # Deployment instance relationships duplicate model relationships.
            if src_el.kind.endswith("Instance") or dst_el.kind.endswith("Instance"):
                continue
            src_owner, dst_owner = owner(rel.source_id), owner(rel.destination_id)
            if src_owner == dst_owner:
                continue
            if rel.destination_id == system.id:
                inbound.append(rel)
            elif rel.source_id == system.id:
                outbound.append(rel)
        return tuple(inbound), tuple(outbound)

    # -- views -------------------------------------------------------------

    def views_of_kind(self, kind: str) -> tuple[ViewDefinition, ...]:
        return tuple(v for v in self.views if v.kind == kind)

    def view_title(self, view: ViewDefinition) -> str:
        if view.title:
            return view.title
        label = VIEW_KIND_LABELS.get(view.kind, view.kind)
        scope = self.element(view.scope_id)
        if view.kind == "systemLandscape" or scope is None:
            return f"{label} View" + (f": {view.environment}" if view.environment else "")
        suffix = f" - {view.environment}" if view.environment else ""
        return f"{label} View: {scope.name}{suffix}"

    def system_landscape_views(self) -> tuple[ViewDefinition, ...]:
        return self.views_of_kind("systemLandscape")

    def system_context_views(self, system: Element) -> tuple[ViewDefinition, ...]:
        return tuple(v for v in self.views_of_kind("systemContext") if v.scope_id == system.id)

    def container_views(self, system: Element) -> tuple[ViewDefinition, ...]:
        return tuple(v for v in self.views_of_kind("container") if v.scope_id == system.id)

    def component_views(self, system: Element) -> tuple[ViewDefinition, ...]:
        container_ids = {c.id for c in self.containers_of(system)}
        return tuple(v for v in self.views_of_kind("component") if v.scope_id in container_ids)

    def container_component_views(self, container: Element) -> tuple[ViewDefinition, ...]:
        return tuple(v for v in self.views_of_kind("component") if v.scope_id == container.id)

    def dynamic_views(self, system: Element) -> tuple[ViewDefinition, ...]:
        out: list[ViewDefinition] = []
        for view in self.views_of_kind("dynamic"):
            scope = self.element(view.scope_id)
            if scope is None:
                continue
            owner = self.software_system_of(scope)
            if owner is not None and owner.id == system.id:
                out.append(view)
        return tuple(out)

    def deployment_views(self, system: Element) -> tuple[ViewDefinition, ...]:
        return tuple(v for v in self.views_of_kind("deployment") if v.scope_id == system.id)

    def view_elements(self, view: ViewDefinition) -> tuple[Element, ...]:
        return tuple(e for e in (self.element(i) for i in view.element_ids) if e is not None)

    def view_relationships(self, view: ViewDefinition) -> Iterable[tuple[Relationship, ViewRelationship]]:
        by_id = {r.id: r for r in self.relationships}
        for ref in view.relationships:
            rel = by_id.get(ref.id)
            if rel is not None:
                yield rel, ref
