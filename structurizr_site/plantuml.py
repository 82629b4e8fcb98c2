# structurizr_site/plantuml.py
from __future__ import annotations

import re
from typing import Mapping, Optional

from .errors import RenderError
from .workspace import Element, ViewDefinition, Workspace

# C4-PlantUML library shipped in the PlantUML standard library.
C4_INCLUDES: dict[str, str] = {
    "systemLandscape": "C4/C4_Context",
    "systemContext": "C4/C4_Context",
    "container": "C4/C4_Container",
    "component": "C4/C4_Component",
    "dynamic": "C4/C4_Dynamic",
    "deployment": "C4/C4_Deployment",
}

PUML_ALIAS_RE = re.compile(r"[^A-Za-z0-9_]")


def puml_text(text: object) -> str:
    """Escape text for a double-quoted C4-PlantUML macro argument."""
    normalized = re.sub(r"[ \t]+", " ", str(text or "")).strip()
    return normalized.replace("\r\n", "\n").replace("\n", "\\n").replace('"', "'")


def puml_str(text: object) -> str:
    return f'"{puml_text(text)}"'


def puml_alias(element_id: str) -> str:
    """PlantUML aliases must be identifiers; Structurizr ids are usually numeric."""
    return "e" + PUML_ALIAS_RE.sub("_", element_id)


def interaction_order_key(order: str) -> tuple[tuple[int, int, str], ...]:
    """Natural sort key for dynamic-view step numbers such as `1`, `1.2`, `10`."""
    if not order:
        return ((2, 0, ""),)
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in re.split(r"[.\s]+", order.strip())
        if part
    )


def puml_macro(macro: str, *positional: str, link: Optional[str] = None) -> str:
    args = list(positional)
    if link:
        args.append(f'$link="{link}"')
    return f"{macro}({', '.join(args)})"


class _ViewExporter:
    def __init__(self, workspace: Workspace, view: ViewDefinition, links: Mapping[str, str]) -> None:
        self.workspace = workspace
        self.view = view
        self.links = links
        self.elements = workspace.view_elements(view)
        self.element_ids = {e.id for e in self.elements}
        self.lines: list[str] = []

    def _element_line(self, element: Element, indent: str) -> str:
        ws = self.workspace
        alias = puml_alias(element.id)
        link = self.links.get(element.id)
        name, desc, tech = puml_str(element.name), puml_str(element.description), puml_str(element.technology)

        if element.kind == "Person":
            macro = "Person_Ext" if element.location == "External" else "Person"
            return indent + puml_macro(macro, alias, name, desc, link=link)
        if element.kind in ("SoftwareSystem", "SoftwareSystemInstance"):
            target = ws.element(element.reference_id) if element.reference_id else element
            external = target is not None and target.kind == "SoftwareSystem" and ws.is_external(target)
            return indent + puml_macro("System_Ext" if external else "System", alias, name, desc, link=link)
        if element.kind in ("Container", "ContainerInstance"):
            target = ws.element(element.reference_id) if element.reference_id else element
            if target is not None and element.kind == "ContainerInstance":
                desc, tech = puml_str(target.description), puml_str(target.technology)
            macro = "ContainerDb" if target is not None and target.has_tag("Database") else "Container"
            return indent + puml_macro(macro, alias, name, tech, desc, link=link)
        if element.kind == "Component":
            return indent + puml_macro("Component", alias, name, tech, desc, link=link)
        if element.kind == "InfrastructureNode":
            return indent + puml_macro("Node", alias, name, tech, desc, link=link)
        raise RenderError(
            f"view {self.view.key!r} contains unsupported element kind {element.kind!r}",
            view_key=self.view.key,
        )

    def _emit_deployment_tree(self, node: Element, indent: str) -> None:
        self.lines.append(
            indent
            + puml_macro(
                "Deployment_Node",
                puml_alias(node.id),
                puml_str(node.name),
                puml_str(node.technology),
                puml_str(node.description),
            )
            + " {"
        )
        for child in self.elements:
            if child.parent_id != node.id:
                continue
            if child.kind == "DeploymentNode":
                self._emit_deployment_tree(child, indent + "  ")
            else:
                self.lines.append(self._element_line(child, indent + "  "))
        self.lines.append(indent + "}")

    def _emit_elements(self) -> None:
        if self.view.kind == "deployment":
            for element in self.elements:
                if element.kind == "DeploymentNode" and element.parent_id not in self.element_ids:
                    self._emit_deployment_tree(element, "")
                elif element.kind != "DeploymentNode" and element.parent_id not in self.element_ids:
                    self.lines.append(self._element_line(element, ""))
            return

        scope = self.workspace.element(self.view.scope_id)
        inside: list[Element] = []
        if self.view.kind in ("container", "component", "dynamic") and scope is not None:
            inside = [e for e in self.elements if e.parent_id == scope.id]

        for element in self.elements:
            if element in inside or (inside and scope is not None and element.id == scope.id):
                continue
            self.lines.append(self._element_line(element, ""))

        if inside and scope is not None:
            boundary = "System_Boundary" if scope.kind == "SoftwareSystem" else "Container_Boundary"
            self.lines.append(f"{boundary}({puml_alias(scope.id)}, {puml_str(scope.name)}) {{")
            for element in inside:
                self.lines.append(self._element_line(element, "  "))
            self.lines.append("}")

    def _emit_relationships(self) -> None:
        pairs = list(self.workspace.view_relationships(self.view))
        if self.view.kind == "dynamic":
            # "2" < "10" and "1.2" < "1.10"; unnumbered steps keep their place at the end.
            pairs.sort(key=lambda pair: interaction_order_key(pair[1].order))
        for rel, ref in pairs:
            if rel.source_id not in self.element_ids or rel.destination_id not in self.element_ids:
                continue
            description = ref.description or rel.description
            if self.view.kind == "dynamic" and ref.order:
                description = f"{ref.order}. {description}"
            self.lines.append(
                puml_macro(
                    "Rel",
                    puml_alias(rel.source_id),
                    puml_alias(rel.destination_id),
                    puml_str(description),
                    puml_str(rel.technology),
                )
            )

    def export(self) -> str:
        view = self.view
        if not view.element_ids:
            raise RenderError(f"view {view.key!r} contains no elements", view_key=view.key)

        missing = [i for i in view.element_ids if i not in self.element_ids]
        if missing:
            raise RenderError(
                f"view {view.key!r} references unknown element id(s): {', '.join(missing)}",
                view_key=view.key,
            )

        include = C4_INCLUDES.get(view.kind)
        if include is None:
            raise RenderError(f"view {view.key!r} has unsupported kind {view.kind!r}", view_key=view.key)

        self.lines = [
            f"@startuml {PUML_ALIAS_RE.sub('_', view.key)}",
            "set separator none",
            f"title {puml_text(self.workspace.view_title(view))}",
            "",
            f"!include <{include}>",
            "",
        ]
        self._emit_elements()
        self.lines.append("")
        self._emit_relationships()
        self.lines.append("")
        self.lines.append("SHOW_LEGEND(true)")
        self.lines.append("@enduml")
        return "\n".join(self.lines) + "\n"


def export_view(
    workspace: Workspace,
    view: ViewDefinition,
    links: Optional[Mapping[str, str]] = None,
) -> str:
    """Export a view definition as C4-PlantUML source.

    `links` maps element ids to hrefs; linked elements become clickable in the
    rendered SVG.
    """
    return _ViewExporter(workspace, view, links or {}).export()
