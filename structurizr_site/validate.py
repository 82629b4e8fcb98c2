# structurizr_site/validate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Tuple

from .constants import VIEW_SECTIONS

Severity = Literal["error", "warning"]

# Nested element sections reachable from each model section.
_NESTED_SECTIONS: dict[str, tuple[str, ...]] = {
    "softwareSystems": ("containers",),
    "containers": ("components",),
    "components": (),
    "people": (),
    "deploymentNodes": (
        "children",
        "softwareSystemInstances",
        "containerInstances",
        "infrastructureNodes",
    ),
    "children": (
        "children",
        "softwareSystemInstances",
        "containerInstances",
        "infrastructureNodes",
    ),
    "softwareSystemInstances": (),
    "containerInstances": (),
    "infrastructureNodes": (),
}


@dataclass(frozen=True)
class ValidationIssue:
    """One finding about the workspace, keyed by a stable code."""

    severity: Severity
    code: str
    message: str
    path: str = ""
    hint: Optional[str] = None


@dataclass(frozen=True)
class ValidateConfig:
    """Which workspace checks to drop or harden.

    `ignore` drops issues by code; `escalate` turns the named warnings into
    errors.
    """

    ignore: set[str] = field(default_factory=set)
    escalate: set[str] = field(default_factory=set)
    warn_on_empty_views: bool = True


def validate_workspace_issues(
    data: dict[str, Any], cfg: Optional[ValidateConfig] = None
) -> list[ValidationIssue]:
    """Return structured validation issues for a raw workspace mapping."""

    cfg = cfg or ValidateConfig()
    issues: list[ValidationIssue] = []

    def emit(
        severity: Severity,
        code: str,
        message: str,
        path: str = "",
        hint: Optional[str] = None,
    ) -> None:
        if code in cfg.ignore:
            return
        final_severity: Severity = (
            "error" if (severity == "warning" and code in cfg.escalate) else severity
        )
        issues.append(
            ValidationIssue(
                severity=final_severity,
                code=code,
                message=message,
                path=path,
                hint=hint,
            )
        )

    model = data.get("model") or {}
    element_ids: dict[str, str] = {}
    relationships: list[tuple[str, dict[str, Any]]] = []

    def walk(section: str, items: Any, path: str) -> None:
        if not isinstance(items, list):
            emit("error", "E_SECTION_NOT_LIST", f"{section} must be a list", path=path)
            return

        for j, item in enumerate(items):
            item_path = f"{path}/{j}"
            if not isinstance(item, dict):
                emit(
                    "warning",
                    "W_SECTION_ITEM_NOT_MAPPING",
                    f"{section} contains a non-mapping item; skipping",
                    path=item_path,
                )
                continue

            element_id = item.get("id")
            if element_id is None or str(element_id) == "":
                emit(
                    "error",
                    "E_ELEMENT_MISSING_ID",
                    f"{section} item missing `id`",
                    path=f"{item_path}/id",
                )
            else:
                element_id = str(element_id)
                if element_id in element_ids:
                    emit(
                        "error",
                        "E_ELEMENT_DUPLICATE_ID",
                        f"duplicate element id {element_id!r} in {section} "
                        f"(also at {element_ids[element_id]})",
                        path=f"{item_path}/id",
                    )
                else:
                    element_ids[element_id] = item_path

            if section == "softwareSystems":
                name = item.get("name")
                if not isinstance(name, str) or not name.strip():
                    emit(
                        "error",
                        "E_SOFTWARE_SYSTEM_MISSING_NAME",
                        f"software system {element_id!r} has no name; pages are addressed by name",
                        path=f"{item_path}/name",
                    )

            rels = item.get("relationships")
            if rels is not None:
                if not isinstance(rels, list):
                    emit(
                        "error",
                        "E_RELATIONSHIPS_NOT_LIST",
                        f"relationships of element {element_id!r} must be a list",
                        path=f"{item_path}/relationships",
                    )
                else:
                    for k, rel in enumerate(rels):
                        if isinstance(rel, dict):
                            relationships.append((f"{item_path}/relationships/{k}", rel))

            for nested in _NESTED_SECTIONS.get(section, ()):
                if nested in item:
                    walk(nested, item.get(nested) or [], f"{item_path}/{nested}")

    for section in ("people", "softwareSystems", "deploymentNodes"):
        if section in model:
            walk(section, model.get(section) or [], f"/model/{section}")

    for path, rel in relationships:
        for key in ("sourceId", "destinationId"):
            ref = rel.get(key)
            if ref is not None and str(ref) not in element_ids:
                emit(
                    "warning",
                    "W_REL_UNKNOWN_ELEMENT",
                    f"relationship {rel.get('id')!r} {key} references unknown element id {ref!r}",
                    path=f"{path}/{key}",
                )

    views = data.get("views") or {}
    view_keys: dict[str, str] = {}
    for section, kind in VIEW_SECTIONS:
        items = views.get(section)
        if items is None:
            continue
        if not isinstance(items, list):
            emit("error", "E_VIEWS_NOT_LIST", f"views.{section} must be a list", path=f"/views/{section}")
            continue

        for i, view in enumerate(items):
            path = f"/views/{section}/{i}"
            if not isinstance(view, dict):
                emit(
                    "warning",
                    "W_VIEW_NOT_MAPPING",
                    f"views.{section} contains a non-mapping item; skipping",
                    path=path,
                )
                continue

            key = view.get("key")
            if not isinstance(key, str) or not key:
                emit(
                    "error",
                    "E_VIEW_MISSING_KEY",
                    f"{kind} view is missing a string `key`",
                    path=f"{path}/key",
                )
            elif key in view_keys:
                emit(
                    "error",
                    "E_VIEW_DUPLICATE_KEY",
                    f"duplicate view key {key!r} (also at {view_keys[key]})",
                    path=f"{path}/key",
                )
            else:
                view_keys[key] = path

            scope = view.get("softwareSystemId") or view.get("containerId") or view.get("elementId")
            if scope is not None and str(scope) not in element_ids:
                emit(
                    "warning",
                    "W_VIEW_SCOPE_UNKNOWN",
                    f"view {key!r} is scoped to unknown element id {scope!r}",
                    path=path,
                )

            elements = view.get("elements") or []
            if not isinstance(elements, list):
                emit("error", "E_VIEW_ELEMENTS_NOT_LIST", f"view {key!r} elements must be a list",
                     path=f"{path}/elements")
                continue

            if not elements and cfg.warn_on_empty_views:
                emit(
                    "warning",
                    "W_VIEW_EMPTY",
                    f"view {key!r} contains no elements; its diagram cannot be rendered",
                    path=f"{path}/elements",
                    hint="Add `include *` (or explicit elements) to the view definition",
                )

            for j, el in enumerate(elements):
                el_id = el.get("id") if isinstance(el, dict) else None
                if el_id is not None and str(el_id) not in element_ids:
                    emit(
                        "warning",
                        "W_VIEW_ELEMENT_UNKNOWN",
                        f"view {key!r} references unknown element id {el_id!r}",
                        path=f"{path}/elements/{j}/id",
                    )

    return issues


def validate_workspace(
    data: dict[str, Any], cfg: Optional[ValidateConfig] = None
) -> Tuple[list[str], list[str]]:
    """Return (errors, warnings) as message lists."""
    issues = validate_workspace_issues(data, cfg)
    errors = [iss.message for iss in issues if iss.severity == "error"]
    warnings = [iss.message for iss in issues if iss.severity == "warning"]
    return errors, warnings
