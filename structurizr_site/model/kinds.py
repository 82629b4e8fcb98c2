from __future__ import annotations

from enum import Enum


class Tab(Enum):
    """Navigation marker highlighted on a page."""

    HOME = "home"
    SOFTWARE_SYSTEMS = "software-systems"
    CONTEXT = "context"
    STRUCTURE = "structure"
    COMPONENT = "component"
    DYNAMIC = "dynamic"
    DEPLOYMENT = "deployment"
    DEPENDENCIES = "dependencies"
    DECISIONS = "decisions"


class Scope(Enum):
    WORKSPACE = "workspace"
    SOFTWARE_SYSTEM = "software-system"
    CONTAINER = "container"


class PageKind(Enum):
    """Closed set of page variants; the value is (scope, tab, directory, label)."""

    WORKSPACE_HOME = (Scope.WORKSPACE, Tab.HOME, "", "Home")
    SOFTWARE_SYSTEM_LIST = (Scope.WORKSPACE, Tab.SOFTWARE_SYSTEMS, "software-systems", "Software Systems")
    WORKSPACE_DECISIONS = (Scope.WORKSPACE, Tab.DECISIONS, "decisions", "Decisions")
    SYSTEM_HOME = (Scope.SOFTWARE_SYSTEM, Tab.HOME, "", "Info")
    SYSTEM_CONTEXT = (Scope.SOFTWARE_SYSTEM, Tab.CONTEXT, "context", "Context views")
    SYSTEM_STRUCTURE = (Scope.SOFTWARE_SYSTEM, Tab.STRUCTURE, "structure", "Container views")
    SYSTEM_COMPONENT = (Scope.SOFTWARE_SYSTEM, Tab.COMPONENT, "component", "Component views")
    SYSTEM_DYNAMIC = (Scope.SOFTWARE_SYSTEM, Tab.DYNAMIC, "dynamic", "Dynamic views")
    SYSTEM_DEPLOYMENT = (Scope.SOFTWARE_SYSTEM, Tab.DEPLOYMENT, "deployment", "Deployment views")
    SYSTEM_DEPENDENCIES = (Scope.SOFTWARE_SYSTEM, Tab.DEPENDENCIES, "dependencies", "Dependencies")
    SYSTEM_DECISIONS = (Scope.SOFTWARE_SYSTEM, Tab.DECISIONS, "decisions", "Decisions")
    CONTAINER_HOME = (Scope.CONTAINER, Tab.COMPONENT, "container", "Container")

    @property
    def scope(self) -> Scope:
        return self.value[0]

    @property
    def tab(self) -> Tab:
        return self.value[1]

    @property
    def dirname(self) -> str:
        return self.value[2]

    @property
    def label(self) -> str:
        return self.value[3]


WORKSPACE_PAGE_KINDS: tuple[PageKind, ...] = tuple(k for k in PageKind if k.scope is Scope.WORKSPACE)

# Also the order of the tab bar.
SYSTEM_PAGE_KINDS: tuple[PageKind, ...] = tuple(k for k in PageKind if k.scope is Scope.SOFTWARE_SYSTEM)

CONTAINER_PAGE_KINDS: tuple[PageKind, ...] = tuple(k for k in PageKind if k.scope is Scope.CONTAINER)

DIAGRAM_PAGE_KINDS: frozenset[PageKind] = frozenset(
    {
        PageKind.SYSTEM_CONTEXT,
        PageKind.SYSTEM_STRUCTURE,
        PageKind.SYSTEM_COMPONENT,
        PageKind.SYSTEM_DYNAMIC,
        PageKind.SYSTEM_DEPLOYMENT,
    }
)
