from __future__ import annotations

from typing import Any

import pytest

from structurizr_site.model.context import GeneratorContext
from structurizr_site.workspace import Workspace

from .helpers import FakeRenderer, load_fixture_dict


@pytest.fixture
def workspace_dict() -> dict[str, Any]:
    return load_fixture_dict()


@pytest.fixture
def workspace(workspace_dict: dict[str, Any]) -> Workspace:
    return Workspace.from_dict(workspace_dict)


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def ctx(workspace: Workspace, renderer: FakeRenderer) -> GeneratorContext:
    return GeneratorContext(workspace=workspace, renderer=renderer)
