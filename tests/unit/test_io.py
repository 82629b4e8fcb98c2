from pathlib import Path

import pytest

from structurizr_site.errors import WorkspaceParseError
from structurizr_site.io import load_workspace

from ..helpers import WORKSPACE_JSON


def test_load_json_workspace():
    data = load_workspace(WORKSPACE_JSON)
    assert data["name"] == "Webshop"
    assert [s["name"] for s in data["model"]["softwareSystems"]] == ["Orders", "Payments", "Empty", "Bank"]


def test_load_yaml_workspace_from_directory(tmp_path: Path):
    (tmp_path / "workspace.yaml").write_text(
        "name: Tiny\nmodel:\n  softwareSystems:\n    - id: '1'\n      name: Solo\nviews: {}\n",
        encoding="utf-8",
    )
    data = load_workspace(tmp_path)
    assert data["name"] == "Tiny"
    assert data["model"]["softwareSystems"][0]["name"] == "Solo"


def test_missing_workspace_is_a_parse_error(tmp_path: Path):
    with pytest.raises(WorkspaceParseError, match="not found"):
        load_workspace(tmp_path / "nope.json")


def test_directory_without_workspace_file(tmp_path: Path):
    with pytest.raises(WorkspaceParseError, match="No workspace file"):
        load_workspace(tmp_path)


def test_invalid_json_reports_position(tmp_path: Path):
    path = tmp_path / "workspace.json"
    path.write_text('{"name": "x",', encoding="utf-8")
    with pytest.raises(WorkspaceParseError, match="Failed to parse JSON"):
        load_workspace(path)


def test_invalid_yaml(tmp_path: Path):
    path = tmp_path / "workspace.yaml"
    path.write_text("name: [unclosed\n", encoding="utf-8")
    with pytest.raises(WorkspaceParseError, match="Failed to parse YAML"):
        load_workspace(path)


def test_top_level_must_be_mapping(tmp_path: Path):
    path = tmp_path / "workspace.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(WorkspaceParseError, match="must be a mapping"):
        load_workspace(path)


def test_model_must_be_mapping(tmp_path: Path):
    path = tmp_path / "workspace.json"
    path.write_text('{"model": []}', encoding="utf-8")
    with pytest.raises(WorkspaceParseError, match="workspace.model"):
        load_workspace(path)


def test_unsupported_suffix(tmp_path: Path):
    path = tmp_path / "workspace.dsl"
    path.write_text("workspace {}", encoding="utf-8")
    with pytest.raises(WorkspaceParseError, match="Unsupported workspace file type"):
        load_workspace(path)


@pytest.mark.parametrize(
    "views,match",
    [
        ('{"configuration": ["oops"]}', "views.configuration"),
        ('{"configuration": {"properties": "oops"}}', "properties"),
    ],
)
def test_view_configuration_must_be_mapping(tmp_path: Path, views, match):
    path = tmp_path / "workspace.json"
    path.write_text(f'{{"model": {{}}, "views": {views}}}', encoding="utf-8")
    with pytest.raises(WorkspaceParseError, match=match):
        load_workspace(path)
