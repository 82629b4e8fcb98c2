from structurizr_site.validate import ValidateConfig, validate_workspace, validate_workspace_issues


def _codes(issues):
    return [(i.severity, i.code) for i in issues]


def test_fixture_workspace_is_clean(workspace_dict):
    errors, warnings = validate_workspace(workspace_dict)
    assert errors == []
    assert warnings == []


def test_duplicate_element_id(workspace_dict):
    workspace_dict["model"]["softwareSystems"].append({"id": "2", "name": "Clone"})
    issues = validate_workspace_issues(workspace_dict)
    assert ("error", "E_ELEMENT_DUPLICATE_ID") in _codes(issues)


def test_software_system_needs_a_name(workspace_dict):
    workspace_dict["model"]["softwareSystems"].append({"id": "40"})
    issues = validate_workspace_issues(workspace_dict)
    assert ("error", "E_SOFTWARE_SYSTEM_MISSING_NAME") in _codes(issues)


def test_duplicate_view_key(workspace_dict):
    views = workspace_dict["views"]["dynamicViews"]
    views.append(dict(views[0]))
    errors, _ = validate_workspace(workspace_dict)
    assert any("duplicate view key 'OrdersFlow'" in e for e in errors)


def test_unknown_relationship_destination_is_a_warning(workspace_dict):
    person = workspace_dict["model"]["people"][0]
    person["relationships"].append({"id": "99", "sourceId": "1", "destinationId": "404"})
    issues = validate_workspace_issues(workspace_dict)
    assert _codes(issues) == [("warning", "W_REL_UNKNOWN_ELEMENT")]
    assert issues[0].path == "/model/people/0/relationships/2/destinationId"


def test_nested_elements_are_indexed(workspace_dict):
    # Component and container instance ids are referenced by views; no warnings expected.
    issues = validate_workspace_issues(workspace_dict)
    assert not [i for i in issues if i.code == "W_VIEW_ELEMENT_UNKNOWN"]


def test_empty_view_warning_and_escalation(workspace_dict):
    workspace_dict["views"]["dynamicViews"].append({"key": "Nothing", "elementId": "7", "elements": []})

    issues = validate_workspace_issues(workspace_dict)
    assert ("warning", "W_VIEW_EMPTY") in _codes(issues)

    escalated = validate_workspace_issues(workspace_dict, ValidateConfig(escalate={"W_VIEW_EMPTY"}))
    assert ("error", "W_VIEW_EMPTY") in _codes(escalated)

    ignored = validate_workspace_issues(workspace_dict, ValidateConfig(ignore={"W_VIEW_EMPTY"}))
    assert ignored == []


def test_view_scope_and_elements_must_exist(workspace_dict):
    workspace_dict["views"]["containerViews"].append(
        {"key": "Ghost", "softwareSystemId": "77", "elements": [{"id": "78"}]}
    )
    codes = [i.code for i in validate_workspace_issues(workspace_dict)]
    assert "W_VIEW_SCOPE_UNKNOWN" in codes
    assert "W_VIEW_ELEMENT_UNKNOWN" in codes


def test_non_list_sections(workspace_dict):
    workspace_dict["model"]["people"] = {"id": "1"}
    workspace_dict["views"]["containerViews"] = "nope"
    codes = [i.code for i in validate_workspace_issues(workspace_dict)]
    assert "E_SECTION_NOT_LIST" in codes
    assert "E_VIEWS_NOT_LIST" in codes


def test_empty_view_warning_can_be_switched_off(workspace_dict):
    workspace_dict["views"]["dynamicViews"].append({"key": "Nothing", "elementId": "7", "elements": []})

    issues = validate_workspace_issues(workspace_dict, ValidateConfig(warn_on_empty_views=False))
    assert issues == []

    errors, warnings = validate_workspace(workspace_dict, ValidateConfig(escalate={"W_VIEW_EMPTY"}))
    assert warnings == []
    assert len(errors) == 1 and "Nothing" in errors[0]
