import pytest

from structurizr_site.errors import RenderError
from structurizr_site.plantuml import export_view, interaction_order_key, puml_alias, puml_text
from structurizr_site.workspace import ViewDefinition, ViewRelationship


def _view(workspace, key):
    return next(v for v in workspace.views if v.key == key)


def test_puml_text_escapes_quotes_and_newlines():
    assert puml_text('Say "hi"\nthen  leave') == "Say 'hi'\\nthen leave"
    assert puml_alias("12") == "e12"
    assert puml_alias("a-b") == "ea_b"


def test_container_view_draws_system_boundary(workspace):
    source = export_view(workspace, _view(workspace, "OrdersContainers"))
    lines = source.splitlines()

    assert lines[0] == "@startuml OrdersContainers"
    assert "!include <C4/C4_Container>" in lines
    assert 'Person(e1, "Customer", "Buys things.")' in lines
    assert 'System(e6, "Payments", "Moves money.")' in lines
    assert 'System_Boundary(e2, "Orders") {' in lines
    assert '  Container(e3, "Orders API", "Python", "REST API for orders.")' in lines
    assert '  ContainerDb(e5, "Orders DB", "PostgreSQL", "Stores orders.")' in lines
    assert 'Rel(e3, e5, "Reads and writes", "SQL")' in lines
    assert 'Rel(e1, e3, "Uses", "HTTPS")' in lines
    assert lines[-1] == "@enduml"


def test_context_view_marks_external_systems(workspace):
    source = export_view(workspace, _view(workspace, "OrdersContext"))
    assert "title System Context View: Orders" in source
    assert 'System_Ext(e8, "Bank", "The outside bank.")' in source
    assert "System_Boundary" not in source


def test_links_become_link_arguments(workspace):
    source = export_view(workspace, _view(workspace, "OrdersContext"), {"2": "../"})
    assert 'System(e2, "Orders", "Takes and tracks orders.", $link="../")' in source


def test_dynamic_view_numbers_interactions(workspace):
    source = export_view(workspace, _view(workspace, "OrdersFlow"))
    assert "!include <C4/C4_Dynamic>" in source
    assert 'Rel(e3, e5, "1. Store order", "SQL")' in source


def test_dynamic_steps_are_drawn_in_numeric_order(workspace):
    view = ViewDefinition(
        kind="dynamic",
        key="Checkout",
        scope_id="2",
        element_ids=("1", "3", "5", "6"),
        relationships=(
            ViewRelationship("14", order="10"),
            ViewRelationship("12", order="2"),
            ViewRelationship("15", order="1"),
        ),
    )
    rels = [line for line in export_view(workspace, view).splitlines() if line.startswith("Rel(")]
    assert [r.split(", ")[2] for r in rels] == [
        '"1. Uses"',
        '"2. Reads and writes"',
        '"10. Charges payments"',
    ]


def test_interaction_order_key_is_natural():
    orders = ["1.10", "", "2", "1.2", "10", "1"]
    assert sorted(orders, key=interaction_order_key) == ["1", "1.2", "1.10", "2", "10", ""]


def test_deployment_view_nests_instances(workspace):
    lines = export_view(workspace, _view(workspace, "OrdersProduction")).splitlines()
    start = lines.index('Deployment_Node(e20, "AWS", "Amazon Web Services", "") {')
    assert lines[start + 1] == '  Container(e21, "Orders API", "Python", "REST API for orders.")'
    assert lines[start + 2] == "}"


def test_empty_view_cannot_be_rendered(workspace):
    view = ViewDefinition(kind="dynamic", key="Nothing", scope_id="7")
    with pytest.raises(RenderError, match="contains no elements") as info:
        export_view(workspace, view)
    assert info.value.view_key == "Nothing"


def test_unknown_elements_cannot_be_rendered(workspace):
    view = ViewDefinition(kind="container", key="Broken", scope_id="2", element_ids=("3", "99"))
    with pytest.raises(RenderError, match="unknown element id"):
        export_view(workspace, view)


def test_export_is_deterministic(workspace):
    view = _view(workspace, "Landscape")
    assert export_view(workspace, view) == export_view(workspace, view)
