from structurizr_site.workspace import Workspace

from ..helpers import system_named


def _keys(views):
    return [v.key for v in views]


def test_software_systems_keep_declaration_order(workspace):
    assert [s.name for s in workspace.software_systems] == ["Orders", "Payments", "Empty", "Bank"]
    assert [s.name for s in workspace.internal_software_systems] == ["Orders", "Payments", "Empty"]


def test_external_tag_from_properties(workspace_dict):
    workspace_dict["views"]["configuration"]["properties"]["generatr.site.externalTag"] = "Third Party"
    workspace_dict["model"]["softwareSystems"][1]["tags"] = "Element,Software System,Third Party"
    ws = Workspace.from_dict(workspace_dict)
    assert [s.name for s in ws.internal_software_systems] == ["Orders", "Empty"]


def test_containers_and_parents(workspace):
    orders = system_named(workspace, "Orders")
    assert [c.name for c in workspace.containers_of(orders)] == ["Orders API", "Orders DB"]
    assert workspace.software_system_of(workspace.element("4")) == orders
    assert workspace.software_system_of(workspace.element("1")) is None


def test_container_instance_resolves_to_container(workspace):
    instance = workspace.element("21")
    assert instance.kind == "ContainerInstance"
    assert instance.name == "Orders API"
    assert instance.environment == "Production"
    assert workspace.software_system_of(instance).name == "Orders"


def test_view_filters_per_system(workspace):
    orders = system_named(workspace, "Orders")
    payments = system_named(workspace, "Payments")
    empty = system_named(workspace, "Empty")

    assert _keys(workspace.system_context_views(orders)) == ["OrdersContext"]
    assert _keys(workspace.container_views(orders)) == ["OrdersContainers"]
    assert _keys(workspace.component_views(orders)) == ["OrdersComponents"]
    assert _keys(workspace.dynamic_views(orders)) == ["OrdersFlow"]
    assert _keys(workspace.deployment_views(orders)) == ["OrdersProduction"]
    assert _keys(workspace.dynamic_views(payments)) == ["PaymentsFlow"]

    for accessor in (
        workspace.system_context_views,
        workspace.container_views,
        workspace.component_views,
        workspace.dynamic_views,
        workspace.deployment_views,
    ):
        assert accessor(empty) == ()


def test_dynamic_view_scoped_to_container_belongs_to_its_system(workspace_dict):
    workspace_dict["views"]["dynamicViews"].append(
        {"key": "ApiFlow", "elementId": "3", "elements": [{"id": "3"}, {"id": "5"}]}
    )
    ws = Workspace.from_dict(workspace_dict)
    assert _keys(ws.dynamic_views(system_named(ws, "Orders"))) == ["OrdersFlow", "ApiFlow"]


def test_view_titles(workspace):
    by_key = {v.key: v for v in workspace.views}
    assert workspace.view_title(by_key["OrdersContext"]) == "System Context View: Orders"
    assert workspace.view_title(by_key["OrdersFlow"]) == "Placing an order"
    assert workspace.view_title(by_key["Landscape"]) == "System Landscape View"
    assert workspace.view_title(by_key["OrdersProduction"]) == "Deployment View: Orders - Production"


def test_dependencies_cross_the_system_boundary(workspace):
    orders = system_named(workspace, "Orders")
    inbound, outbound = workspace.dependencies_of(orders)
    assert [r.id for r in inbound] == ["10"]
    assert [r.id for r in outbound] == ["11", "13"]

    inbound, outbound = workspace.dependencies_of(system_named(workspace, "Payments"))
    assert [r.id for r in inbound] == ["11", "14"]
    assert outbound == ()

    assert workspace.dependencies_of(system_named(workspace, "Empty")) == ((), ())


def test_documentation_sections_and_decisions(workspace):
    docs = workspace.documentation_of()
    assert [s.title for s in docs.sections] == ["Overview", "Glossary"]
    assert [d.title for d in docs.decisions] == ["Record architecture decisions"]

    orders_docs = workspace.documentation_of(system_named(workspace, "Orders"))
    assert [s.title for s in orders_docs.sections] == ["Context"]
    assert orders_docs.decisions[0].status == "Proposed"

    assert workspace.documentation_of(system_named(workspace, "Empty")).sections == ()


def test_sections_sorted_by_order(workspace_dict):
    workspace_dict["documentation"]["sections"][0]["order"] = 5
    ws = Workspace.from_dict(workspace_dict)
    assert [s.title for s in ws.documentation_of().sections] == ["Glossary", "Overview"]


def test_properties_are_read(workspace):
    assert workspace.properties["generatr.style.colors.primary"] == "#485fc7"
