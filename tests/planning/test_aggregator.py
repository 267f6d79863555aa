from __future__ import annotations

from docplan.config import ProxyConfig
from docplan.layout import WorkspaceLayout
from docplan.models import CompartmentState, ComponentType, OfflineLink
from docplan.planning import BuildDescriptorBuilder, PlanAggregator
from docplan.planning.ordering import GENERATED_LATER
from docplan.sources import WorkspaceSourceSetProvider
from tests._fixtures.workspace_builder import WorkspaceBuilder


def _aggregator(layout: WorkspaceLayout, workspace: WorkspaceBuilder, **kwargs) -> PlanAggregator:
    builder = BuildDescriptorBuilder(layout, WorkspaceSourceSetProvider(layout, workspace.registry()))
    return PlanAggregator(builder, **kwargs)


def _scenario(workspace: WorkspaceBuilder) -> None:
    compartment_a = workspace.compartment("A")
    workspace.component(compartment_a, "c1", uses=["example.com:c2"])
    workspace.component(compartment_a, "c2")
    compartment_b = workspace.compartment("B", state=CompartmentState.ARCHIVE)
    workspace.component(compartment_b, "c3")


def test_compartments_are_sorted_by_name(workspace: WorkspaceBuilder, layout: WorkspaceLayout) -> None:
    for name in ("ZLib", "ALib", "MLib"):
        workspace.component(workspace.compartment(name), f"{name.lower()}/api")

    plan = _aggregator(layout, workspace).aggregate(workspace.configuration, workspace.registry())

    assert plan.overview.compartment_names() == ["ALib", "MLib", "ZLib"]
    assert [descriptor.compartment for descriptor in plan.descriptors] == ["ALib", "MLib", "ZLib"]


def test_archived_and_empty_compartments_are_skipped(
    workspace: WorkspaceBuilder, layout: WorkspaceLayout
) -> None:
    _scenario(workspace)
    workspace.compartment("Empty")
    only_ui = workspace.compartment("UI")
    workspace.component(only_ui, "ui/app", component_type=ComponentType.WEB_DYNPRO)

    plan = _aggregator(layout, workspace).aggregate(workspace.configuration, workspace.registry())

    assert plan.overview.compartment_names() == ["A"]
    assert [descriptor.name for descriptor in plan.descriptors] == ["c1", "c2"]


def test_overview_and_descriptors_cover_same_components(
    workspace: WorkspaceBuilder, layout: WorkspaceLayout
) -> None:
    _scenario(workspace)
    other = workspace.compartment("C")
    workspace.component(other, "lib/util", description="Utilities")
    workspace.component(other, "lib/ddic", component_type=ComponentType.DICTIONARY)
    workspace.component(other, "lib/empty", source_folders=())

    plan = _aggregator(layout, workspace).aggregate(workspace.configuration, workspace.registry())

    overview_keys = {summary.key for summary in plan.overview.components()}
    descriptor_keys = {descriptor.key for descriptor in plan.descriptors}
    assert overview_keys == descriptor_keys
    assert ("example.com", "c3") not in descriptor_keys
    summary = plan.overview.compartments[1].components[0]
    assert summary.folder == "example.com~lib~util"
    assert summary.description == "Utilities"


def test_first_description_component_wins(workspace: WorkspaceBuilder, layout: WorkspaceLayout) -> None:
    compartment = workspace.compartment("A", software_component="LIB", vendor="example.com")
    workspace.component(
        compartment,
        "lib/scd",
        component_type=ComponentType.SOFTWARE_COMPONENT_DESCRIPTION,
        description="Shared libraries",
    )
    workspace.component(
        compartment,
        "lib/scd2",
        component_type=ComponentType.SOFTWARE_COMPONENT_DESCRIPTION,
        description="Ignored",
    )
    workspace.component(compartment, "lib/util")

    plan = _aggregator(layout, workspace).aggregate(workspace.configuration, workspace.registry())

    (overview,) = plan.overview.compartments
    assert overview.description == "Shared libraries"
    assert overview.software_component == "LIB"
    assert [summary.name for summary in overview.components] == ["lib/util"]


def test_missing_description_is_none(workspace: WorkspaceBuilder, layout: WorkspaceLayout) -> None:
    workspace.component(workspace.compartment("A"), "lib/util")

    plan = _aggregator(layout, workspace).aggregate(workspace.configuration, workspace.registry())

    assert plan.overview.compartments[0].description is None


def test_end_to_end_plan(workspace: WorkspaceBuilder, layout: WorkspaceLayout) -> None:
    _scenario(workspace)

    plan = _aggregator(layout, workspace).aggregate(workspace.configuration, workspace.registry())

    c1, c2 = plan.descriptors
    assert c1.links == (
        OfflineLink(
            location=c2.output_dir,
            package_list=f"{c2.output_dir}/package-list",
            vendor="example.com",
            name="c2",
        ),
    )
    assert c2.links == ()
    assert [descriptor.name for descriptor in plan.generation] == ["c2", "c1"]
    assert plan.build_files == [c2.build_file, c1.build_file]
    assert plan.stale_links == ()


def test_registry_order_reports_stale_link(workspace: WorkspaceBuilder, layout: WorkspaceLayout) -> None:
    _scenario(workspace)

    plan = _aggregator(layout, workspace, order="registry").aggregate(
        workspace.configuration, workspace.registry()
    )

    assert [descriptor.name for descriptor in plan.generation] == ["c1", "c2"]
    assert len(plan.stale_links) == 1
    assert plan.stale_links[0].source == ("example.com", "c1")
    assert plan.stale_links[0].reason == GENERATED_LATER


def test_global_links_and_proxy_reach_every_descriptor(
    workspace: WorkspaceBuilder, layout: WorkspaceLayout
) -> None:
    _scenario(workspace)
    aggregator = _aggregator(
        layout,
        workspace,
        global_links=[" https://example.com/api/ ", "", "ftp://example.com/", "https://example.com/api/"],
        proxy=ProxyConfig(host="proxy", port=8080),
    )

    plan = aggregator.aggregate(workspace.configuration, workspace.registry())

    for descriptor in plan.descriptors:
        assert descriptor.links[0].target == "https://example.com/api/"
        assert [link.kind for link in descriptor.links].count("external") == 1
        assert descriptor.proxy_params == "-J-Dhttp.proxyHost=proxy -J-Dhttp.proxyPort=8080"


def test_parallel_planning_matches_sequential(
    workspace: WorkspaceBuilder, layout: WorkspaceLayout
) -> None:
    for index in range(6):
        compartment = workspace.compartment(f"SC{index}")
        for member in range(4):
            uses = [f"example.com:sc{index - 1}/dc{member}"] if index else []
            workspace.component(compartment, f"sc{index}/dc{member}", uses=uses)

    sequential = _aggregator(layout, workspace).aggregate(workspace.configuration, workspace.registry())
    parallel = _aggregator(layout, workspace, workers=4).aggregate(
        workspace.configuration, workspace.registry()
    )

    assert parallel == sequential
