from __future__ import annotations

from docplan.layout import WorkspaceLayout
from docplan.sources import WorkspaceSourceSetProvider
from tests._fixtures.workspace_builder import WorkspaceBuilder


def test_blank_entries_never_resolve_to_component_root(
    workspace: WorkspaceBuilder, layout: WorkspaceLayout
) -> None:
    compartment = workspace.compartment("A")
    workspace.component(compartment, "lib/base", output_folder=" ")
    util = workspace.component(
        compartment, "lib/util", uses=["example.com:lib/base"], source_folders=["", "src/packages"]
    )
    util.classpath = ["", "lib/extra.jar"]
    provider = WorkspaceSourceSetProvider(layout, workspace.registry())

    assert provider.source_paths(util) == ["/ws/DCs/example.com/lib/util/_comp/src/packages"]
    assert provider.classpath(util) == ["/ws/DCs/example.com/lib/util/_comp/lib/extra.jar"]


def test_absolute_classpath_entries_are_kept(
    workspace: WorkspaceBuilder, layout: WorkspaceLayout
) -> None:
    util = workspace.component(workspace.compartment("A"), "lib/util")
    util.classpath = ["C:\\sap\\lib\\api.jar", "/opt/lib/api.jar"]
    provider = WorkspaceSourceSetProvider(layout, workspace.registry())

    assert provider.classpath(util) == ["C:/sap/lib/api.jar", "/opt/lib/api.jar"]
