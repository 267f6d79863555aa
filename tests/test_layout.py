"""Tests for docplan.layout."""

from __future__ import annotations

from docplan.layout import (
    WorkspaceLayout,
    documentation_key,
    normalize_component_name,
    normalize_path,
)


def test_normalize_path_replaces_backslashes() -> None:
    assert normalize_path("c:\\temp") == "c:/temp"


def test_normalize_component_name_flattens_hierarchy() -> None:
    assert normalize_component_name("a/b/c") == "a~b~c"
    assert documentation_key("example.com", "lib/util") == "example.com~lib~util"


def test_javadoc_folder_is_deterministic(layout: WorkspaceLayout) -> None:
    first = layout.javadoc_folder("example.com", "a/b/c")
    second = layout.javadoc_folder("example.com", "a/b/c")

    assert first == second
    assert first == "/ws/javadoc/example.com~a~b~c"
    assert "a~b~c" in first


def test_distinct_components_get_distinct_folders(layout: WorkspaceLayout) -> None:
    assert layout.javadoc_folder("example.com", "a/b") != layout.javadoc_folder("example.org", "a/b")
    assert layout.javadoc_folder("example.com", "a/b") != layout.javadoc_folder("example.com", "a/c")


def test_package_list_lives_in_javadoc_folder(layout: WorkspaceLayout) -> None:
    folder = layout.javadoc_folder("example.com", "lib/util")
    assert layout.package_list("example.com", "lib/util") == f"{folder}/package-list"


def test_windows_base_is_normalized() -> None:
    layout = WorkspaceLayout("C:\\work\\space\\")
    assert layout.base_path() == "C:/work/space"
    assert layout.javadoc_folder("example.com", "lib") == "C:/work/space/javadoc/example.com~lib"


def test_build_file_location_uses_component_base(layout: WorkspaceLayout) -> None:
    assert layout.component_base_location("example.com", "lib/util") == "/ws/DCs/example.com/lib/util/_comp"
    assert (
        layout.build_file_location("example.com", "lib/util")
        == "/ws/DCs/example.com/lib/util/_comp/javadoc-build.xml"
    )
