"""Workspace path conventions for generated documentation."""

from __future__ import annotations

from pathlib import Path

_SEPARATOR = "~"
_JAVADOC_DIR = "javadoc"
_PACKAGE_LIST = "package-list"
_BUILD_FILE = "javadoc-build.xml"


def normalize_path(path: str) -> str:
    """Return ``path`` with Windows separators replaced by forward slashes."""
    return path.replace("\\", "/")


def normalize_component_name(name: str) -> str:
    """Flatten a hierarchical component name into a single folder name."""
    return normalize_path(name).replace("/", _SEPARATOR)


def documentation_key(vendor: str, name: str) -> str:
    """Folder name holding the documentation of ``vendor``/``name``."""
    return f"{vendor}{_SEPARATOR}{normalize_component_name(name)}"


class WorkspaceLayout:
    """Computes every output and cross-reference location below a workspace root.

    Both the link resolver and the descriptor builder derive paths from the same
    instance so offline links always point at the folder a component's own
    documentation is written to.
    """

    def __init__(self, base: str | Path) -> None:
        normalized = normalize_path(str(base))
        self._base = normalized.rstrip("/") if normalized != "/" else ""

    def base_path(self) -> str:
        return self._base

    def javadoc_root(self) -> str:
        return f"{self._base}/{_JAVADOC_DIR}"

    def javadoc_folder(self, vendor: str, name: str) -> str:
        return f"{self.javadoc_root()}/{documentation_key(vendor, name)}"

    def package_list(self, vendor: str, name: str) -> str:
        return f"{self.javadoc_folder(vendor, name)}/{_PACKAGE_LIST}"

    def component_base_location(self, vendor: str, name: str) -> str:
        return f"{self._base}/DCs/{vendor}/{normalize_path(name)}/_comp"

    def build_file_location(self, vendor: str, name: str) -> str:
        return f"{self.component_base_location(vendor, name)}/{_BUILD_FILE}"

    def __repr__(self) -> str:
        return f"WorkspaceLayout({self._base!r})"


__all__ = [
    "WorkspaceLayout",
    "documentation_key",
    "normalize_component_name",
    "normalize_path",
]
