"""Source directory and classpath collection for development components."""

from __future__ import annotations

from typing import Iterable, List, Protocol, Sequence

from .layout import WorkspaceLayout, normalize_path
from .models import Component
from .registry import ComponentRegistry


class SourceSetProvider(Protocol):
    """Supplies the documentable sources and compile classpath of a component."""

    def source_paths(self, component: Component) -> Sequence[str]:
        """Return source directories in a stable order."""

    def classpath(self, component: Component) -> Sequence[str]:
        """Return classpath entries in a stable order."""


class WorkspaceSourceSetProvider:
    """Resolves folders relative to each component's location in the workspace.

    Classpath entries are the component's declared entries followed by the
    output folders of every used component found in the registry.
    """

    def __init__(self, layout: WorkspaceLayout, registry: ComponentRegistry) -> None:
        self._layout = layout
        self._registry = registry

    def source_paths(self, component: Component) -> List[str]:
        base = self._layout.component_base_location(component.vendor, component.name)
        return _unique(
            self._resolve(base, folder) for folder in component.source_folders if folder.strip()
        )

    def classpath(self, component: Component) -> List[str]:
        base = self._layout.component_base_location(component.vendor, component.name)
        entries = [self._resolve(base, entry) for entry in component.classpath if entry.strip()]
        for reference in component.used_components:
            used = self._registry.lookup(reference.vendor, reference.name)
            if used is None or not (used.output_folder or "").strip():
                continue
            used_base = self._layout.component_base_location(used.vendor, used.name)
            entries.append(self._resolve(used_base, used.output_folder))
        return _unique(entries)

    @staticmethod
    def _resolve(base: str, folder: str) -> str:
        normalized = normalize_path(folder)
        if normalized.startswith("/") or (len(normalized) > 1 and normalized[1] == ":"):
            return normalized
        return f"{base}/{normalized.strip('/')}"


def _unique(items: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for item in items:
        if item and item not in seen:
            seen.append(item)
    return seen


__all__ = ["SourceSetProvider", "WorkspaceSourceSetProvider"]
