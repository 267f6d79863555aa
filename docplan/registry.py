"""Read-only view over the loaded component/compartment model."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .layout import documentation_key
from .models import Compartment, CompartmentState, Component, Configuration


class WorkspaceError(RuntimeError):
    """Raised when the component model violates a structural invariant."""


class ComponentRegistry:
    """Indexes the components of a configuration by (vendor, name)."""

    def __init__(self, configuration: Configuration) -> None:
        self._configuration = configuration
        self._components: Dict[Tuple[str, str], Component] = {}
        folders: Dict[str, Tuple[str, str]] = {}
        for compartment in configuration.compartments:
            for component in compartment.components:
                if component.key in self._components:
                    vendor, name = component.key
                    raise WorkspaceError(
                        f"Development component {vendor}:{name} is registered twice"
                    )
                folder = documentation_key(component.vendor, component.name)
                owner = folders.setdefault(folder, component.key)
                if owner != component.key:
                    raise WorkspaceError(
                        f"Development components {owner[0]}:{owner[1]} and "
                        f"{component.vendor}:{component.name} share documentation folder {folder}"
                    )
                self._components[component.key] = component

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def lookup(self, vendor: str, name: str) -> Optional[Component]:
        """Return the component or ``None`` when it is not part of the workspace."""
        return self._components.get((vendor, name))

    def compartment_of(self, component: Component) -> Compartment:
        compartment = component.compartment
        if compartment is None:
            raise WorkspaceError(
                f"Development component {component.vendor}:{component.name} has no compartment"
            )
        return compartment

    @staticmethod
    def state(compartment: Compartment) -> CompartmentState:
        return compartment.state

    def is_documentable(self, component: Component) -> bool:
        """True when the component's compartment is built from source locally."""
        return self.state(self.compartment_of(component)).documentable

    def compartments(self) -> List[Compartment]:
        return list(self._configuration.compartments)

    def __iter__(self) -> Iterator[Component]:
        return iter(self._components.values())

    def __len__(self) -> int:
        return len(self._components)


__all__ = ["ComponentRegistry", "WorkspaceError"]
