"""Decides which development components get API documentation."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..constants import DEFAULT_EXCLUDED_TYPES
from ..logging import get_logger
from ..models import Component, ComponentType


class EligibilityFilter:
    """Accepts components whose kind can hold Java sources and that declare some.

    Kinds in ``excluded_types`` are rejected even when they can nominally
    contain sources.
    """

    def __init__(self, excluded_types: Optional[Iterable[ComponentType]] = None) -> None:
        self._excluded = frozenset(
            DEFAULT_EXCLUDED_TYPES if excluded_types is None else excluded_types
        )
        self.logger = get_logger("planning.eligibility")

    @property
    def excluded_types(self) -> frozenset[ComponentType]:
        return self._excluded

    def is_eligible(self, component: Component) -> bool:
        component_type = component.component_type
        if not component_type.can_contain_sources:
            return False
        if component_type in self._excluded:
            return False
        return any(folder.strip() for folder in component.source_folders)

    def select(self, components: Iterable[Component]) -> List[Component]:
        """Return the eligible components, preserving input order."""
        selected: List[Component] = []
        for component in components:
            if self.is_eligible(component):
                selected.append(component)
            else:
                self.logger.debug(
                    "Skipping %s:%s (%s)",
                    component.vendor,
                    component.name,
                    component.component_type.label,
                )
        return selected


__all__ = ["EligibilityFilter"]
