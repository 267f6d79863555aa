"""Aggregates per-component descriptors into a compartment-ordered build plan."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import ProxyConfig, normalize_links
from ..logging import get_logger
from ..models import (
    BuildDescriptor,
    BuildPlan,
    Compartment,
    CompartmentOverview,
    Component,
    ComponentSummary,
    ComponentType,
    Configuration,
    OverviewModel,
)
from ..layout import documentation_key
from ..registry import ComponentRegistry
from .descriptor import BuildDescriptorBuilder
from .eligibility import EligibilityFilter
from .ordering import dependency_order, find_stale_links


class PlanAggregator:
    """Runs one planning pass over a configuration.

    Compartments built from source with at least one member are visited in
    ascending name order; inside each compartment the eligible components keep
    registry order. The overview and the descriptor list are produced from the
    same selection so they always cover the same components.
    """

    def __init__(
        self,
        builder: BuildDescriptorBuilder,
        *,
        eligibility: EligibilityFilter | None = None,
        global_links: Iterable[str] = (),
        proxy: Optional[ProxyConfig] = None,
        order: str = "dependency",
        workers: int = 1,
    ) -> None:
        self.builder = builder
        self.eligibility = eligibility or builder.eligibility
        self.global_links: Tuple[str, ...] = tuple(normalize_links(global_links))
        self.proxy = proxy
        self.order = order
        self.workers = max(1, workers)
        self.logger = get_logger("planning.aggregator")

    def aggregate(self, configuration: Configuration, registry: ComponentRegistry) -> BuildPlan:
        self.logger.info("Planning documentation for configuration %s", configuration.caption)

        overviews: List[CompartmentOverview] = []
        selected: List[Component] = []
        for compartment in self._documentable_compartments(configuration, registry):
            components = self.eligibility.select(compartment.components)
            if not components:
                self.logger.debug("Compartment %s has no documentable components", compartment.name)
                continue
            overviews.append(self._compartment_overview(compartment, components))
            selected.extend(components)

        descriptors = self._build_descriptors(selected, configuration, registry)
        overview = OverviewModel(caption=configuration.caption, compartments=tuple(overviews))

        if self.order == "dependency":
            generation = dependency_order(descriptors)
        else:
            generation = descriptors
        stale_links = find_stale_links(generation)
        for stale in stale_links:
            self.logger.warning(
                "Offline link from %s:%s to %s may be missing (%s)",
                stale.source[0],
                stale.source[1],
                stale.link.package_list,
                stale.reason,
            )

        self.logger.info(
            "Planned %d components in %d compartments",
            len(descriptors),
            len(overviews),
        )
        return BuildPlan(
            overview=overview,
            descriptors=descriptors,
            generation=generation,
            stale_links=stale_links,
        )

    def _documentable_compartments(
        self, configuration: Configuration, registry: ComponentRegistry
    ) -> List[Compartment]:
        compartments = [
            compartment
            for compartment in configuration.compartments
            if registry.state(compartment).documentable and compartment.components
        ]
        return sorted(compartments, key=lambda compartment: compartment.name)

    @staticmethod
    def _compartment_overview(
        compartment: Compartment, components: Sequence[Component]
    ) -> CompartmentOverview:
        # First description component wins.
        descriptions = compartment.components_of_type(ComponentType.SOFTWARE_COMPONENT_DESCRIPTION)
        description = None
        if descriptions and descriptions[0].description:
            description = descriptions[0].description
        return CompartmentOverview(
            name=compartment.name,
            software_component=compartment.software_component,
            vendor=compartment.vendor,
            description=description,
            components=tuple(
                ComponentSummary(
                    vendor=component.vendor,
                    name=component.name,
                    folder=documentation_key(component.vendor, component.name),
                    description=component.description,
                )
                for component in components
            ),
        )

    def _build_descriptors(
        self,
        components: Sequence[Component],
        configuration: Configuration,
        registry: ComponentRegistry,
    ) -> Tuple[BuildDescriptor, ...]:
        def _build(component: Component) -> BuildDescriptor:
            return self.builder.build(
                component, configuration, registry, self.global_links, self.proxy
            )

        if self.workers == 1 or len(components) < 2:
            return tuple(_build(component) for component in components)

        # map() yields in submission order, so the merge stays deterministic.
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            return tuple(executor.map(_build, components))


__all__ = ["PlanAggregator"]
