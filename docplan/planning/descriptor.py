"""Assembly of per-component documentation build descriptors."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..config import ProxyConfig
from ..constants import DEFAULT_LANGUAGE_VERSION, DEFAULT_UML_GRAPH_TYPES, HEADER_TEMPLATE
from ..layout import WorkspaceLayout, normalize_component_name
from ..logging import get_logger
from ..models import BuildDescriptor, Component, ComponentType, Configuration
from ..registry import ComponentRegistry
from ..sources import SourceSetProvider
from .eligibility import EligibilityFilter
from .links import LinkResolver


class PlanningError(RuntimeError):
    """Raised when a descriptor is requested for a component that cannot have one."""


def truncate_version(raw: Optional[str]) -> Optional[str]:
    """Reduce a version string such as ``1.8.0_292`` to ``major.minor``."""
    if raw is None:
        return None
    parts = [part for part in raw.strip().replace("_", ".").split(".") if part]
    if not parts:
        return None
    return ".".join(parts[:2])


def select_language_version(configuration: Configuration, default: str) -> str:
    """Prefer the configuration's hint, else the injected default."""
    hint = truncate_version(configuration.language_version)
    if hint:
        return hint
    return truncate_version(default) or DEFAULT_LANGUAGE_VERSION


def proxy_parameters(proxy: Optional[ProxyConfig]) -> str:
    """Return generator JVM arguments for ``proxy``; empty without a proxy."""
    if proxy is None or not proxy.host:
        return ""
    if proxy.port > 0:
        return f"-J-Dhttp.proxyHost={proxy.host} -J-Dhttp.proxyPort={proxy.port}"
    return f"-J-Dhttp.proxyHost={proxy.host}"


def header_text(compartment: str, vendor: str, name: str) -> str:
    return HEADER_TEMPLATE.format(compartment=compartment, vendor=vendor, name=name)


class BuildDescriptorBuilder:
    """Builds immutable :class:`BuildDescriptor` values.

    No disk or network access happens here; source and classpath entries come
    from the injected :class:`SourceSetProvider` and all locations from the
    shared :class:`WorkspaceLayout`.
    """

    def __init__(
        self,
        layout: WorkspaceLayout,
        sources: SourceSetProvider,
        *,
        link_resolver: LinkResolver | None = None,
        eligibility: EligibilityFilter | None = None,
        default_language_version: str = DEFAULT_LANGUAGE_VERSION,
        use_uml_graph: bool = False,
        uml_graph_types: Iterable[ComponentType] = DEFAULT_UML_GRAPH_TYPES,
    ) -> None:
        self.layout = layout
        self.sources = sources
        self.link_resolver = link_resolver or LinkResolver(layout)
        self.eligibility = eligibility or EligibilityFilter()
        self.default_language_version = default_language_version
        self.use_uml_graph = use_uml_graph
        self.uml_graph_types = frozenset(uml_graph_types)
        self.logger = get_logger("planning.descriptor")

    def build(
        self,
        component: Component,
        configuration: Configuration,
        registry: ComponentRegistry,
        global_links: Sequence[str] = (),
        proxy: Optional[ProxyConfig] = None,
    ) -> BuildDescriptor:
        label = f"{component.vendor}:{component.name}"
        if not self.eligibility.is_eligible(component):
            raise PlanningError(f"Development component {label} is not eligible for documentation")

        source_paths = tuple(self.sources.source_paths(component))
        if not source_paths:
            raise PlanningError(f"Development component {label} has no source folders")

        compartment = registry.compartment_of(component)
        descriptor = BuildDescriptor(
            vendor=component.vendor,
            name=component.name,
            component_key=normalize_component_name(component.name),
            compartment=compartment.name,
            source_paths=source_paths,
            classpath=tuple(self.sources.classpath(component)),
            output_dir=self.layout.javadoc_folder(component.vendor, component.name),
            language_version=select_language_version(configuration, self.default_language_version),
            header=header_text(compartment.name, component.vendor, component.name),
            proxy_params=proxy_parameters(proxy),
            links=self.link_resolver.resolve(component, global_links, registry),
            build_file=self.layout.build_file_location(component.vendor, component.name),
            use_uml_graph=self.use_uml_graph and component.component_type in self.uml_graph_types,
        )
        self.logger.debug(
            "Planned %s with %d source folders and %d links",
            label,
            len(descriptor.source_paths),
            len(descriptor.links),
        )
        return descriptor


__all__ = [
    "BuildDescriptorBuilder",
    "PlanningError",
    "header_text",
    "proxy_parameters",
    "select_language_version",
    "truncate_version",
]
