"""Cross-reference resolution between component documentation sets."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from ..layout import WorkspaceLayout
from ..logging import get_logger
from ..models import Component, ExternalLink, LinkTarget, OfflineLink
from ..registry import ComponentRegistry


class LinkResolver:
    """Computes the ordered, de-duplicated link targets of a component.

    Global links come first in configuration order, followed by one offline
    link per used component whose compartment is built from source. Used
    components missing from the registry or living in archived compartments
    are skipped; their documentation is not generated in this workspace.
    """

    def __init__(self, layout: WorkspaceLayout) -> None:
        self._layout = layout
        self.logger = get_logger("planning.links")

    def offline_link(self, component: Component) -> OfflineLink:
        return OfflineLink(
            location=self._layout.javadoc_folder(component.vendor, component.name),
            package_list=self._layout.package_list(component.vendor, component.name),
            vendor=component.vendor,
            name=component.name,
        )

    def resolve(
        self,
        component: Component,
        global_links: Sequence[str],
        registry: ComponentRegistry,
    ) -> Tuple[LinkTarget, ...]:
        resolved: Dict[str, LinkTarget] = {}

        for url in global_links:
            if url and url not in resolved:
                resolved[url] = ExternalLink(url=url)

        for reference in component.used_components:
            used = registry.lookup(reference.vendor, reference.name)
            if used is None:
                self.logger.debug(
                    "%s:%s uses %s:%s outside the workspace",
                    component.vendor,
                    component.name,
                    reference.vendor,
                    reference.name,
                )
                continue
            if not registry.is_documentable(used):
                continue
            link = self.offline_link(used)
            resolved.setdefault(link.target, link)

        return tuple(resolved.values())


__all__ = ["LinkResolver"]
