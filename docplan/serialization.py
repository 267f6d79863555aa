"""JSON-ready representations of build plans."""

from __future__ import annotations

from typing import Any, Dict, List

from .models import (
    BuildDescriptor,
    BuildPlan,
    ExternalLink,
    LinkTarget,
    OverviewModel,
    StaleLink,
)


def link_to_dict(link: LinkTarget) -> Dict[str, Any]:
    if isinstance(link, ExternalLink):
        return {"kind": link.kind, "url": link.url}
    return {
        "kind": link.kind,
        "location": link.location,
        "package_list": link.package_list,
        "component": f"{link.vendor}:{link.name}",
    }


def descriptor_to_dict(descriptor: BuildDescriptor) -> Dict[str, Any]:
    return {
        "vendor": descriptor.vendor,
        "name": descriptor.name,
        "component": descriptor.component_key,
        "compartment": descriptor.compartment,
        "source_paths": list(descriptor.source_paths),
        "classpath": list(descriptor.classpath),
        "output_dir": descriptor.output_dir,
        "source": descriptor.language_version,
        "header": descriptor.header,
        "proxy": descriptor.proxy_params,
        "links": [link_to_dict(link) for link in descriptor.links],
        "use_uml_graph": descriptor.use_uml_graph,
        "build_file": descriptor.build_file,
    }


def overview_to_dict(overview: OverviewModel) -> Dict[str, Any]:
    compartments: List[Dict[str, Any]] = []
    for compartment in overview.compartments:
        entry: Dict[str, Any] = {
            "name": compartment.name,
            "software_component": compartment.software_component,
            "vendor": compartment.vendor,
            "components": [
                {
                    "vendor": summary.vendor,
                    "name": summary.name,
                    "folder": summary.folder,
                    "description": summary.description,
                }
                for summary in compartment.components
            ],
        }
        if compartment.description is not None:
            entry["description"] = compartment.description
        compartments.append(entry)
    return {"caption": overview.caption, "compartments": compartments}


def stale_link_to_dict(stale: StaleLink) -> Dict[str, Any]:
    return {
        "component": f"{stale.source[0]}:{stale.source[1]}",
        "package_list": stale.link.package_list,
        "reason": stale.reason,
    }


def plan_to_dict(plan: BuildPlan) -> Dict[str, Any]:
    """Serialise ``plan`` for the external renderer."""
    return {
        "overview": overview_to_dict(plan.overview),
        "descriptors": [descriptor_to_dict(descriptor) for descriptor in plan.descriptors],
        "build_files": plan.build_files,
        "stale_links": [stale_link_to_dict(stale) for stale in plan.stale_links],
    }


def overview_to_text(overview: OverviewModel) -> str:
    """Plain-text outline of the overview for terminal output."""
    lines = [overview.caption or "(untitled configuration)"]
    for compartment in overview.compartments:
        lines.append(f"  {compartment.name} ({compartment.vendor})")
        if compartment.description:
            lines.append(f"    {compartment.description}")
        for summary in compartment.components:
            suffix = f" - {summary.description}" if summary.description else ""
            lines.append(f"    * {summary.vendor}:{summary.name}{suffix}")
    return "\n".join(lines) + "\n"


__all__ = [
    "descriptor_to_dict",
    "link_to_dict",
    "overview_to_dict",
    "overview_to_text",
    "plan_to_dict",
    "stale_link_to_dict",
]
