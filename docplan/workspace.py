"""Loading of the development configuration from a workspace file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml

from .config import _as_str, _as_str_list
from .constants import WORKSPACE_FILENAME
from .logging import get_logger
from .models import (
    Compartment,
    CompartmentState,
    Component,
    ComponentType,
    Configuration,
    UsedComponentReference,
)
from .registry import ComponentRegistry, WorkspaceError

_LOGGER = get_logger("workspace")


def load_workspace(path: Path) -> ComponentRegistry:
    """Read a workspace file (or ``workspace.yml`` inside a directory)."""
    workspace_file = path / WORKSPACE_FILENAME if path.is_dir() else path
    if not workspace_file.exists():
        raise FileNotFoundError(f"Workspace file not found: {workspace_file}")

    text = workspace_file.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkspaceError(f"Failed to parse {workspace_file.name}: {exc}") from exc

    configuration = parse_configuration(data or {})
    registry = ComponentRegistry(configuration)
    _LOGGER.debug(
        "Loaded %d compartments with %d components from %s",
        len(configuration.compartments),
        len(registry),
        workspace_file,
    )
    return registry


def parse_configuration(data: Any) -> Configuration:
    """Build a :class:`Configuration` from already decoded YAML/JSON data."""
    if not isinstance(data, Mapping):
        raise WorkspaceError("Workspace must contain a mapping at the root")
    root = data.get("configuration", data)
    if not isinstance(root, Mapping):
        raise WorkspaceError("'configuration' must be a mapping")

    caption = _as_str(root.get("caption")) or ""
    configuration = Configuration(
        caption=caption,
        language_version=_as_str(root.get("language_version")),
    )

    compartments = root.get("compartments") or []
    if not isinstance(compartments, list):
        raise WorkspaceError("'compartments' must be a list")
    for index, entry in enumerate(compartments):
        configuration.add(_parse_compartment(entry, index))
    return configuration


def _parse_compartment(entry: Any, index: int) -> Compartment:
    if not isinstance(entry, Mapping):
        raise WorkspaceError(f"Compartment #{index} must be a mapping")
    name = _require(entry, "name", f"compartment #{index}")
    state_name = _as_str(entry.get("state")) or "source"
    state = CompartmentState.from_name(state_name)
    if state is None:
        raise WorkspaceError(f"Compartment {name} has unknown state '{state_name}'")

    vendor = _as_str(entry.get("vendor")) or ""
    compartment = Compartment(
        name=name,
        vendor=vendor,
        software_component=_as_str(entry.get("software_component")) or name,
        state=state,
        caption=_as_str(entry.get("caption")) or "",
    )

    components = entry.get("components") or []
    if not isinstance(components, list):
        raise WorkspaceError(f"Components of compartment {name} must be a list")
    for position, raw in enumerate(components):
        compartment.add(_parse_component(raw, compartment, position))
    return compartment


def _parse_component(entry: Any, compartment: Compartment, position: int) -> Component:
    where = f"component #{position} of compartment {compartment.name}"
    if not isinstance(entry, Mapping):
        raise WorkspaceError(f"{where} must be a mapping")
    name = _require(entry, "name", where)
    vendor = _as_str(entry.get("vendor")) or compartment.vendor
    if not vendor:
        raise WorkspaceError(f"{where} ({name}) has no vendor")

    type_name = _as_str(entry.get("type")) or "Java"
    component_type = ComponentType.from_name(type_name)
    if component_type is None:
        raise WorkspaceError(f"Development component {vendor}:{name} has unknown type '{type_name}'")

    return Component(
        vendor=vendor,
        name=name,
        component_type=component_type,
        description=_as_str(entry.get("description")) or "",
        source_folders=_as_str_list(entry.get("source_folders")),
        output_folder=_as_str(entry.get("output_folder")),
        classpath=_as_str_list(entry.get("classpath")),
        used_components=_parse_references(entry.get("uses"), f"{vendor}:{name}"),
    )


def _parse_references(value: Any, owner: str) -> List[UsedComponentReference]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise WorkspaceError(f"'uses' of {owner} must be a list")
    references: List[UsedComponentReference] = []
    for item in value:
        reference = _parse_reference(item)
        if reference is None:
            raise WorkspaceError(f"Malformed used component reference in {owner}: {item!r}")
        references.append(reference)
    return references


def _parse_reference(item: Any) -> Optional[UsedComponentReference]:
    if isinstance(item, str):
        vendor, sep, name = item.partition(":")
        if not sep or not vendor.strip() or not name.strip():
            return None
        return UsedComponentReference(vendor=vendor.strip(), name=name.strip())
    if isinstance(item, Mapping):
        vendor = _as_str(item.get("vendor"))
        name = _as_str(item.get("name"))
        if vendor and name:
            return UsedComponentReference(vendor=vendor, name=name)
    return None


def _require(entry: Mapping[str, Any], key: str, where: str) -> str:
    value = _as_str(entry.get(key))
    if not value:
        raise WorkspaceError(f"Missing '{key}' for {where}")
    return value


__all__ = ["load_workspace", "parse_configuration"]
