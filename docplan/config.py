"""Configuration loading for docplan (.docplan.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence
from urllib.parse import urlparse

import yaml

from .constants import (
    CONFIG_FILENAME,
    DEFAULT_EXCLUDED_TYPES,
    DEFAULT_LANGUAGE_VERSION,
    DEFAULT_UML_GRAPH_TYPES,
    PLAN_FILENAME,
    PLAN_ORDERS,
    WORKSPACE_FILENAME,
)
from .logging import get_logger
from .models import ComponentType

_LINK_SCHEMES = {"http", "https", "file"}

_LOGGER = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class ProxyConfig:
    """HTTP proxy handed to the documentation generator."""

    host: str
    port: int = 0


@dataclass
class EligibilityConfig:
    """Component kinds excluded from documentation."""

    excluded_types: FrozenSet[ComponentType] = DEFAULT_EXCLUDED_TYPES


@dataclass
class UmlGraphConfig:
    """UML class diagram generation settings."""

    enabled: bool = False
    types: FrozenSet[ComponentType] = DEFAULT_UML_GRAPH_TYPES


@dataclass
class PlanningConfig:
    """Ordering and parallelism of a planning pass."""

    order: str = "dependency"
    workers: int = 1


@dataclass
class OutputConfig:
    plan_file: Path = Path(PLAN_FILENAME)
    log_file: Optional[Path] = None


@dataclass
class DocPlanConfig:
    """Represents the high-level settings defined in .docplan.yml."""

    root: Path
    workspace_file: Optional[Path] = None
    links: List[str] = field(default_factory=list)
    proxy: Optional[ProxyConfig] = None
    language_version: str = DEFAULT_LANGUAGE_VERSION
    eligibility: EligibilityConfig = field(default_factory=EligibilityConfig)
    uml_graph: UmlGraphConfig = field(default_factory=UmlGraphConfig)
    planning: PlanningConfig = field(default_factory=PlanningConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @property
    def workspace_path(self) -> Path:
        return self.workspace_file or (self.root / WORKSPACE_FILENAME)

    @property
    def plan_path(self) -> Path:
        plan_file = self.output.plan_file
        return plan_file if plan_file.is_absolute() else self.root / plan_file

    @property
    def log_path(self) -> Optional[Path]:
        log_file = self.output.log_file
        if log_file is None:
            return None
        return log_file if log_file.is_absolute() else self.root / log_file


def load_config(config_path: Path) -> DocPlanConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocPlanConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    workspace_str = _as_str(data.get("workspace"))
    workspace_file = root / workspace_str if workspace_str else None

    proxy = None
    proxy_data = _as_dict(data.get("proxy"))
    host = _as_str(proxy_data.get("host")) if proxy_data else None
    if host and host.strip():
        proxy = ProxyConfig(host=host.strip(), port=_as_int(proxy_data.get("port")) or 0)

    eligibility = EligibilityConfig()
    eligibility_data = _as_dict(data.get("eligibility"))
    if "excluded_types" in eligibility_data:
        eligibility.excluded_types = _as_type_set(eligibility_data.get("excluded_types"))

    uml_graph = UmlGraphConfig()
    uml_data = _as_dict(data.get("uml_graph"))
    if uml_data:
        uml_graph.enabled = _as_bool(uml_data.get("enabled")) or False
        if "types" in uml_data:
            uml_graph.types = _as_type_set(uml_data.get("types"))

    planning = PlanningConfig()
    planning_data = _as_dict(data.get("planning"))
    if planning_data:
        order = _as_str(planning_data.get("order"))
        if order is not None:
            if order.lower() not in PLAN_ORDERS:
                raise ConfigError(
                    f"planning.order must be one of {', '.join(PLAN_ORDERS)} (got '{order}')"
                )
            planning.order = order.lower()
        workers = _as_int(planning_data.get("workers"))
        if workers is not None:
            planning.workers = max(1, workers)

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    plan_file = _as_str(output_data.get("plan_file")) if output_data else None
    if plan_file:
        output.plan_file = Path(plan_file)
    log_file = _as_str(output_data.get("log_file")) if output_data else None
    if log_file:
        output.log_file = Path(log_file)

    return DocPlanConfig(
        root=root,
        workspace_file=workspace_file,
        links=normalize_links(_as_str_list(data.get("links"))),
        proxy=proxy,
        language_version=_as_str(data.get("language_version")) or DEFAULT_LANGUAGE_VERSION,
        eligibility=eligibility,
        uml_graph=uml_graph,
        planning=planning,
        output=output,
    )


def normalize_links(links: Iterable[Any]) -> List[str]:
    """Drop empty and malformed link entries, keeping the first occurrence of each."""
    result: List[str] = []
    for raw in links:
        if not isinstance(raw, str):
            continue
        link = raw.strip()
        if not link:
            continue
        parsed = urlparse(link)
        if parsed.scheme.lower() not in _LINK_SCHEMES or not (parsed.netloc or parsed.path):
            _LOGGER.warning("Ignoring malformed documentation link: %s", link)
            continue
        if link not in result:
            result.append(link)
    return result


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_type_set(value: Any) -> FrozenSet[ComponentType]:
    types = set()
    for name in _as_str_list(value):
        component_type = ComponentType.from_name(name)
        if component_type is None:
            _LOGGER.warning("Ignoring unknown development component type: %s", name)
            continue
        types.add(component_type)
    return frozenset(types)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, Sequence):
        items = [str(item) for item in value if isinstance(item, (str, int, float, bool))]
        return [item for item in items if item.strip()]
    return []
