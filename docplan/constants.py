"""Shared constants for documentation planning."""

from __future__ import annotations

from .models import ComponentType

CONFIG_FILENAME = ".docplan.yml"
WORKSPACE_FILENAME = "workspace.yml"
PLAN_FILENAME = ".docplan/plan.json"

DEFAULT_LANGUAGE_VERSION = "1.8"

# Presentation-only kinds that nominally carry Java sources.
DEFAULT_EXCLUDED_TYPES: frozenset[ComponentType] = frozenset({ComponentType.WEB_DYNPRO})

DEFAULT_UML_GRAPH_TYPES: frozenset[ComponentType] = frozenset(
    {
        ComponentType.JAVA,
        ComponentType.J2EE_WEB_MODULE,
        ComponentType.PORTAL_APPLICATION_STANDALONE,
        ComponentType.PORTAL_APPLICATION_MODULE,
    }
)

HEADER_TEMPLATE = "Compartment {compartment} | Development Component {vendor}:{name}"

PLAN_ORDERS: tuple[str, ...] = ("dependency", "registry")


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_EXCLUDED_TYPES",
    "DEFAULT_LANGUAGE_VERSION",
    "DEFAULT_UML_GRAPH_TYPES",
    "HEADER_TEMPLATE",
    "PLAN_FILENAME",
    "PLAN_ORDERS",
    "WORKSPACE_FILENAME",
]
