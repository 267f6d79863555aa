"""Pipeline orchestration for documentation planning runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple

from .config import ConfigError, DocPlanConfig, load_config
from .constants import PLAN_ORDERS
from .layout import WorkspaceLayout
from .logging import attach_log_file, get_logger
from .models import BuildPlan
from .planning import BuildDescriptorBuilder, EligibilityFilter, LinkResolver, PlanAggregator
from .registry import ComponentRegistry
from .serialization import plan_to_dict
from .sources import SourceSetProvider, WorkspaceSourceSetProvider
from .workspace import load_workspace

SourceProviderFactory = Callable[[WorkspaceLayout, ComponentRegistry], SourceSetProvider]


@dataclass
class PlanOutcome:
    """Result of a planning run."""

    plan: BuildPlan
    path: Optional[Path]
    dry_run: bool


class Orchestrator:
    """Loads a workspace, runs the planning pass and persists the plan."""

    def __init__(
        self,
        workspace_loader: Callable[[Path], ComponentRegistry] = load_workspace,
        source_provider_factory: SourceProviderFactory = WorkspaceSourceSetProvider,
    ) -> None:
        self.workspace_loader = workspace_loader
        self.source_provider_factory = source_provider_factory
        self.logger = get_logger("orchestrator")

    def run_plan(
        self,
        path: str,
        *,
        config_path: str | None = None,
        workspace_path: str | None = None,
        output: str | None = None,
        order: str | None = None,
        dry_run: bool = False,
    ) -> PlanOutcome:
        """Plan documentation for the workspace at ``path`` and write ``plan.json``."""
        workspace_root = Path(path).expanduser().resolve()
        self.logger.info("Starting planning run for %s", workspace_root)
        config, registry = self.load(workspace_root, config_path, workspace_path)
        plan = self.plan(config, registry, workspace_root, order=order)

        if dry_run:
            self.logger.info("Dry-run completed; plan not written")
            return PlanOutcome(plan=plan, path=None, dry_run=True)

        plan_path = Path(output).expanduser().resolve() if output else config.plan_path
        self._write_plan(plan_path, plan)
        self.logger.info("Plan written to %s", plan_path)
        return PlanOutcome(plan=plan, path=plan_path, dry_run=False)

    def build_plan(
        self,
        path: str,
        *,
        config_path: str | None = None,
        workspace_path: str | None = None,
        order: str | None = None,
    ) -> BuildPlan:
        """Return the plan for ``path`` without writing anything."""
        workspace_root = Path(path).expanduser().resolve()
        config, registry = self.load(workspace_root, config_path, workspace_path)
        return self.plan(config, registry, workspace_root, order=order)

    def load(
        self,
        workspace_root: Path,
        config_path: str | None = None,
        workspace_path: str | None = None,
    ) -> Tuple[DocPlanConfig, ComponentRegistry]:
        config = self._load_config(workspace_root, config_path)
        if config.log_path is not None:
            attach_log_file(config.log_path)
        if workspace_path:
            workspace_file = Path(workspace_path).expanduser().resolve()
        else:
            workspace_file = config.workspace_path
        registry = self.workspace_loader(workspace_file)
        self.logger.debug("Registry holds %d development components", len(registry))
        return config, registry

    def plan(
        self,
        config: DocPlanConfig,
        registry: ComponentRegistry,
        workspace_root: Path,
        *,
        order: str | None = None,
    ) -> BuildPlan:
        effective_order = (order or config.planning.order).lower()
        if effective_order not in PLAN_ORDERS:
            raise ConfigError(
                f"Unknown plan order '{effective_order}'; expected one of {', '.join(PLAN_ORDERS)}"
            )

        layout = WorkspaceLayout(workspace_root)
        eligibility = EligibilityFilter(config.eligibility.excluded_types)
        builder = BuildDescriptorBuilder(
            layout,
            self.source_provider_factory(layout, registry),
            link_resolver=LinkResolver(layout),
            eligibility=eligibility,
            default_language_version=config.language_version,
            use_uml_graph=config.uml_graph.enabled,
            uml_graph_types=config.uml_graph.types,
        )
        aggregator = PlanAggregator(
            builder,
            eligibility=eligibility,
            global_links=config.links,
            proxy=config.proxy,
            order=effective_order,
            workers=config.planning.workers,
        )
        return aggregator.aggregate(registry.configuration, registry)

    def _load_config(self, workspace_root: Path, config_path: str | None) -> DocPlanConfig:
        if config_path:
            explicit = Path(config_path).expanduser()
            if not explicit.exists():
                raise FileNotFoundError(f"Configuration file not found: {explicit}")
            return load_config(explicit)
        try:
            return load_config(workspace_root)
        except ConfigError as exc:
            self.logger.warning("Ignoring unreadable configuration: %s", exc)
            return DocPlanConfig(root=workspace_root)

    @staticmethod
    def _write_plan(plan_path: Path, plan: BuildPlan) -> None:
        plan_path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(plan_to_dict(plan), indent=2)
        staging = plan_path.with_name(plan_path.name + ".tmp")
        staging.write_text(payload + "\n", encoding="utf-8")
        staging.replace(plan_path)


__all__ = ["Orchestrator", "PlanOutcome"]
