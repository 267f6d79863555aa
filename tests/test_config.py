"""Tests for docplan.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docplan.config import (
    ConfigError,
    DocPlanConfig,
    ProxyConfig,
    load_config,
    normalize_links,
)
from docplan.constants import DEFAULT_EXCLUDED_TYPES, DEFAULT_UML_GRAPH_TYPES
from docplan.models import ComponentType


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DocPlanConfig)
    assert config.root == tmp_path.resolve()
    assert config.links == []
    assert config.proxy is None
    assert config.language_version == "1.8"
    assert config.eligibility.excluded_types == DEFAULT_EXCLUDED_TYPES
    assert config.uml_graph.enabled is False
    assert config.uml_graph.types == DEFAULT_UML_GRAPH_TYPES
    assert config.planning.order == "dependency"
    assert config.planning.workers == 1
    assert config.workspace_path == tmp_path.resolve() / "workspace.yml"
    assert config.plan_path == tmp_path.resolve() / ".docplan" / "plan.json"
    assert config.log_path is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".docplan.yml"
    config_file.write_text(
        """
workspace: nwdi/workspace.yml
links:
  - "https://docs.oracle.com/javase/8/docs/api/"
  - "  http://static.springsource.org/spring/docs/2.5.x/api/  "
proxy:
  host: proxy.example.com
  port: 8080
language_version: "11"
eligibility:
  excluded_types: [WebDynpro, PortalApplicationModule]
uml_graph:
  enabled: true
  types: [Java]
planning:
  order: Registry
  workers: 4
output:
  plan_file: out/plan.json
  log_file: logs/docplan.log
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.workspace_path == tmp_path.resolve() / "nwdi" / "workspace.yml"
    assert config.links == [
        "https://docs.oracle.com/javase/8/docs/api/",
        "http://static.springsource.org/spring/docs/2.5.x/api/",
    ]
    assert config.proxy == ProxyConfig(host="proxy.example.com", port=8080)
    assert config.language_version == "11"
    assert config.eligibility.excluded_types == frozenset(
        {ComponentType.WEB_DYNPRO, ComponentType.PORTAL_APPLICATION_MODULE}
    )
    assert config.uml_graph.enabled is True
    assert config.uml_graph.types == frozenset({ComponentType.JAVA})
    assert config.planning.order == "registry"
    assert config.planning.workers == 4
    assert config.plan_path == tmp_path.resolve() / "out" / "plan.json"
    assert config.log_path == tmp_path.resolve() / "logs" / "docplan.log"


def test_proxy_without_port_defaults_to_zero(tmp_path: Path) -> None:
    (tmp_path / ".docplan.yml").write_text("proxy:\n  host: proxy.example.com\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.proxy == ProxyConfig(host="proxy.example.com", port=0)


def test_empty_exclusion_list_disables_exclusions(tmp_path: Path) -> None:
    (tmp_path / ".docplan.yml").write_text("eligibility:\n  excluded_types: []\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.eligibility.excluded_types == frozenset()


def test_unknown_types_are_dropped(tmp_path: Path) -> None:
    (tmp_path / ".docplan.yml").write_text(
        "eligibility:\n  excluded_types: [WebDynpro, Flash]\n", encoding="utf-8"
    )

    config = load_config(tmp_path)

    assert config.eligibility.excluded_types == frozenset({ComponentType.WEB_DYNPRO})


def test_invalid_order_raises(tmp_path: Path) -> None:
    (tmp_path / ".docplan.yml").write_text("planning:\n  order: random\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / ".docplan.yml").write_text("links: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    (tmp_path / ".docplan.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_normalize_links_drops_empty_and_malformed_entries() -> None:
    links = normalize_links(
        [
            "https://example.com/api/",
            "",
            "   ",
            "not a url",
            "ftp://example.com/api/",
            None,
            "file:///opt/docs/api/",
            "https://example.com/api/",
        ]
    )

    assert links == ["https://example.com/api/", "file:///opt/docs/api/"]
