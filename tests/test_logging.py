from __future__ import annotations

import logging
from pathlib import Path

from docplan.logging import attach_log_file, configure_logging, get_logger


def test_get_logger_uses_docplan_hierarchy() -> None:
    assert get_logger().name == "docplan"
    assert get_logger("planning.links").name == "docplan.planning.links"


def test_configure_logging_replaces_handlers(tmp_path: Path) -> None:
    configure_logging(verbose=True, log_file=tmp_path / "first.log")
    logger = configure_logging()

    assert logger.level == logging.INFO
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0], logging.FileHandler)


def test_attach_log_file_creates_parent_and_is_idempotent(tmp_path: Path) -> None:
    configure_logging(verbose=True)
    target = tmp_path / "logs" / "nested" / "docplan.log"

    handler = attach_log_file(target)
    again = attach_log_file(target)
    get_logger("orchestrator").debug("planning %s", "workspace")
    handler.flush()

    assert handler is again
    assert handler.level == logging.DEBUG
    file_handlers = [h for h in get_logger().handlers if isinstance(h, logging.FileHandler)]
    assert file_handlers == [handler]
    content = target.read_text(encoding="utf-8")
    assert "DEBUG docplan.orchestrator: planning workspace" in content
