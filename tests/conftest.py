from __future__ import annotations

import logging
from typing import Iterator

import pytest

from docplan.layout import WorkspaceLayout
from tests._fixtures.workspace_builder import WorkspaceBuilder


@pytest.fixture(autouse=True)
def _reset_docplan_logger() -> Iterator[None]:
    """Undo handler and propagation changes made by ``configure_logging``."""
    yield
    logger = logging.getLogger("docplan")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def workspace() -> WorkspaceBuilder:
    """Provide an empty configuration builder."""
    return WorkspaceBuilder()


@pytest.fixture
def layout() -> WorkspaceLayout:
    return WorkspaceLayout("/ws")
