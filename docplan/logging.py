"""Logging utilities for docplan commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "docplan"
_CONSOLE_FORMAT = "[docplan] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the docplan hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the console handler and, when given, a file sink on the docplan logger.

    Calling it again replaces the handlers of the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        attach_log_file(log_file)
    return logger


def attach_log_file(log_file: Path) -> logging.FileHandler:
    """Add a file sink for ``log_file`` unless one already writes there.

    Used for the ``log_file`` key of ``.docplan.yml``, which is only known
    once the workspace configuration has been read.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    target = Path(log_file).expanduser().resolve()
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == target:
            return handler

    target.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(target, encoding="utf-8")
    file_handler.setLevel(logger.getEffectiveLevel())
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    logger.addHandler(file_handler)
    return file_handler


__all__ = ["attach_log_file", "configure_logging", "get_logger"]
