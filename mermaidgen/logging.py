"""Logging setup shared by the mermaidgen CLI and pipeline."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

_ROOT_LOGGER = "mermaidgen"
_CONSOLE_FORMAT = "[mermaidgen] %(levelname)s %(message)s"
# Worker threads are named mermaidgen_N, which tells parallel parses apart.
_FILE_FORMAT = "%(asctime)s %(threadName)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``mermaidgen.<name>``, or the package logger when ``name`` is empty."""
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}" if name else _ROOT_LOGGER)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Route mermaidgen records to the console and, optionally, a log file.

    The console handler writes to ``stream`` (stderr by default) because the diagram
    itself may go to stdout. The file sink always records DEBUG detail, so a run can
    be inspected afterwards without re-running it verbosely.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is None:
        logger.setLevel(console_level)
        return logger

    sink = logging.FileHandler(Path(log_file).expanduser(), encoding="utf-8")
    sink.setLevel(logging.DEBUG)
    sink.setFormatter(logging.Formatter(_FILE_FORMAT))
    logger.addHandler(sink)
    logger.setLevel(logging.DEBUG)
    return logger


__all__ = ["configure_logging", "get_logger"]
