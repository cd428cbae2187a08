"""Writing rendered diagrams to stdout or to a file."""

from __future__ import annotations

import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import TextIO


class OutputError(RuntimeError):
    """Raised when the diagram cannot be written to its destination."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Failed to write {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


def write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` so readers see either the old or the new file.

    The content goes to a temporary file in the destination directory, is fsynced and
    then renamed over the destination. The parent directory must already exist.
    """
    path = Path(path)
    try:
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except OSError as exc:
        raise OutputError(path, exc) from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            os.chmod(temp_name, _target_mode(path))
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, path)
    except OSError as exc:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        raise OutputError(path, exc) from exc


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return 0o644


def emit(text: str, destination: Path | None = None, stream: TextIO | None = None) -> None:
    """Write ``text`` to ``destination`` or, when there is none, to ``stream``/stdout."""
    if destination is None:
        target = stream or sys.stdout
        target.write(text)
        target.flush()
        return
    write_atomic(destination, text)


__all__ = ["OutputError", "emit", "write_atomic"]
