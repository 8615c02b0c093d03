"""Output sinks for rendering."""

from __future__ import annotations

import os
import sys
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


@contextmanager
def open_sink(path: Path | None, mode: int = 0o644) -> Iterator[IO[str]]:
    """Open a text sink for rendered output.

    With no path the sink is standard output. Otherwise output goes to a
    temporary file that replaces ``path`` only when the block succeeds.

    Args:
        path: Destination file path, or None for standard output
        mode: File permissions (octal)
    """
    if path is None:
        yield sys.stdout
        sys.stdout.flush()
        return

    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            yield tmp
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
