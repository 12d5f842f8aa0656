"""Filesystem helpers."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

__all__ = ["atomic_write_json", "atomic_write_text", "list_dir_names"]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace.

    Readers never observe a half-written file: either the previous content
    or the new one.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def atomic_write_json(path: Path, data: object) -> str:
    """Write ``data`` as 2-space indented JSON and return the written text."""
    text = json.dumps(data, indent=2) + "\n"
    atomic_write_text(path, text)
    return text


def list_dir_names(path: Path) -> list[str]:
    """Sorted entry names of a directory; empty if it cannot be listed."""
    try:
        return sorted(p.name for p in path.iterdir())
    except OSError:
        return []
