"""Directory enumeration for recursive copies."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from .resolver import resolve
from .types import PathInfo


def entries(directory: str | Path) -> Iterator[tuple[str, PathInfo]]:
    """Return a lazy iterator of ``(name, PathInfo)`` for ``directory``, sorted by name.

    The directory is listed when this is called, so an unreadable directory
    raises OSError here rather than mid-iteration. Each entry is resolved only
    when it is reached. Every call re-reads the directory.
    """
    base = Path(directory)
    names = sorted(child.name for child in base.iterdir())

    return ((name, resolve(base / name)) for name in names)
