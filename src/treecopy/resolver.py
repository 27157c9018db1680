"""Link-aware path resolution."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .types import PathInfo, PathKind


def absolute(path: Path) -> Path:
    """Absolute form of ``path`` without following a final symlink.

    Paths containing ``..`` are resolved so the last component names a real entry.
    """
    result = path.absolute()
    if ".." in result.parts:
        return result.parent.resolve() / result.name if result.name != ".." else result.resolve()
    return result


def resolve(path: str | os.PathLike[str]) -> PathInfo:
    """Describe what is at ``path`` right now, without following a final symlink.

    Never raises: empty, missing, unreadable or malformed paths are reported as
    missing. An empty string is not taken to mean the current directory.
    """
    raw = os.fspath(path)
    if not raw:
        return PathInfo(path=raw, absolute_path="", kind=PathKind.MISSING)

    target = Path(raw)
    try:
        abs_path = str(absolute(target))
    except (OSError, ValueError, RuntimeError):
        abs_path = str(target.absolute())

    try:
        mode = target.lstat().st_mode
    except (OSError, ValueError):
        return PathInfo(path=raw, absolute_path=abs_path, kind=PathKind.MISSING)

    if stat.S_ISLNK(mode):
        kind = PathKind.SYMLINK
    elif stat.S_ISDIR(mode):
        kind = PathKind.DIRECTORY
    else:
        kind = PathKind.FILE
    return PathInfo(path=raw, absolute_path=abs_path, kind=kind)


def is_directory_target(path: str | os.PathLike[str]) -> bool:
    """True when ``path`` is a directory once links are followed."""
    if not os.fspath(path):
        return False
    try:
        return Path(path).is_dir()
    except (OSError, ValueError):
        return False
