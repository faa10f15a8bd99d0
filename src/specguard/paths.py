from __future__ import annotations

import os
from pathlib import Path


def find_git_root(start: Path) -> Path | None:
    """Return the closest directory at or above `start` that contains `.git`."""
    p = Path(start)
    while True:
        if (p / ".git").exists():
            return p
        if p.parent == p:
            return None
        p = p.parent


def display_path(path: Path, *, cwd: Path | None = None) -> str:
    """Render `path` relative to its git root, else to the working directory.

    Paths outside that base are returned unchanged.
    """
    path = Path(path)
    if not path.is_absolute():
        return path.as_posix()

    base = find_git_root(path.parent) or Path(cwd or os.getcwd())
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return path.as_posix()
