from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .errors import SpecPathError

logger = logging.getLogger(__name__)

# Priority order: the first suffix that exists on disk wins.
DEFAULT_SUFFIXES: tuple[str, ...] = (
    ".ts",
    ".test.ts",
    ".spec.ts",
    ".js",
    ".test.js",
    ".spec.js",
    ".sh",
    ".py",
)


@dataclass(frozen=True)
class ResolvedPath:
    path: Path
    found: bool


def _split_at_spec_folder(spec_file: Path, spec_folder: str) -> tuple[Path, tuple[str, ...]]:
    parts = spec_file.parts
    # Only directory segments count; the file name itself never does.
    for i in range(len(parts) - 2, -1, -1):
        if parts[i] == spec_folder:
            return Path(*parts[:i]) if i else Path("."), parts[i + 1 :]
    raise SpecPathError(f"{spec_file} is not inside a {spec_folder!r} folder")


def relative_key(spec_file: Path, spec_folder: str) -> Path:
    """Return the spec path below the spec folder, without its extension.

    `a/specguard/auth/login.md` -> `auth/login`
    """
    _, rest = _split_at_spec_folder(Path(spec_file), spec_folder)
    key = Path(*rest)
    return key.with_name(key.stem)


def base_dir(spec_file: Path, spec_folder: str) -> Path:
    """Return the parent directory of the (last) spec folder segment."""
    base, _ = _split_at_spec_folder(Path(spec_file), spec_folder)
    return base


def candidate_base(spec_file: Path, spec_folder: str, level: str) -> Path:
    spec_file = Path(spec_file)
    return base_dir(spec_file, spec_folder) / level / relative_key(spec_file, spec_folder)


def resolve_implementation(
    spec_file: Path,
    spec_folder: str,
    level: str,
    suffixes: Sequence[str] = DEFAULT_SUFFIXES,
) -> ResolvedPath:
    """Map a spec file and level to the implementation file that must carry its steps.

    Suffixes are tried in order and only the first existing file is returned. When
    none exists the path is `<candidate base>.*`, which is only meant for messages.
    """
    base = candidate_base(spec_file, spec_folder, level)
    for suffix in suffixes:
        candidate = base.parent / f"{base.name}{suffix}"
        if candidate.is_file():
            logger.debug("resolved %s [%s] -> %s", spec_file, level, candidate)
            return ResolvedPath(path=candidate, found=True)

    missing = base.parent / f"{base.name}.*"
    logger.debug("no implementation for %s [%s]; tried %s", spec_file, level, list(suffixes))
    return ResolvedPath(path=missing, found=False)
