"""Run orchestration: discover spec files, verify every (spec file, level) pair."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .config import SPEC_EXTENSION, default_spec_folder
from .errors import SearchRootError
from .model import (
    Reason,
    RunSummary,
    Scenario,
    ScenarioVerificationResult,
    TestFileResult,
    VerificationResult,
)
from .parser import read_scenarios
from .resolve import DEFAULT_SUFFIXES, resolve_implementation
from .verify import compare_steps, missing_file_result, verify_steps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecFileReport:
    spec_file: Path
    results: tuple[TestFileResult, ...] = ()
    warning: str | None = None


def _is_hidden(rel: Path) -> bool:
    return any(part.startswith(".") for part in rel.parts)


def discover_spec_files(
    root: Path, spec_folder: str, *, extension: str = SPEC_EXTENSION
) -> list[Path]:
    """Return `<root>/**/<spec_folder>/*<extension>` files in a stable order.

    Dot-prefixed directories and files (`.git`, `.venv`, ...) are not searched.
    """
    root = Path(root)
    if not root.is_dir():
        raise SearchRootError(f"search root is not a directory: {root}")

    try:
        with os.scandir(root):
            pass
        found = [
            p
            for p in root.rglob(f"*{extension}")
            if p.parent.name == spec_folder
            and not _is_hidden(p.relative_to(root))
            and p.is_file()
        ]
    except OSError as e:
        raise SearchRootError(f"failed to scan {root}: {e}") from e

    found.sort(key=lambda p: p.relative_to(root).as_posix())
    logger.debug("found %d spec file(s) under %s", len(found), root)
    return found


def collect_levels(scenarios: Sequence[Scenario]) -> list[str]:
    levels: list[str] = []
    for s in scenarios:
        for level in s.levels:
            if level not in levels:
                levels.append(level)
    return levels


def expected_steps_for(scenarios: Sequence[Scenario], level: str) -> list[str]:
    steps: list[str] = []
    for s in scenarios:
        if s.applies_to(level):
            steps.extend(s.steps)
    return steps


def scenario_breakdown(
    scenarios: Sequence[Scenario], level: str, verification: VerificationResult
) -> tuple[ScenarioVerificationResult, ...]:
    """Attribute a file's flat steps to scenarios by position.

    Each scenario claims the next `len(scenario.steps)` actual steps. This only
    lines up when the file's step counts agree with the spec file; it is for display.
    """
    out: list[ScenarioVerificationResult] = []
    offset = 0
    for s in scenarios:
        if not s.applies_to(level):
            continue
        if verification.reason is Reason.MISSING_FILE:
            result = missing_file_result(s.steps)
        else:
            window = verification.actual_steps[offset : offset + len(s.steps)]
            result = compare_steps(s.steps, window)
        out.append(ScenarioVerificationResult(scenario_name=s.name, verification=result))
        offset += len(s.steps)
    return tuple(out)


def process_spec_file(
    spec_file: Path,
    spec_folder: str,
    suffixes: Sequence[str] = DEFAULT_SUFFIXES,
) -> SpecFileReport:
    spec_file = Path(spec_file)
    scenarios = read_scenarios(spec_file)
    if not scenarios:
        warning = f"{spec_file}: No scenarios defined, skipping"
        logger.warning(warning)
        return SpecFileReport(spec_file=spec_file, warning=warning)

    results: list[TestFileResult] = []
    for level in collect_levels(scenarios):
        resolved = resolve_implementation(spec_file, spec_folder, level, suffixes)
        expected = expected_steps_for(scenarios, level)
        if resolved.found:
            verification = verify_steps(resolved.path, expected)
        else:
            verification = missing_file_result(expected)
        logger.debug(
            "%s [%s] -> %s: %s", spec_file, level, resolved.path, verification.reason.value
        )
        results.append(
            TestFileResult(
                test_file=resolved.path,
                spec_file=spec_file,
                level=level,
                verification=verification,
                scenario_results=scenario_breakdown(scenarios, level, verification),
            )
        )
    return SpecFileReport(spec_file=spec_file, results=tuple(results))


def run(
    root: Path,
    spec_folder: str | None = None,
    *,
    suffixes: Sequence[str] = DEFAULT_SUFFIXES,
    extension: str = SPEC_EXTENSION,
    jobs: int = 1,
) -> RunSummary:
    """Verify every spec file under `root` and return the run summary.

    With `jobs > 1` spec files are processed on a thread pool; results are still
    collected in discovery order, so the summary matches a sequential run.
    """
    spec_folder = spec_folder or default_spec_folder()
    spec_files = discover_spec_files(Path(root), spec_folder, extension=extension)

    def _process(p: Path) -> SpecFileReport:
        return process_spec_file(p, spec_folder, suffixes)

    if jobs > 1 and len(spec_files) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            reports = list(pool.map(_process, spec_files))
    else:
        reports = [_process(p) for p in spec_files]

    results: list[TestFileResult] = []
    warnings: list[str] = []
    for report in reports:
        results.extend(report.results)
        if report.warning:
            warnings.append(report.warning)

    return RunSummary.from_results(results, warnings=warnings)
