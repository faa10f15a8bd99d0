"""Spec file parsing: markdown text to an ordered list of scenarios."""

from __future__ import annotations

import re
from pathlib import Path

from .errors import SpecGuardIOError
from .model import Scenario

HEADING_RE = re.compile(r"^##\s+(.+)")
LEVELS_RE = re.compile(r"^levels:\s*(.*)")
FENCE_RE = re.compile(r"^```")

STEP_BLOCK_OPENER = "```specguard"


def parse_levels(csv: str) -> tuple[str, ...]:
    levels: list[str] = []
    for item in csv.split(","):
        item = item.strip()
        if item and item not in levels:
            levels.append(item)
    return tuple(levels)


def parse_scenarios(text: str) -> list[Scenario]:
    """Parse spec markdown into scenarios, in declaration order.

    A `## <name>` heading opens a scenario, a `levels: a, b` line sets its levels
    and the non-blank lines of a ```` ```specguard ```` block are its steps.
    Step lines are kept verbatim; comparison strips them later. Scenarios that
    end up with no steps are dropped.
    """
    scenarios: list[Scenario] = []

    name: str | None = None
    levels: tuple[str, ...] = ()
    steps: list[str] = []
    in_block = False

    def flush() -> None:
        if name is not None and steps:
            scenarios.append(Scenario(name=name, levels=levels, steps=tuple(steps)))

    for line in text.splitlines():
        m = HEADING_RE.match(line)
        if m:
            flush()
            name = m.group(1).strip()
            levels = ()
            steps = []
            in_block = False
            continue

        if name is not None:
            m = LEVELS_RE.match(line)
            if m:
                levels = parse_levels(m.group(1))
                continue

        if line.rstrip() == STEP_BLOCK_OPENER:
            in_block = True
            continue

        if in_block and FENCE_RE.match(line):
            in_block = False
            continue

        if in_block and name is not None and line.strip():
            steps.append(line)

    flush()
    return scenarios


def read_scenarios(path: Path) -> list[Scenario]:
    path = Path(path)
    try:
        # Undecodable bytes become U+FFFD; only file-system failures are fatal.
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise SpecGuardIOError(f"failed to read spec file {path}: {e}") from e
    return parse_scenarios(text)


def format_scenarios(scenarios: list[Scenario]) -> str:
    """Render scenarios as spec markdown that `parse_scenarios` reads back."""
    lines: list[str] = []
    for s in scenarios:
        lines.extend(
            [
                f"## {s.name}",
                "",
                f"levels: {', '.join(s.levels)}",
                "",
                STEP_BLOCK_OPENER,
                *s.steps,
                "```",
                "",
            ]
        )
    return "\n".join(lines)
