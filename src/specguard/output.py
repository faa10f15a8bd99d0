"""Console rendering of verification results."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .model import Reason, RunSummary, TestFileResult, VerificationResult
from .paths import display_path

PASS = "[green]✓[/green]"
FAIL = "[red]✗[/red]"


def make_console(**kwargs) -> Console:  # noqa: ANN003
    # Paths and step texts must stay on one line for grep-able output.
    kwargs.setdefault("highlight", False)
    kwargs.setdefault("soft_wrap", True)
    return Console(**kwargs)


def print_verification(console: Console, result: VerificationResult, indent: str = "  ") -> None:
    """Print one line per expected step, then any extra steps."""
    if result.reason is Reason.MISSING_FILE:
        console.print(f"{indent}[yellow]File does not exist[/yellow]")
        for step in result.expected_steps:
            console.print(f"{indent}  [yellow]○[/yellow] {escape(step.strip())}")
        return

    expected = [s.strip() for s in result.expected_steps]
    actual = [s.strip() for s in result.actual_steps]

    for i, step in enumerate(expected):
        found = actual[i] if i < len(actual) else None
        if not found:
            console.print(f"{indent}  {FAIL} {escape(step)} [red](missing)[/red]")
        elif found == step:
            console.print(f"{indent}  {PASS} {escape(step)}")
        else:
            console.print(f"{indent}  {FAIL} {escape(step)}")
            console.print(f"{indent}    [red]Found:[/red] {escape(found)}")

    for extra in actual[len(expected) :]:
        console.print(f"{indent}  [yellow]+[/yellow] {escape(extra)} [yellow](extra)[/yellow]")


def print_test_result(
    console: Console,
    result: TestFileResult,
    *,
    verbose: bool = False,
    cwd: Path | None = None,
) -> None:
    shown = escape(display_path(result.test_file, cwd=cwd))
    if result.passed:
        console.print(f"{PASS} {shown}")
    elif result.reason is Reason.MISSING_FILE:
        console.print(f"{FAIL} {shown} [red](not implemented)[/red]")
    else:
        console.print(f"{FAIL} {shown} [red](steps mismatch)[/red]")

    if not verbose:
        return
    for sr in result.scenario_results:
        icon = PASS if sr.verification.passed else FAIL
        console.print(f"  {icon} {escape(sr.scenario_name)}")
        print_verification(console, sr.verification, "  ")
    # Scenario windows only cover the expected count; file-level extras come last.
    for extra in result.verification.extra_steps:
        console.print(f"    [yellow]+[/yellow] {escape(extra)} [yellow](extra)[/yellow]")


def print_warning(console: Console, message: str) -> None:
    console.print(f"[yellow]⚠[/yellow]  {escape(message)}")


def print_summary(console: Console, summary: RunSummary) -> None:
    console.print()
    console.print("=" * 40)
    console.print("Summary:")
    console.print("=" * 40)
    console.print(f"Total test files:    {summary.total}")
    console.print(f"[green]Passed:[/green]              {summary.passed}")
    console.print(f"[red]Failed:[/red]              {summary.failed}")
    console.print(f"[yellow]Not implemented:[/yellow]     {summary.missing}")
    console.print()
