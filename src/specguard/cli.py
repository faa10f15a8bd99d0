from __future__ import annotations

import argparse
import importlib.metadata
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import default_log_level, default_spec_folder
from .errors import SpecGuardError
from .output import make_console, print_summary, print_test_result, print_warning
from .runner import run


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="specguard",
        description="Check that spec scenario steps appear, in order, as step markers in test files.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to search (default: current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed step-by-step output.",
    )
    parser.add_argument(
        "--specguard-folder-name",
        metavar="NAME",
        default=None,
        help="Use NAME instead of 'specguard' as folder name (default: SPECGUARD_FOLDER_NAME or 'specguard').",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Number of spec files processed concurrently (output order is unchanged).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level for diagnostics on stderr (default: SPECGUARD_LOG_LEVEL or ERROR).",
    )
    parser.add_argument("--version", action="store_true", help="Print specguard version and exit.")
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        try:
            print(importlib.metadata.version("specguard"))
        except importlib.metadata.PackageNotFoundError:
            # Running from a source checkout without an installed distribution.
            print("0.0.0")
        return 0

    if args.jobs < 1:
        parser.error("--jobs must be at least 1")

    level = (args.log_level or default_log_level()).upper()
    if not isinstance(logging.getLevelName(level), int):
        parser.error(f"unknown log level: {level}")
    _configure_logging(level)

    if args.specguard_folder_name is not None and not args.specguard_folder_name.strip():
        parser.error("--specguard-folder-name requires a non-empty value")
    spec_folder = args.specguard_folder_name or default_spec_folder()
    search_dir = Path(args.directory).absolute()

    console = make_console()
    console.print(f"Searching for {escape(spec_folder)} files in: {escape(str(search_dir))}")
    if args.verbose:
        console.print("(verbose mode enabled)")
    console.print()

    try:
        summary = run(search_dir, spec_folder, jobs=args.jobs)
    except SpecGuardError as e:
        make_console(stderr=True).print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    for warning in summary.warnings:
        print_warning(console, warning)
    for result in summary.results:
        print_test_result(console, result, verbose=args.verbose)

    print_summary(console, summary)
    return 0 if summary.ok else 1
