"""Positional step verification.

`compare_steps` is the one verification algorithm; everything else in this
module adapts a file (or a named block in a file) onto it.

Diffs are positional only. When the counts differ, the result lists the
expected steps past the end of the actual list as missing and the actual steps
past the end of the expected list as extra; no alignment is attempted, so an
insertion in the middle shows up as a count mismatch with a trailing diff.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .extract import DEFAULT_BLOCK_KEYWORDS, read_steps, read_steps_by_block
from .model import Reason, StepMismatch, VerificationResult


def missing_file_result(expected: Sequence[str]) -> VerificationResult:
    expected = tuple(expected)
    return VerificationResult(
        passed=False,
        reason=Reason.MISSING_FILE,
        expected_steps=expected,
        actual_steps=(),
        missing_steps=expected,
    )


def compare_steps(expected: Sequence[str], actual: Sequence[str]) -> VerificationResult:
    expected = tuple(expected)
    actual = tuple(actual)
    norm_expected = [s.strip() for s in expected]
    norm_actual = [s.strip() for s in actual]

    if len(norm_expected) != len(norm_actual):
        return VerificationResult(
            passed=False,
            reason=Reason.STEP_COUNT_MISMATCH,
            expected_steps=expected,
            actual_steps=actual,
            missing_steps=tuple(norm_expected[len(norm_actual) :]),
            extra_steps=tuple(norm_actual[len(norm_expected) :]),
        )

    mismatches = tuple(
        StepMismatch(index=i, expected=e, actual=a)
        for i, (e, a) in enumerate(zip(norm_expected, norm_actual))
        if e != a
    )
    if mismatches:
        return VerificationResult(
            passed=False,
            reason=Reason.STEP_MISMATCH,
            expected_steps=expected,
            actual_steps=actual,
            mismatches=mismatches,
        )

    return VerificationResult(
        passed=True,
        reason=Reason.NONE,
        expected_steps=expected,
        actual_steps=actual,
    )


def verify_steps(path: Path, expected: Sequence[str]) -> VerificationResult:
    """Check that the markers in `path` are exactly `expected`, in order."""
    path = Path(path)
    if not path.is_file():
        return missing_file_result(expected)
    return compare_steps(expected, read_steps(path))


def verify_block_steps(
    path: Path,
    block_name: str,
    expected: Sequence[str],
    *,
    keywords: tuple[str, ...] = DEFAULT_BLOCK_KEYWORDS,
) -> VerificationResult:
    """Like `verify_steps`, restricted to one named block of the file.

    Best effort: block grouping is approximate (see `extract.extract_by_block`),
    so this is for diagnostics and never decides a run's verdict.
    """
    path = Path(path)
    if not path.is_file():
        return missing_file_result(expected)
    blocks = read_steps_by_block(path, keywords=keywords)
    return compare_steps(expected, blocks.get(block_name, []))
