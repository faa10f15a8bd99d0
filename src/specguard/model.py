from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Reason(str, Enum):
    NONE = "none"
    MISSING_FILE = "missing-file"
    STEP_MISMATCH = "step-mismatch"
    STEP_COUNT_MISMATCH = "step-count-mismatch"


@dataclass(frozen=True)
class Scenario:
    name: str
    levels: tuple[str, ...]
    steps: tuple[str, ...]

    def applies_to(self, level: str) -> bool:
        return level in self.levels


@dataclass(frozen=True)
class StepMismatch:
    index: int
    expected: str
    actual: str


@dataclass(frozen=True)
class VerificationResult:
    passed: bool
    reason: Reason
    expected_steps: tuple[str, ...]
    actual_steps: tuple[str, ...]
    missing_steps: tuple[str, ...] = ()
    extra_steps: tuple[str, ...] = ()
    mismatches: tuple[StepMismatch, ...] = ()


@dataclass(frozen=True)
class ScenarioVerificationResult:
    scenario_name: str
    verification: VerificationResult


@dataclass(frozen=True)
class TestFileResult:
    """Outcome for one (spec file, level) pair."""

    __test__ = False  # not a pytest test class

    test_file: Path
    spec_file: Path
    level: str
    verification: VerificationResult
    scenario_results: tuple[ScenarioVerificationResult, ...] = ()

    @property
    def passed(self) -> bool:
        return self.verification.passed

    @property
    def reason(self) -> Reason:
        return self.verification.reason


@dataclass(frozen=True)
class RunSummary:
    total: int
    passed: int
    failed: int
    missing: int
    results: tuple[TestFileResult, ...] = ()
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    @classmethod
    def from_results(
        cls,
        results: list[TestFileResult] | tuple[TestFileResult, ...],
        *,
        warnings: list[str] | tuple[str, ...] = (),
    ) -> "RunSummary":
        results = tuple(results)
        total = len(results)
        passed = sum(1 for r in results if r.passed)
        missing = sum(1 for r in results if r.reason is Reason.MISSING_FILE)
        return cls(
            total=total,
            passed=passed,
            failed=total - passed,
            missing=missing,
            results=results,
            warnings=tuple(warnings),
        )
