"""specguard: check that spec scenario steps are mirrored, in order, by step markers in tests."""

from __future__ import annotations

from . import errors
from .model import (
    Reason,
    RunSummary,
    Scenario,
    ScenarioVerificationResult,
    StepMismatch,
    TestFileResult,
    VerificationResult,
)
from .parser import parse_scenarios
from .runner import run
from .verify import verify_steps

__all__ = [
    "Reason",
    "RunSummary",
    "Scenario",
    "ScenarioVerificationResult",
    "StepMismatch",
    "TestFileResult",
    "VerificationResult",
    "errors",
    "parse_scenarios",
    "run",
    "verify_steps",
]
