"""Domain-specific errors for specguard."""

from __future__ import annotations


class SpecGuardError(Exception):
    """Base error for specguard."""


class SearchRootError(SpecGuardError):
    """Raised when the search root is missing, not a directory, or unreadable."""


class SpecGuardIOError(SpecGuardError):
    """Raised when a spec or implementation file exists but cannot be read."""


class SpecPathError(SpecGuardError):
    """Raised when a spec file path does not sit under the spec folder."""
