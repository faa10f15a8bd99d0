from __future__ import annotations

import os

DEFAULT_SPEC_FOLDER = "specguard"
SPEC_EXTENSION = ".md"
DEFAULT_LOG_LEVEL = "ERROR"


def default_spec_folder() -> str:
    """Return the spec folder name searched for under the root.

    Override with `SPECGUARD_FOLDER_NAME`.
    """
    override = os.environ.get("SPECGUARD_FOLDER_NAME", "").strip()
    if override:
        return override
    return DEFAULT_SPEC_FOLDER


def default_log_level() -> str:
    """Return the log level name used by the CLI.

    Override with `SPECGUARD_LOG_LEVEL`.
    """
    override = os.environ.get("SPECGUARD_LOG_LEVEL", "").strip()
    if override:
        return override.upper()
    return DEFAULT_LOG_LEVEL
