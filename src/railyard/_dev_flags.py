"""Internal helpers for development-time feature flags.

This module intentionally stays minimal. It centralizes how opt-in toggles
are read from the environment so semantics stay consistent across the
codebase.
"""

from __future__ import annotations

import os

__all__ = ["trace_enabled"]

TRACE_ENV_VAR = "RAILYARD_TRACE"


def trace_enabled(*, override: bool | None = None) -> bool:
    """Return True when DEBUG step tracing is enabled.

    - If ``override`` is provided, it takes precedence.
    - Otherwise, returns True when the environment variable
      ``RAILYARD_TRACE`` is exactly ``"1"``.
    """
    if override is not None:
        return bool(override)
    return os.getenv(TRACE_ENV_VAR) == "1"
