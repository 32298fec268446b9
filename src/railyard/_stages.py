"""Internal helpers for naming pipeline stages.

Stage names show up in pipeline reports, debug tracing and invariant
errors. They are derived from the step callable unless the caller gives one.
"""

from __future__ import annotations

import functools


def stage_name_of(step: object) -> str:
    """Return a readable stage name for a step callable (internal)."""
    if isinstance(step, functools.partial):
        return stage_name_of(step.func)
    name = getattr(step, "__name__", None)
    if isinstance(name, str) and name:
        return name
    # Callable instances fall back to their class name
    return step.__class__.__name__


__all__ = ()  # internal-only
