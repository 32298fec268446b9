"""railyard: fail-fast, railway-oriented composition of fallible steps.

Public API:
    - success() / failure(): Put a value on the success or failure track
    - Success / Failure: The two outcome variants, with map() and flat_map()
    - Pipeline: Immutable builder of same-typed steps, executed against a value
    - compose() / lift(): Build steps from other steps and plain functions
    - keep_fault / wrap_fault: Stock converters from caught exceptions to errors
"""

from __future__ import annotations

import logging

from railyard.combinators import compose, flat_map, lift, map_success
from railyard.config import PipelineConfig
from railyard.errors import (
    ConfigurationError,
    InvariantViolationError,
    RailyardError,
    StepFault,
    UnwrapError,
)
from railyard.outcome import (
    Failure,
    FaultHandler,
    Outcome,
    Success,
    attempt,
    failure,
    is_outcome,
    keep_fault,
    success,
    wrap_fault,
)
from railyard.pipeline import BoundPipeline, Pipeline, PipelineRun, StageRun, Step

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("railyard")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("railyard").addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Outcome
    "Success",
    "Failure",
    "Outcome",
    "success",
    "failure",
    "attempt",
    "is_outcome",
    # Fault conversion
    "FaultHandler",
    "keep_fault",
    "wrap_fault",
    # Combinators
    "map_success",
    "flat_map",
    "lift",
    "compose",
    # Pipeline
    "Pipeline",
    "BoundPipeline",
    "PipelineRun",
    "StageRun",
    "Step",
    "PipelineConfig",
    # Errors
    "RailyardError",
    "ConfigurationError",
    "InvariantViolationError",
    "UnwrapError",
    "StepFault",
]
