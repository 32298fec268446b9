"""Configuration: frozen pipeline settings validated at construction."""

from __future__ import annotations

from dataclasses import dataclass

from dotenv import load_dotenv

from railyard._dev_flags import trace_enabled
from railyard.errors import ConfigurationError

load_dotenv()


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable settings for a pipeline.

    Tracing is resolved once at construction: an explicit ``trace`` wins,
    otherwise ``RAILYARD_TRACE=1`` turns it on.

    Example:
        config = PipelineConfig(name="signup", max_steps=8)
        pipeline = Pipeline(on_fault=keep_fault, config=config)
    """

    #: Label used in debug tracing and pipeline reports.
    name: str = "pipeline"
    #: Emit DEBUG records for each stage; *None* defers to ``RAILYARD_TRACE``.
    trace: bool | None = None
    #: Upper bound on registered steps; *None* means unbounded.
    max_steps: int | None = None

    def __post_init__(self) -> None:
        """Resolve tracing and validate configuration."""
        if not isinstance(self.name, str) or not self.name.strip():
            raise ConfigurationError(
                f"name must be a non-empty string, got {self.name!r}",
                hint="Pass name='signup' or leave the default.",
            )
        object.__setattr__(self, "name", self.name.strip())

        if self.max_steps is not None and (
            isinstance(self.max_steps, bool)
            or not isinstance(self.max_steps, int)
            or self.max_steps < 1
        ):
            raise ConfigurationError(
                f"max_steps must be an integer ≥ 1, got {self.max_steps!r}",
                hint="Use max_steps=None to allow any number of steps.",
            )

        object.__setattr__(self, "trace", trace_enabled(override=self.trace))

    def __str__(self) -> str:
        """Return a compact, developer-friendly representation."""
        return (
            f"PipelineConfig(name={self.name!r}, trace={self.trace}, "
            f"max_steps={self.max_steps})"
        )

    __repr__ = __str__
