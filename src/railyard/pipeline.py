"""Step-accumulating pipeline built on top of ``Outcome``.

A ``Pipeline`` holds an ordered tuple of same-typed steps and runs them
against an initial value, stopping at the first failure. The builder is
immutable: ``add_step`` returns a new pipeline and leaves the receiver as it
was, so a partially built pipeline can be shared, extended in two directions,
or executed many times with different inputs.

Execution funnels through ``Success.flat_map``, so the short-circuit and
fault-capture rules live in exactly one place.
"""

from __future__ import annotations

import dataclasses
import logging
from time import perf_counter
from typing import TYPE_CHECKING

from railyard._stages import stage_name_of
from railyard.config import PipelineConfig
from railyard.errors import ConfigurationError
from railyard.outcome import Failure, Success, success

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from railyard.outcome import FaultHandler

log = logging.getLogger(__name__)

type Step[T, E] = Callable[[T], Success[T] | Failure[E]]


@dataclasses.dataclass(frozen=True, slots=True)
class Stage[T, E]:
    """A registered step together with its display name."""

    name: str
    step: Step[T, E]


@dataclasses.dataclass(frozen=True, slots=True)
class StageRun:
    """What happened when a single stage was invoked."""

    name: str
    duration_s: float
    succeeded: bool


@dataclasses.dataclass(frozen=True, slots=True)
class PipelineRun[T, E]:
    """Terminal outcome of one execution plus per-stage bookkeeping.

    Only stages that were actually invoked appear in ``stages``; anything
    after the first failure is absent.
    """

    outcome: Success[T] | Failure[E]
    stages: tuple[StageRun, ...] = ()

    @property
    def stage_names(self) -> tuple[str, ...]:
        """Names of the invoked stages in execution order."""
        return tuple(s.name for s in self.stages)

    @property
    def failed_stage(self) -> str | None:
        """Name of the stage that produced the failure, if any."""
        if self.stages and not self.stages[-1].succeeded:
            return self.stages[-1].name
        return None

    @property
    def total_duration_s(self) -> float:
        return sum(s.duration_s for s in self.stages)


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class Pipeline[T, E]:
    """Ordered, fail-fast sequence of steps from ``T`` to ``Outcome[T, E]``.

    Example:
        pipeline = (
            Pipeline(on_fault=keep_fault)
            .add_step(validate_positive)
            .add_step(multiply_by_two)
        )
        pipeline.execute(5)   # Success(value=10)
        pipeline.execute(-1)  # Failure(error=ValueError('Number must be positive'))

    Attributes:
        on_fault: Converts an exception raised by a step into an error value.
        config: Pipeline settings (name, tracing, step limit).
        stages: Registered stages in execution order.
    """

    on_fault: FaultHandler[E]
    config: PipelineConfig = dataclasses.field(default_factory=PipelineConfig)
    stages: tuple[Stage[T, E], ...] = ()

    @classmethod
    def starting_with(
        cls,
        initial: T,
        *,
        on_fault: FaultHandler[E],
        config: PipelineConfig | None = None,
    ) -> BoundPipeline[T, E]:
        """Start a pipeline already bound to its initial value."""
        pipeline = cls(on_fault=on_fault, config=config or PipelineConfig())
        return BoundPipeline(initial=initial, pipeline=pipeline)

    def add_step(self, step: Step[T, E], *, name: str | None = None) -> Pipeline[T, E]:
        """Return a new pipeline with ``step`` appended.

        Registration order is execution order; steps are never reordered or
        deduplicated.

        Raises:
            TypeError: If ``step`` is not callable.
            ConfigurationError: If the configured ``max_steps`` would be exceeded.
        """
        if not callable(step):
            raise TypeError(f"add_step() expects a callable, got {type(step).__name__}")
        return self._with_stages((Stage(name or stage_name_of(step), step),))

    def extend(self, other: Pipeline[T, E]) -> Pipeline[T, E]:
        """Return a new pipeline running this pipeline's steps, then ``other``'s.

        The receiver's ``on_fault`` and ``config`` are kept.
        """
        return self._with_stages(other.stages)

    def _with_stages(self, extra: tuple[Stage[T, E], ...]) -> Pipeline[T, E]:
        stages = self.stages + extra
        limit = self.config.max_steps
        if limit is not None and len(stages) > limit:
            raise ConfigurationError(
                f"Pipeline '{self.config.name}' is limited to {limit} steps",
                hint="Raise PipelineConfig.max_steps or split the pipeline.",
            )
        return dataclasses.replace(self, stages=stages)

    def execute(self, initial: T) -> Success[T] | Failure[E]:
        """Run every stage in order against ``initial``; return the terminal outcome."""
        return self.run(initial).outcome

    def run(self, initial: T) -> PipelineRun[T, E]:
        """Run every stage in order and report which stages ran and for how long.

        The running outcome starts as ``success(initial)``. Before each stage,
        a failure stops execution; otherwise the stage is invoked through
        ``flat_map`` so a raised fault becomes ``Failure(on_fault(exc))``.
        """
        current: Success[T] | Failure[E] = success(initial)
        records: list[StageRun] = []
        trace = bool(self.config.trace)
        total = len(self.stages)

        for idx, stage in enumerate(self.stages, start=1):
            if isinstance(current, Failure):
                break
            if trace:
                log.debug(
                    "%s: running stage %r (%d/%d)",
                    self.config.name,
                    stage.name,
                    idx,
                    total,
                )
            start = perf_counter()
            current = current.flat_map(stage.step, on_fault=self.on_fault)
            records.append(
                StageRun(stage.name, perf_counter() - start, current.is_success())
            )

        return PipelineRun(current, tuple(records))

    @property
    def stage_names(self) -> tuple[str, ...]:
        """Registered stage names in execution order."""
        return tuple(s.name for s in self.stages)

    def __len__(self) -> int:
        return len(self.stages)

    def __iter__(self) -> Iterator[Stage[T, E]]:
        return iter(self.stages)


@dataclasses.dataclass(frozen=True, slots=True)
class BoundPipeline[T, E]:
    """A pipeline paired with the value it will run against."""

    initial: T
    pipeline: Pipeline[T, E]

    def add_step(
        self, step: Step[T, E], *, name: str | None = None
    ) -> BoundPipeline[T, E]:
        pipeline = self.pipeline.add_step(step, name=name)
        return dataclasses.replace(self, pipeline=pipeline)

    def execute(self) -> Success[T] | Failure[E]:
        return self.pipeline.execute(self.initial)

    def run(self) -> PipelineRun[T, E]:
        return self.pipeline.run(self.initial)


__all__ = ["BoundPipeline", "Pipeline", "PipelineRun", "Stage", "StageRun", "Step"]
