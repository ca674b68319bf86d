"""Toss consumption and shrink tree walking.

The walker hands values to the runner one at a time and is told the
outcome of each evaluation through :meth:`ShrinkWalker.handle_result`.
While no predicate failed it pulls tosses; after a failure it switches to
the shrink candidates of the failing value.

Shrinking is greedy and depth-first: the first candidate that fails again
becomes the new node and its own candidates are tried next; passing
candidates are never retried. The walk ends when a node's candidates are
exhausted without a new failure. This finds a local minimum along the
first failing branch, not the globally smallest failing value, and every
accepted step is recorded as the candidate's index so the walk can be
replayed from its path.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from typing import Any

from propcheck.errors import ErrorCode, ErrorContext, GeneratorContractViolation
from propcheck.generators import Value
from propcheck.property import Outcome, PreconditionFailure, PropertyFailure
from propcheck.runner.execution import RunExecution, RunState

logger = logging.getLogger(__name__)


class SourceValues:
    """Initial values of a run, bounded by the toss budget and skip ceiling.

    Args:
        base: Values to evaluate before any failure.
        max_initial_iterations: Toss budget, None for unbounded (resumed
            shrinks). Every skip extends the budget by one.
        remaining_skips: Skip ceiling; once more skips than this were
            reported, no further value is handed out.
    """

    def __init__(self, base: Iterator[Value[Any]], max_initial_iterations: int | None, remaining_skips: int) -> None:
        self._base = base
        self._max_initial_iterations = max_initial_iterations
        self._remaining_skips = remaining_skips

    def __iter__(self) -> SourceValues:
        return self

    def __next__(self) -> Value[Any]:
        if self._max_initial_iterations is not None:
            if self._max_initial_iterations <= 0:
                raise StopIteration
            self._max_initial_iterations -= 1
        if self._remaining_skips < 0:
            raise StopIteration
        return next(self._base)

    def skipped_one(self) -> None:
        self._remaining_skips -= 1
        if self._max_initial_iterations is not None:
            self._max_initial_iterations += 1


class ShrinkWalker:
    """Iterator over the values a run has to evaluate.

    Args:
        source_values: Initial values.
        execution: Receives the outcome of every evaluation.
        end_on_failure: Stop right after the first failure.
        deadline: ``time.monotonic()`` value after which the run stops at
            the next toss or shrink-step boundary.
        max_shrink_candidates: Largest acceptable shrink sequence.
    """

    def __init__(
        self,
        source_values: SourceValues,
        execution: RunExecution[Any],
        end_on_failure: bool = False,
        deadline: float | None = None,
        max_shrink_candidates: int | None = None,
    ) -> None:
        self.source_values = source_values
        self.execution = execution
        self.end_on_failure = end_on_failure
        self.deadline = deadline
        self.max_shrink_candidates = max_shrink_candidates
        self._next_values: Iterator[Value[Any]] = source_values
        self._current: Value[Any] | None = None
        self._current_index = -1
        self._finished = False

    @property
    def current_index(self) -> int:
        """Index of the current value within the sequence being walked."""
        return self._current_index

    def __iter__(self) -> ShrinkWalker:
        return self

    def __next__(self) -> Value[Any]:
        if self._finished:
            raise StopIteration
        if self.deadline is not None and time.monotonic() > self.deadline:
            logger.debug("Time limit reached, stopping the run")
            self.execution.interrupt()
            self._finished = True
            raise StopIteration
        try:
            value = next(self._next_values)
        except StopIteration:
            self._finished = True
            raise
        self._current = value
        self._current_index += 1
        self._check_shrink_budget()
        return value

    def _check_shrink_budget(self) -> None:
        if (
            self.execution.state is RunState.SHRINKING
            and self.max_shrink_candidates is not None
            and self._current_index >= self.max_shrink_candidates
        ):
            raise GeneratorContractViolation(
                f"Shrink sequence produced more than {self.max_shrink_candidates} candidates",
                error_code=ErrorCode.SHRINK_NOT_TERMINATING,
                context=ErrorContext(
                    path=self.execution.path_to_failure,
                    toss_index=self.execution.first_failure_index,
                ),
            )

    def handle_result(self, outcome: Outcome) -> None:
        """Record the outcome of the value last returned by ``__next__``."""
        if self._current is None:
            raise RuntimeError("handle_result() called before any value was pulled")
        current = self._current
        if isinstance(outcome, PropertyFailure):
            self.execution.fail(current.value, self._current_index, outcome)
            self._current_index = -1
            if self.end_on_failure:
                self._finished = True
            else:
                self._next_values = iter(current.shrink())
        elif isinstance(outcome, PreconditionFailure):
            if self.execution.state is RunState.RUNNING:
                self.source_values.skipped_one()
            self.execution.skip(current.value)
        else:
            self.execution.success(current.value)
