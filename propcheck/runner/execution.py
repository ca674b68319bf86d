"""Run bookkeeping and RunDetails construction.

RunExecution is notified by the walker about every evaluation and tracks
the state of the run:

    RUNNING --first failure--> SHRINKING --walk ends--> DONE
    RUNNING --tosses exhausted / too many skips--> DONE

Skips and successes only count while RUNNING. The replay path is
accumulated as a colon-joined string, one segment per accepted failure.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Generic, TypeVar

from propcheck.config import Parameters, VerbosityLevel
from propcheck.property import PropertyFailure
from propcheck.runner.details import ExecutionStatus, ExecutionTree, FailureKind, RunDetails
from propcheck.runner.path import merge_paths

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RunState(Enum):
    RUNNING = "running"
    SHRINKING = "shrinking"
    DONE = "done"


class RunExecution(Generic[T]):
    """Collects the outcome of every evaluation of a run.

    Attributes:
        verbosity: How much of the walk to keep in the execution trees.
        state: Current RunState.
        path_to_failure: Path of the current counterexample, relative to
            the start of the values handed to the walker.
        value: Current counterexample.
        failure: Failure of the current counterexample.
        failures: Accepted failing values, in order.
        num_skips: Skips observed while RUNNING.
        num_successes: Successes observed while RUNNING.
        interrupted: Whether a time limit stopped the run.
    """

    def __init__(self, verbosity: VerbosityLevel = VerbosityLevel.NONE) -> None:
        self.verbosity = verbosity
        self.state = RunState.RUNNING
        self.root_execution_trees: list[ExecutionTree[T]] = []
        self._current_level = self.root_execution_trees
        self.path_to_failure: str | None = None
        self.value: T | None = None
        self.failure: PropertyFailure | None = None
        self.failures: list[T] = []
        self.num_skips = 0
        self.num_successes = 0
        self.interrupted = False

    def _record(self, status: ExecutionStatus, value: T) -> ExecutionTree[T]:
        tree = ExecutionTree(status, value)
        self._current_level.append(tree)
        return tree

    def fail(self, value: T, index: int, failure: PropertyFailure) -> None:
        if self.verbosity >= VerbosityLevel.VERBOSE:
            tree = self._record(ExecutionStatus.FAILURE, value)
            self._current_level = tree.children
        if self.path_to_failure is None:
            self.path_to_failure = f"{index}"
            logger.debug(f"Property failed at index {index}: {failure.message}")
        else:
            self.path_to_failure += f":{index}"
            logger.debug(f"Shrink step accepted at index {index}, path={self.path_to_failure}")
        self.value = value
        self.failure = failure
        self.failures.append(value)
        self.state = RunState.SHRINKING

    def skip(self, value: T) -> None:
        if self.verbosity >= VerbosityLevel.VERY_VERBOSE:
            self._record(ExecutionStatus.SKIPPED, value)
        if self.state is RunState.RUNNING:
            self.num_skips += 1

    def success(self, value: T) -> None:
        if self.verbosity >= VerbosityLevel.VERY_VERBOSE:
            self._record(ExecutionStatus.SUCCESS, value)
        if self.state is RunState.RUNNING:
            self.num_successes += 1

    def interrupt(self) -> None:
        self.interrupted = True

    @property
    def is_success(self) -> bool:
        return self.path_to_failure is None

    @property
    def first_failure_index(self) -> int:
        """Toss index of the first failure, -1 before any failure."""
        return int(self.path_to_failure.split(":")[0]) if self.path_to_failure else -1

    def _num_shrinks(self) -> int:
        return len(self.path_to_failure.split(":")) - 1 if self.path_to_failure else 0

    def to_run_details(self, seed: int, base_path: str | None, max_skips: int, params: Parameters) -> RunDetails[T]:
        """Build the terminal record; moves the execution to DONE."""
        self.state = RunState.DONE
        common: dict[str, Any] = {
            "seed": seed,
            "interrupted": self.interrupted,
            "verbose": self.verbosity,
            "execution_summary": tuple(self.root_execution_trees),
            "run_configuration": params,
        }

        if not self.is_success:
            assert self.failure is not None
            details = RunDetails(
                failed=True,
                num_runs=self.first_failure_index + 1 - self.num_skips,
                num_skips=self.num_skips,
                num_shrinks=self._num_shrinks(),
                counterexample=self.value,
                counterexample_path=merge_paths(base_path, self.path_to_failure),
                error=self.failure.message,
                failures=tuple(self.failures),
                failure_kind=FailureKind.PREDICATE,
                error_instance=self.failure.error,
                **common,
            )
            logger.info(
                f"Property failed after {details.num_runs} run(s) and {details.num_shrinks} shrink(s) "
                f"(seed={seed}, path={details.counterexample_path})"
            )
            return details

        if self.num_skips > max_skips:
            logger.info(f"Too many skips: {self.num_skips} > {max_skips} (seed={seed})")
            return RunDetails(
                failed=True,
                num_runs=self.num_successes,
                num_skips=self.num_skips,
                num_shrinks=0,
                counterexample=None,
                counterexample_path=None,
                error=None,
                failure_kind=FailureKind.TOO_MANY_SKIPS,
                **common,
            )

        failed = self.interrupted and params.mark_interrupt_as_failure
        logger.info(
            f"Property {'interrupted' if self.interrupted else 'passed'} after "
            f"{self.num_successes} run(s) (seed={seed})"
        )
        return RunDetails(
            failed=failed,
            num_runs=self.num_successes if self.interrupted else params.num_runs,
            num_skips=self.num_skips,
            num_shrinks=0,
            counterexample=None,
            counterexample_path=None,
            error=None,
            failure_kind=FailureKind.INTERRUPTED if failed else None,
            **common,
        )
