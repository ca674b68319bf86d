"""Terminal record of a run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from propcheck.config import VerbosityLevel

if TYPE_CHECKING:
    from propcheck.config import Parameters

T = TypeVar("T")


class ExecutionStatus(Enum):
    """Outcome of evaluating one value."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILURE = "failure"


class FailureKind(Enum):
    """Why a run is reported as failed."""

    PREDICATE = "predicate"
    TOO_MANY_SKIPS = "too_many_skips"
    INTERRUPTED = "interrupted"


@dataclass
class ExecutionTree(Generic[T]):
    """One evaluated value and the evaluations of its shrink candidates."""

    status: ExecutionStatus
    value: T
    children: list[ExecutionTree[T]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "value": repr(self.value),
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class RunDetails(Generic[T]):
    """Verdict of a check() invocation.

    Attributes:
        failed: Whether the run is reported as a failure.
        interrupted: Whether a time limit stopped the run early.
        num_runs: Evaluated tosses (skips excluded) up to the first failure.
        num_skips: Tosses skipped by a precondition before the first failure.
        num_shrinks: Accepted shrink steps.
        seed: Seed of the run.
        counterexample: Final counterexample, None when no predicate failed.
        counterexample_path: Replay path of the counterexample.
        error: Message of the last accepted failure.
        failures: Accepted failing values, from the first failure to the
            final counterexample.
        failure_kind: Why ``failed`` is True, None otherwise.
        error_instance: Exception raised by the predicate, if any.
        verbose: Verbosity used while recording.
        execution_summary: Execution trees (VERBOSE and above).
        run_configuration: Parameters the run was executed with.
    """

    failed: bool
    interrupted: bool
    num_runs: int
    num_skips: int
    num_shrinks: int
    seed: int
    counterexample: T | None
    counterexample_path: str | None
    error: str | None
    failures: tuple[T, ...] = ()
    failure_kind: FailureKind | None = None
    error_instance: BaseException | None = None
    verbose: VerbosityLevel = VerbosityLevel.NONE
    execution_summary: tuple[ExecutionTree[T], ...] = ()
    run_configuration: Parameters | None = None

    @property
    def too_many_skips(self) -> bool:
        return self.failure_kind is FailureKind.TOO_MANY_SKIPS

    def to_dict(self) -> dict[str, Any]:
        """Convert details to a JSON-friendly dictionary."""
        return {
            "failed": self.failed,
            "interrupted": self.interrupted,
            "num_runs": self.num_runs,
            "num_skips": self.num_skips,
            "num_shrinks": self.num_shrinks,
            "seed": self.seed,
            "counterexample": repr(self.counterexample) if self.counterexample_path else None,
            "counterexample_path": self.counterexample_path,
            "error": self.error,
            "failures": [repr(f) for f in self.failures],
            "failure_kind": self.failure_kind.value if self.failure_kind else None,
            "verbose": int(self.verbose),
            "execution_summary": [tree.to_dict() for tree in self.execution_summary],
        }
