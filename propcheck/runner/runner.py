"""Entry points running properties: check, check_async and their assert variants.

Example:
    >>> prop = for_all(integer(0, 100), lambda n: n < 50)
    >>> details = check(prop, {"seed": 42})
    >>> details.counterexample, details.counterexample_path
    ((50,), '...')
    >>> check(prop, {"seed": 42, "path": details.counterexample_path}).counterexample
    (50,)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from propcheck.config import Parameters
from propcheck.errors import ConfigurationError
from propcheck.generators import Value
from propcheck.property import AsyncProperty, Outcome, PreconditionFailure, Property
from propcheck.runner.details import RunDetails
from propcheck.runner.execution import RunExecution
from propcheck.runner.path import path_walk
from propcheck.runner.report import throw_if_failed
from propcheck.runner.tosser import toss
from propcheck.runner.walker import ShrinkWalker, SourceValues
from propcheck.stream import Stream

logger = logging.getLogger(__name__)

ParamsLike = Parameters | dict[str, Any] | int | None


def build_initial_values(prop: Property, params: Parameters) -> Stream[Value[Any]]:
    """Values a run starts from: fresh tosses, or the node a path designates."""
    tossed = toss(prop, params.seed, params.examples, params.unbiased)
    if params.path is None:
        return tossed.map(lambda produce: produce())
    return path_walk(params.path, tossed)


@dataclass
class _PreparedRun:
    params: Parameters
    walker: ShrinkWalker
    max_skips: int
    skip_all_deadline: float | None

    def skip_all(self) -> bool:
        return self.skip_all_deadline is not None and time.monotonic() > self.skip_all_deadline

    def details(self) -> RunDetails[Any]:
        return self.walker.execution.to_run_details(
            self.params.seed, self.params.path, self.max_skips, self.params
        )


def _prepare(prop: Any, params: ParamsLike) -> _PreparedRun:
    if not isinstance(prop, Property):
        raise ConfigurationError(f"Expected a property built with for_all(), got {prop!r}")
    qualified = Parameters.read(params).qualified()
    started = time.monotonic()

    # resumed shrinks are not bounded by num_runs
    resumes_shrink = qualified.path is not None and ":" in qualified.path
    max_initial_iterations = None if resumes_shrink else qualified.num_runs
    max_skips = qualified.num_runs * qualified.max_skips_per_run

    initial_values = build_initial_values(prop, qualified)
    source_values = SourceValues(iter(initial_values), max_initial_iterations, max_skips)

    def deadline(limit_ms: int | None) -> float | None:
        return None if limit_ms is None else started + limit_ms / 1000

    walker = ShrinkWalker(
        source_values,
        RunExecution(qualified.verbose),
        end_on_failure=qualified.end_on_failure,
        deadline=deadline(qualified.interrupt_after_time_limit),
        max_shrink_candidates=qualified.max_shrink_candidates,
    )
    logger.debug(f"Running {prop!r} with seed={qualified.seed}, path={qualified.path}")
    return _PreparedRun(qualified, walker, max_skips, deadline(qualified.skip_all_after_time_limit))


def check(prop: Property, params: ParamsLike = None) -> RunDetails[Any]:
    """Run a synchronous property and return its RunDetails.

    Raises:
        ConfigurationError: For invalid parameters, malformed paths or
            asynchronous properties (use :func:`check_async`).
        GeneratorContractViolation: If a generator breaks its contract.
    """
    if isinstance(prop, Property) and prop.is_async:
        raise ConfigurationError("check() cannot run asynchronous properties, use check_async()")
    run = _prepare(prop, params)
    for value in run.walker:
        outcome: Outcome = PreconditionFailure() if run.skip_all() else prop.run(value.value)
        run.walker.handle_result(outcome)
    return run.details()


async def check_async(prop: Property, params: ParamsLike = None) -> RunDetails[Any]:
    """Run a property, awaiting asynchronous predicates one at a time."""
    run = _prepare(prop, params)
    for value in run.walker:
        if run.skip_all():
            outcome: Outcome = PreconditionFailure()
        elif isinstance(prop, AsyncProperty):
            outcome = await prop.run(value.value, timeout=run.params.timeout)
        else:
            outcome = prop.run(value.value)
        run.walker.handle_result(outcome)
    return run.details()


def assert_property(prop: Property, params: ParamsLike = None) -> None:
    """Run a property and raise PropertyFailedError if the run failed."""
    throw_if_failed(check(prop, params))


async def assert_property_async(prop: Property, params: ParamsLike = None) -> None:
    throw_if_failed(await check_async(prop, params))
