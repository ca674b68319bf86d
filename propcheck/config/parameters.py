"""Run parameters accepted by check(), assert_property() and the samplers."""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from enum import IntEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from propcheck.errors import ConfigurationError

if TYPE_CHECKING:
    from propcheck.config.settings import RunnerSettings


class VerbosityLevel(IntEnum):
    """How much of the shrink walk is kept in RunDetails.

    - NONE: only the accepted chain of failures.
    - VERBOSE: also the execution tree of failures.
    - VERY_VERBOSE: also every passed or skipped candidate.
    """

    NONE = 0
    VERBOSE = 1
    VERY_VERBOSE = 2


def generate_seed() -> int:
    """Seed used when none is given: wall clock mixed with random bits."""
    return (time.time_ns() // 1_000_000) ^ random.getrandbits(32)


class Parameters(BaseModel):
    """Options of a single run.

    Attributes:
        num_runs: Number of tosses to evaluate before declaring success.
        seed: Seed of the run. Resolved by :meth:`qualified` when missing.
        path: Replay path, as reported by a previous failing run.
        max_skips_per_run: Tolerated precondition failures per requested run.
        timeout: Per-evaluation limit (ms) for async predicates.
        interrupt_after_time_limit: Wall-clock budget (ms) of the whole run.
        skip_all_after_time_limit: After this many ms, skip remaining tosses.
        mark_interrupt_as_failure: Report an interrupted run without
            counterexample as failed.
        end_on_failure: Stop at the first failure without shrinking.
        unbiased: Never bias generation towards edge cases.
        verbose: VerbosityLevel of the produced RunDetails.
        examples: Argument tuples evaluated before any generated value.
        max_shrink_candidates: Largest number of candidates accepted from a
            single shrink sequence before the generator is considered broken.
        logger: Sink for lines written by statistics().
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    num_runs: int = Field(default=100, gt=0)
    seed: int | None = None
    path: str | None = None
    max_skips_per_run: int = Field(default=100, ge=0)
    timeout: int | None = Field(default=None, gt=0)
    interrupt_after_time_limit: int | None = Field(default=None, gt=0)
    skip_all_after_time_limit: int | None = Field(default=None, gt=0)
    mark_interrupt_as_failure: bool = False
    end_on_failure: bool = False
    unbiased: bool = False
    verbose: VerbosityLevel = VerbosityLevel.NONE
    examples: tuple[Any, ...] = ()
    max_shrink_candidates: int | None = Field(default=1_000_000, gt=0)
    logger: Callable[[str], None] = print

    @field_validator("verbose", mode="before")
    @classmethod
    def validate_verbose(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return VerbosityLevel.VERBOSE if v else VerbosityLevel.NONE
        return v

    @field_validator("path", mode="before")
    @classmethod
    def validate_path(cls, v: Any) -> Any:
        # an empty path means "no replay"
        if v == "":
            return None
        return v

    @field_validator("examples", mode="before")
    @classmethod
    def validate_examples(cls, v: Any) -> Any:
        if isinstance(v, list):
            v = tuple(v)
        if isinstance(v, tuple):
            for example in v:
                if not isinstance(example, tuple):
                    raise ValueError(f"each example must be a tuple of arguments, got {example!r}")
        return v

    @classmethod
    def create(cls, **kwargs: Any) -> Parameters:
        """Build parameters, turning validation errors into ConfigurationError."""
        try:
            return cls(**kwargs)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid run parameters: {e}", cause=e) from e

    @classmethod
    def read(cls, params: Parameters | dict[str, Any] | int | None = None) -> Parameters:
        """Accept the shapes check() accepts: nothing, a run count, a dict
        or a Parameters instance."""
        if params is None:
            return cls()
        if isinstance(params, Parameters):
            return params
        if isinstance(params, bool):
            raise ConfigurationError(f"Invalid run parameters: {params!r}")
        if isinstance(params, int):
            return cls.create(num_runs=params)
        if isinstance(params, dict):
            return cls.create(**params)
        raise ConfigurationError(f"Invalid run parameters: {params!r}")

    @classmethod
    def from_settings(cls, settings: RunnerSettings, **overrides: Any) -> Parameters:
        """Thread loaded settings into a run; explicit overrides win."""
        data = settings.to_parameters_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.create(**data)

    def with_overrides(self, **overrides: Any) -> Parameters:
        data = self.model_dump()
        data.update(overrides)
        return Parameters.create(**data)

    def qualified(self) -> Parameters:
        """Copy of these parameters with a concrete seed."""
        if self.seed is not None:
            return self
        return self.model_copy(update={"seed": generate_seed()})
