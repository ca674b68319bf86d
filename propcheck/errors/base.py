"""Custom exception hierarchy for propcheck.

propcheck separates what happens *inside* a run from what prevents a run:

- A failing predicate never raises out of the runner. It is recorded in the
  RunDetails of the run (see ``propcheck.runner.details``).
- Configuration problems and generator contract violations abort the run
  immediately, before or during tossing, and never produce partial details.

All errors inherit from PropcheckError and include:
- error_code: A unique ErrorCode enum for categorization
- context: ErrorContext with seed/path/toss details
- suggestions: List of actionable steps to resolve the issue

Example:
    try:
        assert_property(for_all(integer(0, 100), lambda n: n < 50))
    except PropertyFailedError as e:
        print(e.details.counterexample, e.details.counterexample_path)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from propcheck.runner.details import RunDetails


class ErrorCode(Enum):
    """Standardized error codes for propcheck.

    Error codes are organized by category:
    - E1xx: Configuration errors
    - E2xx: Generator contract errors
    - E3xx: Property errors
    - E9xx: Unknown/internal errors
    """

    # Configuration errors (E1xx)
    INVALID_CONFIG = "E101"
    INVALID_RANGE = "E102"
    INVALID_PATH = "E103"

    # Generator contract errors (E2xx)
    CONTRACT_VIOLATION = "E201"
    SHRINK_NOT_TERMINATING = "E202"
    FILTER_REJECTED = "E203"

    # Property errors (E3xx)
    PROPERTY_FAILED = "E301"
    TOO_MANY_SKIPS = "E302"

    # Unknown/internal errors (E9xx)
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 200:
            return "configuration"
        elif code_num < 300:
            return "generator"
        elif code_num < 400:
            return "property"
        else:
            return "unknown"


@dataclass
class ErrorContext:
    """Structured context describing where in a run an error occurred.

    Attributes:
        seed: Seed of the run (if known).
        path: Replay path of the run or of the failing node.
        toss_index: Index of the toss being processed.
        extra: Additional context-specific information.
    """

    seed: int | None = None
    path: str | None = None
    toss_index: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "seed": self.seed,
            "path": self.path,
            "toss_index": self.toss_index,
            "extra": self.extra or None,
        }
        return {k: v for k, v in result.items() if v is not None}

    def format_location(self) -> str:
        """Format the error location as a readable string."""
        parts = []
        if self.seed is not None:
            parts.append(f"seed={self.seed}")
        if self.path:
            parts.append(f"path={self.path}")
        if self.toss_index is not None:
            parts.append(f"toss={self.toss_index}")
        return ", ".join(parts) if parts else "unknown location"


class PropcheckError(Exception):
    """Base exception for all propcheck errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: ErrorContext with run details
        suggestions: List of actionable steps to resolve the issue
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]
        location = self.context.format_location()
        if location != "unknown location":
            parts.append(f"at {location}")
        return " | ".join(parts)

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [f"Error [{self.error_code.value}]: {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            lines.append(f"Location: {location}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class ConfigurationError(PropcheckError, ValueError):
    """Invalid parameter combination.

    Raised before any tossing begins: conflicting generator bounds,
    invalid run parameters or a malformed replay path.
    """

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid configuration"
    default_suggestions = [
        "Check the run parameters passed to check()/assert_property()",
        "Check PROPCHECK_* environment variables and the YAML config file",
    ]


class RangeError(ConfigurationError):
    """An integer range whose upper bound is below its lower bound."""

    error_code = ErrorCode.INVALID_RANGE
    default_message = "Invalid range: max must be greater than or equal to min"
    default_suggestions = ["Swap the bounds or widen the range"]


class InvalidPathError(ConfigurationError):
    """A replay path that is malformed or does not fit the shrink tree.

    A path is only meaningful for the exact (generator, seed) pair that
    produced it.
    """

    error_code = ErrorCode.INVALID_PATH
    default_message = "Unable to replay the given path"
    default_suggestions = [
        "Paths look like '12:0:3:1' (toss offset, then shrink indices)",
        "Replay a path with the same seed and property that reported it",
    ]

    def __init__(self, message: str | None = None, path: str | None = None, **kwargs: Any) -> None:
        self.path = path
        super().__init__(message=message, **kwargs)
        if path is not None and self.context.path is None:
            self.context.path = path


class GeneratorContractViolation(PropcheckError):
    """A generator broke the generate/shrink contract.

    Fatal: letting the run continue would corrupt the replay path.
    """

    error_code = ErrorCode.CONTRACT_VIOLATION
    default_message = "Generator contract violation"
    default_suggestions = [
        "Make sure shrink() returns a finite sequence",
        "Make sure composite generators only emit values accepted by their filters",
    ]


class PropertyFailedError(PropcheckError, AssertionError):
    """Raised by assert_property when a run fails.

    Attributes:
        details: The RunDetails of the failing run.
    """

    error_code = ErrorCode.PROPERTY_FAILED
    default_message = "Property failed"
    default_suggestions = [
        "Replay the failure with the reported seed and path",
    ]

    def __init__(self, message: str | None = None, details: RunDetails[Any] | None = None, **kwargs: Any) -> None:
        self.details = details
        if details is not None:
            kwargs.setdefault(
                "context",
                ErrorContext(seed=details.seed, path=details.counterexample_path),
            )
        super().__init__(message=message, **kwargs)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.details is not None:
            result["details"] = self.details.to_dict()
        return result


class TooManySkipsError(PropertyFailedError):
    """Raised by assert_property when too many tosses were skipped."""

    error_code = ErrorCode.TOO_MANY_SKIPS
    default_message = "Too many skipped runs"
    default_suggestions = [
        "Loosen the precondition or generate values that satisfy it directly",
        "Raise max_skips_per_run",
    ]
