"""propcheck - Property-based testing with replayable shrinking.

Properties are checked against generated values; on failure the
counterexample is shrunk and reported with a seed and a path that replay
the exact same failure.

Example:
    >>> from propcheck import assert_property, for_all, integer
    >>> assert_property(for_all(integer(0, 100), lambda n: n <= 100))
"""

from propcheck.config import Parameters, RunnerSettings, VerbosityLevel, load_settings
from propcheck.errors import (
    ConfigurationError,
    ErrorCode,
    GeneratorContractViolation,
    InvalidPathError,
    PropcheckError,
    PropertyFailedError,
    RangeError,
    TooManySkipsError,
)
from propcheck.generators import (
    Generator,
    Value,
    array,
    boolean,
    char,
    constant,
    constant_from,
    integer,
    nat,
    string,
    tuple_of,
)
from propcheck.property import AsyncProperty, PreconditionFailure, Property, async_for_all, for_all, pre
from propcheck.random import Random, RandomSource
from propcheck.runner import (
    FailureKind,
    RunDetails,
    assert_property,
    assert_property_async,
    check,
    check_async,
    format_run_details,
    sample,
    statistics,
    stream_sample,
)
from propcheck.stream import Stream

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Running
    "check",
    "check_async",
    "assert_property",
    "assert_property_async",
    "sample",
    "stream_sample",
    "statistics",
    "format_run_details",
    "RunDetails",
    "FailureKind",
    # Properties
    "Property",
    "AsyncProperty",
    "for_all",
    "async_for_all",
    "pre",
    "PreconditionFailure",
    # Generators
    "Generator",
    "Value",
    "integer",
    "nat",
    "boolean",
    "constant",
    "constant_from",
    "tuple_of",
    "array",
    "char",
    "string",
    # Randomness and streams
    "Random",
    "RandomSource",
    "Stream",
    # Configuration
    "Parameters",
    "VerbosityLevel",
    "RunnerSettings",
    "load_settings",
    # Errors
    "ErrorCode",
    "PropcheckError",
    "ConfigurationError",
    "RangeError",
    "InvalidPathError",
    "GeneratorContractViolation",
    "PropertyFailedError",
    "TooManySkipsError",
]
