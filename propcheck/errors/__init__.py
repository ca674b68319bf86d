"""Error types raised by propcheck."""

from propcheck.errors.base import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    GeneratorContractViolation,
    InvalidPathError,
    PropcheckError,
    PropertyFailedError,
    RangeError,
    TooManySkipsError,
)

__all__ = [
    "ErrorCode",
    "ErrorContext",
    "PropcheckError",
    "ConfigurationError",
    "RangeError",
    "InvalidPathError",
    "GeneratorContractViolation",
    "PropertyFailedError",
    "TooManySkipsError",
]
