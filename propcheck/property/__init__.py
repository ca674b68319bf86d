"""Properties evaluated by the runner."""

from propcheck.property.property import (
    RETURNED_FALSE,
    AsyncProperty,
    Outcome,
    PreconditionFailure,
    Property,
    PropertyFailure,
    async_for_all,
    for_all,
    pre,
)

__all__ = [
    "Property",
    "AsyncProperty",
    "PropertyFailure",
    "PreconditionFailure",
    "Outcome",
    "RETURNED_FALSE",
    "for_all",
    "async_for_all",
    "pre",
]
