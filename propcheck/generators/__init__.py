"""Value generators.

The engine only relies on the :class:`Generator` contract; the small
catalog below is what propcheck ships out of the box.
"""

from propcheck.generators.base import (
    ChainedContext,
    ChainedGenerator,
    FilteredContext,
    FilteredGenerator,
    Generator,
    MappedContext,
    MappedGenerator,
    Value,
)
from propcheck.generators.collections import (
    ArrayContext,
    ArrayGenerator,
    TupleContext,
    TupleGenerator,
    array,
    char,
    string,
    tuple_of,
)
from propcheck.generators.constant import ConstantFromGenerator, constant, constant_from
from propcheck.generators.integer import (
    IntegerGenerator,
    bias_numeric_range,
    boolean,
    integer,
    nat,
    shrink_integer,
)

__all__ = [
    # Contract
    "Value",
    "Generator",
    # Composites
    "MappedGenerator",
    "MappedContext",
    "FilteredGenerator",
    "FilteredContext",
    "ChainedGenerator",
    "ChainedContext",
    # Catalog
    "IntegerGenerator",
    "integer",
    "nat",
    "boolean",
    "shrink_integer",
    "bias_numeric_range",
    "ConstantFromGenerator",
    "constant",
    "constant_from",
    "TupleGenerator",
    "TupleContext",
    "tuple_of",
    "ArrayGenerator",
    "ArrayContext",
    "array",
    "char",
    "string",
]
