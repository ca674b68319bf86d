"""Generators picking from a fixed set of values."""

from __future__ import annotations

from typing import Any, TypeVar

from propcheck.errors import ConfigurationError
from propcheck.generators.base import Generator, Value
from propcheck.random import Random
from propcheck.stream import Stream

T = TypeVar("T")


class ConstantFromGenerator(Generator[T]):
    """One of ``values``; every value other than the first shrinks to the first.

    The context of a generated value is its index in ``values``.
    """

    def __init__(self, values: tuple[T, ...]) -> None:
        if not values:
            raise ConfigurationError("constant_from() expects at least one value")
        self.values = values

    def generate(self, rng: Random, bias: int | None) -> Value[T]:
        index = rng.next_int(0, len(self.values) - 1)
        return self.make_value(self.values[index], index)

    def can_shrink_without_context(self, value: Any) -> bool:
        return any(value == candidate for candidate in self.values)

    def shrink(self, value: T, context: Any) -> Stream[Value[T]]:
        if context == 0 or value == self.values[0]:
            return Stream.nil()
        return Stream.of(self.make_value(self.values[0], 0))


def constant(value: T) -> ConstantFromGenerator[T]:
    """Always ``value``."""
    return ConstantFromGenerator((value,))


def constant_from(*values: T) -> ConstantFromGenerator[T]:
    """One of ``values``, shrinking towards the first one."""
    return ConstantFromGenerator(tuple(values))
