"""Composite generators: tuples, arrays and strings."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

from propcheck.errors import ConfigurationError
from propcheck.generators.base import Generator, Value
from propcheck.generators.integer import IntegerGenerator
from propcheck.random import Random
from propcheck.stream import Stream, make_lazy

T = TypeVar("T")

DEFAULT_MAX_LENGTH = 10


@dataclass(frozen=True)
class TupleContext:
    items: tuple[Value[Any], ...]


class TupleGenerator(Generator[tuple]):
    """Fixed-size tuples, one generator per position.

    Positions shrink one at a time, leftmost first.
    """

    def __init__(self, generators: tuple[Generator[Any], ...]) -> None:
        self.generators = generators

    def _build(self, items: tuple[Value[Any], ...]) -> Value[tuple]:
        return self.make_value(tuple(item.value for item in items), TupleContext(items))

    def generate(self, rng: Random, bias: int | None) -> Value[tuple]:
        return self._build(tuple(g.generate(rng, bias) for g in self.generators))

    def _fits(self, value: Any) -> bool:
        return isinstance(value, tuple) and len(value) == len(self.generators)

    def value_without_context(self, value: Any) -> Value[tuple]:
        # each position keeps its own shrinkability
        if not self._fits(value):
            return Value(value)
        return self._build(tuple(g.value_without_context(v) for g, v in zip(self.generators, value)))

    def can_shrink_without_context(self, value: Any) -> bool:
        return self._fits(value) and all(
            g.can_shrink_without_context(v) for g, v in zip(self.generators, value)
        )

    def shrink(self, value: tuple, context: Any) -> Stream[Value[tuple]]:
        if not isinstance(context, TupleContext):
            context = self.value_without_context(value).context
            if not isinstance(context, TupleContext):
                return Stream.nil()
        items = context.items

        def by_position() -> Iterator[Value[tuple]]:
            for index, item in enumerate(items):
                for shrunk in item.shrink():
                    yield self._build(items[:index] + (shrunk,) + items[index + 1 :])

        return make_lazy(by_position)


@dataclass(frozen=True)
class ArrayContext:
    """Shrink context of an array.

    Attributes:
        items: Item values with their own contexts.
        length_context: Integer shrink context of the length.
    """

    items: tuple[Value[Any], ...]
    length_context: int | None = None


class ArrayGenerator(Generator[list]):
    """Lists of ``item`` values with a length in ``[min_length, max_length]``.

    Arrays shrink their length first (keeping the tail of the list), then
    their items one position at a time.
    """

    def __init__(self, item: Generator[T], min_length: int = 0, max_length: int = DEFAULT_MAX_LENGTH) -> None:
        if min_length < 0:
            raise ConfigurationError(f"array() expects min_length >= 0, got {min_length}")
        if min_length > max_length:
            raise ConfigurationError(
                f"array() expects min_length <= max_length, got {min_length} and {max_length}"
            )
        self.item = item
        self.min_length = min_length
        self.max_length = max_length
        self._length = IntegerGenerator(min_length, max_length)

    def _build(self, items: tuple[Value[Any], ...], length_context: int | None) -> Value[list]:
        return self.make_value([item.value for item in items], ArrayContext(items, length_context))

    def generate(self, rng: Random, bias: int | None) -> Value[list]:
        length = self._length.generate(rng, bias).value
        return self._build(tuple(self.item.generate(rng, bias) for _ in range(length)), None)

    def can_shrink_without_context(self, value: Any) -> bool:
        return (
            isinstance(value, list)
            and self.min_length <= len(value) <= self.max_length
            and all(self.item.can_shrink_without_context(v) for v in value)
        )

    def shrink(self, value: list, context: Any) -> Stream[Value[list]]:
        if isinstance(context, ArrayContext):
            items, length_context = context.items, context.length_context
        else:
            items, length_context = tuple(self.item.value_without_context(v) for v in value), None
        if not items:
            return Stream.nil()
        size = len(items)

        def shorter() -> Stream[Value[list]]:
            return self._length.shrink(size, length_context).map(
                lambda length: self._build(items[size - length.value :], length.context)
            )

        def item_by_item() -> Iterator[Value[list]]:
            for index, item in enumerate(items):
                for shrunk in item.shrink():
                    yield self._build(items[:index] + (shrunk,) + items[index + 1 :], length_context)

        return make_lazy(shorter).join(make_lazy(item_by_item))


def tuple_of(*generators: Generator[Any]) -> TupleGenerator:
    """Tuples whose i-th position comes from the i-th generator."""
    for g in generators:
        if not isinstance(g, Generator):
            raise ConfigurationError(f"tuple_of() expects generators, got {g!r}")
    return TupleGenerator(tuple(generators))


def array(item: Generator[T], min_length: int = 0, max_length: int = DEFAULT_MAX_LENGTH) -> ArrayGenerator:
    """Lists of values produced by ``item``."""
    return ArrayGenerator(item, min_length, max_length)


def _unmap_char(value: Any) -> int:
    if not isinstance(value, str) or len(value) != 1:
        raise TypeError(f"Expected a single character, got {value!r}")
    return ord(value)


def _unmap_string(value: Any) -> list[str]:
    if not isinstance(value, str):
        raise TypeError(f"Expected a str, got {type(value).__name__}")
    return list(value)


def char() -> Generator[str]:
    """Printable ASCII characters, shrinking towards the space character."""
    return IntegerGenerator(0x20, 0x7E).map(chr, _unmap_char)


def string(min_length: int = 0, max_length: int = DEFAULT_MAX_LENGTH) -> Generator[str]:
    """Strings of printable ASCII characters."""
    return ArrayGenerator(char(), min_length, max_length).map("".join, _unmap_string)
