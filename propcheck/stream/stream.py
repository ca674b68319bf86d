"""Lazy, pull-based sequences.

A :class:`Stream` wraps a Python iterator and exposes non-eager
combinators. Pulling element k never forces element k+1, which allows
streams to be infinite (tossing) or very large (shrinking).

Streams are single-pass: once consumed they are exhausted. Code needing
several passes asks its producer for a new stream, e.g. calling
``Value.shrink()`` again or re-running ``toss()`` from the seed.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


def _lazy(factory: Callable[[], Iterable[T]]) -> Iterator[T]:
    yield from factory()


def make_lazy(factory: Callable[[], Iterable[T]]) -> Stream[T]:
    """Defer building an iterable until its first element is pulled."""
    return Stream(_lazy(factory))


class Stream(Generic[T]):
    """Possibly infinite sequence of values, evaluated on demand."""

    def __init__(self, source: Iterable[T]) -> None:
        self._iterator: Iterator[T] = iter(source)

    @staticmethod
    def nil() -> Stream[Any]:
        """An empty stream."""
        return Stream(())

    @staticmethod
    def of(*values: T) -> Stream[T]:
        return Stream(values)

    def __iter__(self) -> Iterator[T]:
        return self._iterator

    def __next__(self) -> T:
        return next(self._iterator)

    def map(self, f: Callable[[T], U]) -> Stream[U]:
        return Stream(f(v) for v in self._iterator)

    def flat_map(self, f: Callable[[T], Iterable[U]]) -> Stream[U]:
        return Stream(itertools.chain.from_iterable(f(v) for v in self._iterator))

    def filter(self, predicate: Callable[[T], bool]) -> Stream[T]:
        return Stream(v for v in self._iterator if predicate(v))

    def take(self, n: int) -> Stream[T]:
        """Keep at most ``n`` elements; terminates even on infinite streams."""
        return Stream(itertools.islice(self._iterator, max(n, 0)))

    def drop(self, n: int) -> Stream[T]:
        return Stream(itertools.islice(self._iterator, max(n, 0), None))

    def take_while(self, predicate: Callable[[T], bool]) -> Stream[T]:
        return Stream(itertools.takewhile(predicate, self._iterator))

    def drop_while(self, predicate: Callable[[T], bool]) -> Stream[T]:
        return Stream(itertools.dropwhile(predicate, self._iterator))

    def join(self, *others: Iterable[T]) -> Stream[T]:
        """Concatenate other iterables after this one (flattens one level)."""
        return Stream(itertools.chain(self._iterator, *others))

    def head(self) -> T | None:
        """First element, or None for an empty stream."""
        return next(self._iterator, None)

    def get_nth_or_last(self, nth: int) -> T | None:
        """Element at ``nth``, or the last one if the stream is shorter.

        Returns None for an empty stream.
        """
        remaining = nth
        last: T | None = None
        for value in self._iterator:
            if remaining == 0:
                return value
            remaining -= 1
            last = value
        return last

    def every(self, predicate: Callable[[T], bool]) -> bool:
        return all(predicate(v) for v in self._iterator)

    def has(self, predicate: Callable[[T], bool]) -> tuple[bool, T | None]:
        """Look for the first element matching ``predicate``."""
        for value in self._iterator:
            if predicate(value):
                return True, value
        return False, None

    def to_list(self) -> list[T]:
        return list(self._iterator)
