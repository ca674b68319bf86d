"""Pytest fixtures for propcheck tests."""

from __future__ import annotations

from typing import Any

import pytest

from propcheck import Parameters, Property, for_all, integer, string
from propcheck.generators import Generator, Value
from propcheck.random import Random
from propcheck.stream import Stream


class CountingPredicate:
    """Predicate wrapper recording every evaluated value."""

    def __init__(self, predicate: Any) -> None:
        self.predicate = predicate
        self.calls: list[Any] = []

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self.predicate(*args)


class EndlessShrinkGenerator(Generator[int]):
    """Broken generator whose shrink stream never ends.

    Every candidate is -1, so predicates failing on generated values only
    keep the walker pulling from the same node.
    """

    def generate(self, rng: Random, bias: int | None) -> Value[int]:
        return self.make_value(rng.next_int(0, 10), None)

    def shrink(self, value: int, context: Any) -> Stream[Value[int]]:
        def forever():
            while True:
                yield Value(-1)

        return Stream(forever())

    def can_shrink_without_context(self, value: Any) -> bool:
        return False


@pytest.fixture
def seeded() -> Parameters:
    """Parameters with a fixed seed."""
    return Parameters(seed=42)


@pytest.fixture
def below_fifty() -> Property:
    """Property failing for every integer >= 50."""
    return for_all(integer(0, 100), lambda n: n < 50)


@pytest.fixture
def short_strings() -> Property:
    """Property failing for strings of 5 characters or more."""
    return for_all(string(0, 10), lambda s: len(s) < 5)


@pytest.fixture
def counting() -> type[CountingPredicate]:
    return CountingPredicate
