"""Infinite, seed-restartable sequence of tosses."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator, Sequence
from typing import TYPE_CHECKING, Any

from propcheck.generators import Value
from propcheck.random import Random, RandomSource
from propcheck.stream import Stream

if TYPE_CHECKING:
    from propcheck.property import Property


def bias_for_run(run_id: int) -> int:
    """Bias percentage for the ``run_id``-th generated toss.

    Early runs favour edge cases more: 50% for the first 9 runs, 33% up to
    the 99th, 25% up to the 999th, and so on.
    """
    magnitude = len(str(run_id + 1)) - 1
    return 100 // (2 + magnitude)


def _generate(prop: Property, source: RandomSource, bias: int | None) -> Value[Any]:
    return prop.generate(Random(source), bias)


def _tosses(
    prop: Property, seed: int, examples: Sequence[Any], unbiased: bool
) -> Iterator[Callable[[], Value[Any]]]:
    for example in examples:
        yield functools.partial(prop.value_from_example, example)
    source = RandomSource.from_seed(seed)
    run_id = 0
    while True:
        child, source = source.split()
        bias = None if unbiased else bias_for_run(run_id)
        yield functools.partial(_generate, prop, child, bias)
        run_id += 1


def toss(
    prop: Property, seed: int, examples: Sequence[Any] = (), unbiased: bool = False
) -> Stream[Callable[[], Value[Any]]]:
    """Lazy tosses of ``prop``: user examples first, then generated values.

    Each element is a thunk, so dropping tosses (path replay) does not pay
    for generating them. Every generated toss owns a child source split
    from the seed, which makes toss k independent of how tosses before it
    consumed randomness. Calling ``toss`` again restarts the same sequence.
    """
    return Stream(_tosses(prop, seed, examples, unbiased))
