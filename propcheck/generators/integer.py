"""Integer generators and the shared integer shrinking strategy.

Integers shrink towards a target by halving the remaining distance. The
context of every candidate remembers the previously proposed candidate,
which the walker saw pass when it moved on, so subsequent shrinks only
search between that value and the current one and converge on the exact
failure boundary.
"""

from __future__ import annotations

from typing import Any

from propcheck.errors import GeneratorContractViolation, RangeError
from propcheck.generators.base import Generator, Value
from propcheck.random import Random
from propcheck.stream import Stream

MAX_SAFE_NAT = 2**31 - 1


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _halve_pos(n: int) -> int:
    return n // 2


def _halve_neg(n: int) -> int:
    return -((-n) // 2)


def shrink_integer(current: int, target: int, try_target_asap: bool) -> Stream[tuple[int, int | None]]:
    """Stream ``(candidate, context)`` pairs moving ``current`` towards ``target``.

    Args:
        current: Value to shrink.
        target: Value to shrink towards.
        try_target_asap: Propose ``target`` itself first. Used when nothing
            is known about the values between target and current.
    """
    real_gap = current - target

    def shrink_decr():
        previous = None if try_target_asap else target
        to_remove = real_gap if try_target_asap else _halve_pos(real_gap)
        while to_remove > 0:
            candidate = target if to_remove == real_gap else current - to_remove
            yield candidate, previous
            previous = candidate
            to_remove = _halve_pos(to_remove)

    def shrink_incr():
        previous = None if try_target_asap else target
        to_remove = real_gap if try_target_asap else _halve_neg(real_gap)
        while to_remove < 0:
            candidate = target if to_remove == real_gap else current - to_remove
            yield candidate, previous
            previous = candidate
            to_remove = _halve_neg(to_remove)

    return Stream(shrink_decr() if real_gap > 0 else shrink_incr())


def integer_log_like(v: int) -> int:
    """floor(log2(v)) for v >= 1, computed exactly."""
    return v.bit_length() - 1


def bias_numeric_range(min_value: int, max_value: int) -> list[tuple[int, int]]:
    """Split ``[min_value, max_value]`` into edge-case sub-ranges.

    The first range has the highest priority: values close to zero when
    the range spans zero, close to the bound nearest to zero otherwise.
    """
    if min_value == max_value:
        return [(min_value, max_value)]
    if min_value < 0 < max_value:
        log_min = integer_log_like(-min_value)
        log_max = integer_log_like(max_value)
        return [
            (-log_min, log_max),
            (max_value - log_max, max_value),
            (min_value, min_value + log_min),
        ]
    log_gap = integer_log_like(max_value - min_value)
    close_to_min = (min_value, min_value + log_gap)
    close_to_max = (max_value - log_gap, max_value)
    return [close_to_max, close_to_min] if min_value < 0 else [close_to_min, close_to_max]


class IntegerGenerator(Generator[int]):
    """Integers in ``[min_value, max_value]``, shrinking towards zero
    (or the bound closest to zero)."""

    def __init__(self, min_value: int, max_value: int) -> None:
        if min_value > max_value:
            raise RangeError(
                f"integer() expects min <= max, got min={min_value} and max={max_value}",
                min=min_value,
                max=max_value,
            )
        self.min_value = min_value
        self.max_value = max_value

    def __repr__(self) -> str:
        return f"integer({self.min_value}, {self.max_value})"

    def _generate_range(self, rng: Random, bias: int | None) -> tuple[int, int]:
        if not rng.next_biased(bias):
            return self.min_value, self.max_value
        ranges = bias_numeric_range(self.min_value, self.max_value)
        if len(ranges) == 1:
            return ranges[0]
        # the first range is picked more often than the others
        index = rng.next_int(-2 * (len(ranges) - 1), len(ranges) - 2)
        return ranges[0] if index < 0 else ranges[index + 1]

    def generate(self, rng: Random, bias: int | None) -> Value[int]:
        low, high = self._generate_range(rng, bias)
        return self.make_value(rng.next_int(low, high), None)

    def can_shrink_without_context(self, value: Any) -> bool:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and self.min_value <= value <= self.max_value
        )

    def default_target(self) -> int:
        if self.min_value <= 0 <= self.max_value:
            return 0
        return self.max_value if self.min_value < 0 else self.min_value

    def _is_last_chance_try(self, current: int, context: int) -> bool:
        # the halving walk is exhausted, only the remembered value is left
        if current > 0:
            return current == context + 1 and current > self.min_value
        if current < 0:
            return current == context - 1 and current < self.max_value
        return False

    def _to_values(self, candidates: Stream[tuple[int, int | None]]) -> Stream[Value[int]]:
        return candidates.map(lambda pair: self.make_value(pair[0], pair[1]))

    def shrink(self, value: int, context: Any) -> Stream[Value[int]]:
        if context is None:
            return self._to_values(shrink_integer(value, self.default_target(), True))
        if not isinstance(context, int):
            raise GeneratorContractViolation(
                f"Invalid context {context!r} passed to {self!r}: expected an int"
            )
        if context != 0 and _sign(context) != _sign(value):
            raise GeneratorContractViolation(
                f"Invalid context {context!r} passed to {self!r} for value {value}: signs differ"
            )
        if self._is_last_chance_try(value, context):
            return Stream.of(self.make_value(context, None))
        return self._to_values(shrink_integer(value, context, False))


def integer(min_value: int = -(2**31), max_value: int = 2**31 - 1) -> IntegerGenerator:
    """Integers between ``min_value`` and ``max_value`` (both included)."""
    return IntegerGenerator(min_value, max_value)


def nat(max_value: int = MAX_SAFE_NAT) -> IntegerGenerator:
    """Integers between 0 and ``max_value``."""
    return IntegerGenerator(0, max_value)


def _unmap_boolean(value: Any) -> int:
    if not isinstance(value, bool):
        raise TypeError(f"Expected a bool, got {type(value).__name__}")
    return int(value)


def boolean() -> Generator[bool]:
    """True or False, shrinking towards False."""
    return IntegerGenerator(0, 1).map(lambda n: n == 1, _unmap_boolean)
