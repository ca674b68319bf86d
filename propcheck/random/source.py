"""Deterministic random sources.

All randomness in propcheck flows from a single integer seed through
:class:`RandomSource`. A source is an immutable xorshift128+ state: every
operation returns the produced value together with the *next* state, so two
holders of the same source always observe the same outputs, and replaying a
run only requires the seed and the order of calls.

Generators receive a :class:`Random`, a small cursor over a source that is
owned by exactly one generate call.

Example:
    >>> source = RandomSource.from_seed(42)
    >>> value, source = source.next_int(0, 100)
    >>> child, source = source.split()
"""

from __future__ import annotations

from dataclasses import dataclass

from propcheck.errors import RangeError

MASK64 = (1 << 64) - 1


def _splitmix64(state: int) -> tuple[int, int]:
    """Advance a splitmix64 state, returning ``(output, next_state)``."""
    state = (state + 0x9E3779B97F4A7C15) & MASK64
    z = state
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
    return z ^ (z >> 31), state


@dataclass(frozen=True)
class RandomSource:
    """Immutable xorshift128+ state.

    Attributes:
        s0: First 64-bit word of the state.
        s1: Second 64-bit word of the state.
    """

    s0: int
    s1: int

    @classmethod
    def from_seed(cls, seed: int) -> RandomSource:
        """Build a source from any Python int (negative seeds included)."""
        out0, state = _splitmix64(seed & MASK64)
        out1, _ = _splitmix64(state)
        if out0 == 0 and out1 == 0:
            out1 = 1
        return cls(out0, out1)

    def next_word(self) -> tuple[int, RandomSource]:
        """Produce one uniformly distributed 64-bit word."""
        s1, s0 = self.s0, self.s1
        result = (s0 + s1) & MASK64
        s1 ^= (s1 << 23) & MASK64
        return result, RandomSource(s0, s1 ^ s0 ^ (s1 >> 18) ^ (s0 >> 5))

    def next_int(self, min_value: int, max_value: int) -> tuple[int, RandomSource]:
        """Produce an integer uniformly distributed in ``[min_value, max_value]``.

        Uses rejection sampling over as many 64-bit words as the range needs,
        so the distribution stays exact for arbitrarily large ranges.

        Raises:
            RangeError: If ``max_value < min_value``.
        """
        if max_value < min_value:
            raise RangeError(
                f"Invalid range [{min_value}, {max_value}]: max must be greater than or equal to min",
                min=min_value,
                max=max_value,
            )
        span = max_value - min_value + 1
        num_words = max(1, -(-(span - 1).bit_length() // 64))
        total = 1 << (64 * num_words)
        limit = total - total % span

        source = self
        while True:
            acc = 0
            for _ in range(num_words):
                word, source = source.next_word()
                acc = (acc << 64) | word
            if acc < limit:
                return min_value + acc % span, source

    def split(self) -> tuple[RandomSource, RandomSource]:
        """Derive an independent child source.

        Returns:
            ``(child, successor)``: the child is seeded from one output word
            of this source, the successor is this source advanced past it.
            Advancing one never influences the other.
        """
        word, successor = self.next_word()
        return RandomSource.from_seed(word), successor


class Random:
    """Mutable cursor over a :class:`RandomSource`.

    A cursor is owned by a single generate call; it must never be shared
    between independent branches of computation (use :meth:`clone`).
    """

    def __init__(self, source: RandomSource) -> None:
        self._source = source

    @classmethod
    def from_seed(cls, seed: int) -> Random:
        return cls(RandomSource.from_seed(seed))

    @property
    def source(self) -> RandomSource:
        """The current immutable state of this cursor."""
        return self._source

    def next_int(self, min_value: int, max_value: int) -> int:
        value, self._source = self._source.next_int(min_value, max_value)
        return value

    def next_bool(self) -> bool:
        return self.next_int(0, 1) == 1

    def next_biased(self, bias: int | None) -> bool:
        """Decide whether to draw an edge-case value.

        ``bias`` is a percentage in ``[0, 100]`` or None. Nothing is consumed
        from the source when bias is off.
        """
        if bias is None or bias <= 0:
            return False
        return self.next_int(1, 100) <= bias

    def clone(self) -> Random:
        return Random(self._source)

    def __repr__(self) -> str:
        return f"Random(s0={self._source.s0:#x}, s1={self._source.s1:#x})"
