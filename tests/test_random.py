"""Tests for the deterministic random sources."""

from __future__ import annotations

import pytest

from propcheck.errors import ConfigurationError, RangeError
from propcheck.random import MASK64, Random, RandomSource


class TestRandomSource:
    """Tests for the immutable xorshift128+ source."""

    def test_same_seed_same_state(self) -> None:
        assert RandomSource.from_seed(42) == RandomSource.from_seed(42)

    def test_different_seeds_differ(self) -> None:
        assert RandomSource.from_seed(1) != RandomSource.from_seed(2)

    def test_negative_and_huge_seeds_are_accepted(self) -> None:
        assert RandomSource.from_seed(-1) == RandomSource.from_seed(MASK64)
        RandomSource.from_seed(2**200)

    def test_operations_do_not_mutate(self) -> None:
        source = RandomSource.from_seed(7)
        first = source.next_int(0, 1000)
        second = source.next_int(0, 1000)
        assert first == second

    def test_next_word_is_64_bits(self) -> None:
        source = RandomSource.from_seed(3)
        for _ in range(100):
            word, source = source.next_word()
            assert 0 <= word <= MASK64

    def test_next_int_stays_in_bounds(self) -> None:
        source = RandomSource.from_seed(11)
        seen = set()
        for _ in range(500):
            value, source = source.next_int(-3, 3)
            assert -3 <= value <= 3
            seen.add(value)
        assert seen == set(range(-3, 4))

    def test_next_int_single_value_range(self) -> None:
        value, _ = RandomSource.from_seed(5).next_int(9, 9)
        assert value == 9

    def test_next_int_large_range(self) -> None:
        source = RandomSource.from_seed(5)
        for _ in range(50):
            value, source = source.next_int(0, 2**130)
            assert 0 <= value <= 2**130

    def test_next_int_invalid_range(self) -> None:
        with pytest.raises(RangeError, match="Invalid range"):
            RandomSource.from_seed(0).next_int(5, 4)

    def test_range_error_is_a_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            RandomSource.from_seed(0).next_int(1, 0)
        with pytest.raises(ValueError):
            RandomSource.from_seed(0).next_int(1, 0)

    def test_split_is_deterministic(self) -> None:
        assert RandomSource.from_seed(9).split() == RandomSource.from_seed(9).split()

    def test_split_successor_is_advanced_source(self) -> None:
        source = RandomSource.from_seed(9)
        child, successor = source.split()
        assert successor == source.next_word()[1]
        assert child != successor


class TestRandom:
    """Tests for the mutable cursor."""

    def test_cursor_advances(self) -> None:
        rng = Random.from_seed(1)
        before = rng.source
        rng.next_int(0, 10)
        assert rng.source != before

    def test_cursor_matches_source(self) -> None:
        rng = Random.from_seed(1)
        expected, _ = RandomSource.from_seed(1).next_int(0, 10)
        assert rng.next_int(0, 10) == expected

    def test_clone_is_independent(self) -> None:
        rng = Random.from_seed(4)
        clone = rng.clone()
        assert [rng.next_int(0, 100) for _ in range(5)] == [clone.next_int(0, 100) for _ in range(5)]

    def test_next_biased_consumes_nothing_when_off(self) -> None:
        rng = Random.from_seed(4)
        before = rng.source
        assert rng.next_biased(None) is False
        assert rng.next_biased(0) is False
        assert rng.source == before

    def test_next_biased_always_with_full_bias(self) -> None:
        rng = Random.from_seed(4)
        assert all(rng.next_biased(100) for _ in range(20))

    def test_next_bool(self) -> None:
        rng = Random.from_seed(8)
        assert {rng.next_bool() for _ in range(50)} == {True, False}
