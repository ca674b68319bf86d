"""Tests for replay path encoding and walking."""

from __future__ import annotations

import pytest

from propcheck import for_all, integer
from propcheck.errors import ConfigurationError, InvalidPathError
from propcheck.runner.path import decode_path, encode_path, merge_paths, path_walk
from propcheck.runner.tosser import bias_for_run, toss


class TestPathCodec:
    """Tests for encode_path / decode_path."""

    def test_encode(self) -> None:
        assert encode_path(7, [2, 0]) == "7:2:0"
        assert encode_path(3) == "3"

    def test_decode(self) -> None:
        assert decode_path("7:2:0") == (7, [2, 0])
        assert decode_path("12") == (12, [])

    @pytest.mark.parametrize("path", ["", "a", "1::2", "-1", "1:", ":1", "1 :2"])
    def test_malformed_paths(self, path: str) -> None:
        with pytest.raises(InvalidPathError, match="invalid path"):
            decode_path(path)

    def test_invalid_path_is_a_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            decode_path("x")

    def test_negative_segments_cannot_be_encoded(self) -> None:
        with pytest.raises(InvalidPathError):
            encode_path(1, [-1])


class TestMergePaths:
    """Tests for merge_paths."""

    def test_without_offset(self) -> None:
        assert merge_paths(None, "3:1") == "3:1"
        assert merge_paths("", "3:1") == "3:1"

    def test_offset_only(self) -> None:
        assert merge_paths("5", "2:0") == "7:0"

    def test_resumed_shrink(self) -> None:
        assert merge_paths("7:2", "0:1") == "7:2:1"
        assert merge_paths("7:2", "3") == "7:5"


class TestPathWalk:
    """Tests for path_walk."""

    def prop(self):
        return for_all(integer(0, 100), lambda n: True)

    def test_offset_designates_toss(self) -> None:
        expected = [produce().value for produce in toss(self.prop(), 42).take(5)]
        walked = path_walk("3", toss(self.prop(), 42)).take(2).to_list()
        assert [v.value for v in walked] == expected[3:5]

    def test_follows_shrink_indices(self) -> None:
        tossed = toss(self.prop(), 42).drop(2).head()()
        first_shrinks = tossed.shrink().to_list()
        if len(first_shrinks) < 2:
            pytest.skip("toss too small to shrink twice")
        designated = path_walk("2:1", toss(self.prop(), 42)).head()
        assert designated.value == first_shrinks[1].value

    def test_path_past_end_of_shrinks(self) -> None:
        with pytest.raises(InvalidPathError, match="wrong path"):
            path_walk("0:100000", toss(self.prop(), 42))


class TestToss:
    """Tests for the toss stream."""

    def test_restarts_from_seed(self) -> None:
        first = [p().value for p in toss(for_all(integer(0, 10**6), lambda n: True), 7).take(10)]
        second = [p().value for p in toss(for_all(integer(0, 10**6), lambda n: True), 7).take(10)]
        assert first == second

    def test_examples_come_first(self) -> None:
        prop = for_all(integer(0, 10), lambda n: True)
        values = [p().value for p in toss(prop, 7, examples=[(1,), (2,)]).take(3)]
        assert values[:2] == [(1,), (2,)]

    def test_toss_independent_of_examples(self) -> None:
        prop = for_all(integer(0, 10**6), lambda n: True)
        plain = [p().value for p in toss(prop, 7).take(3)]
        with_examples = [p().value for p in toss(prop, 7, examples=[(1,)]).take(4)]
        assert with_examples[1:] == plain

    def test_bias_for_run(self) -> None:
        assert bias_for_run(0) == 50
        assert bias_for_run(8) == 50
        assert bias_for_run(9) == 33
        assert bias_for_run(98) == 33
        assert bias_for_run(99) == 25
        assert bias_for_run(999) == 20
