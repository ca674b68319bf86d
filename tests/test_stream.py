"""Tests for lazy streams."""

from __future__ import annotations

import itertools

from propcheck.stream import Stream, make_lazy


def naturals() -> Stream[int]:
    return Stream(itertools.count())


class TestStreamLaziness:
    """Combinators never force more than what is pulled."""

    def test_take_on_infinite_stream(self) -> None:
        assert naturals().take(3).to_list() == [0, 1, 2]

    def test_map_is_lazy(self) -> None:
        seen: list[int] = []

        def record(n: int) -> int:
            seen.append(n)
            return n * 2

        stream = naturals().map(record)
        assert next(stream) == 0
        assert next(stream) == 2
        assert seen == [0, 1]

    def test_make_lazy_defers_factory(self) -> None:
        calls: list[int] = []

        def factory():
            calls.append(1)
            return [1, 2]

        stream = make_lazy(factory)
        assert calls == []
        assert stream.to_list() == [1, 2]
        assert calls == [1]

    def test_join_does_not_touch_later_parts(self) -> None:
        calls: list[int] = []

        def factory():
            calls.append(1)
            return [9]

        assert Stream.of(1, 2).join(make_lazy(factory)).take(2).to_list() == [1, 2]
        assert calls == []

    def test_single_pass(self) -> None:
        stream = Stream.of(1, 2, 3)
        assert stream.to_list() == [1, 2, 3]
        assert stream.to_list() == []


class TestStreamCombinators:
    """Tests for the individual combinators."""

    def test_filter(self) -> None:
        assert naturals().filter(lambda n: n % 3 == 0).take(3).to_list() == [0, 3, 6]

    def test_flat_map(self) -> None:
        assert Stream.of(1, 2).flat_map(lambda n: [n] * n).to_list() == [1, 2, 2]

    def test_drop(self) -> None:
        assert naturals().drop(5).head() == 5

    def test_take_while_and_drop_while(self) -> None:
        assert naturals().take_while(lambda n: n < 3).to_list() == [0, 1, 2]
        assert naturals().drop_while(lambda n: n < 3).head() == 3

    def test_join_many(self) -> None:
        assert Stream.of(1).join([2], (3, 4)).to_list() == [1, 2, 3, 4]

    def test_head_of_empty(self) -> None:
        assert Stream.nil().head() is None

    def test_get_nth_or_last(self) -> None:
        assert Stream.of(1, 2, 3).get_nth_or_last(1) == 2
        assert Stream.of(1, 2, 3).get_nth_or_last(10) == 3
        assert Stream.nil().get_nth_or_last(0) is None

    def test_every(self) -> None:
        assert Stream.of(2, 4).every(lambda n: n % 2 == 0)
        assert not Stream.of(2, 5).every(lambda n: n % 2 == 0)
        assert Stream.nil().every(lambda n: False)

    def test_has(self) -> None:
        assert naturals().has(lambda n: n > 4) == (True, 5)
        assert Stream.of(1, 2).has(lambda n: n > 4) == (False, None)
