"""Tests for asynchronous properties."""

from __future__ import annotations

import asyncio

import pytest

from propcheck import (
    AsyncProperty,
    PropertyFailedError,
    assert_property_async,
    async_for_all,
    check_async,
    for_all,
    integer,
    nat,
)


class TestCheckAsync:
    """Tests for check_async."""

    @pytest.mark.asyncio
    async def test_coroutine_predicate_detected(self) -> None:
        async def below_fifty(n: int) -> bool:
            await asyncio.sleep(0)
            return n < 50

        prop = for_all(integer(0, 100), below_fifty)
        assert isinstance(prop, AsyncProperty)

        details = await check_async(prop, {"seed": 42})
        assert details.counterexample == (50,)

    @pytest.mark.asyncio
    async def test_same_result_as_sync(self) -> None:
        async def predicate(n: int) -> bool:
            return n < 50

        sync_details = await check_async(for_all(integer(0, 100), lambda n: n < 50), {"seed": 9})
        async_details = await check_async(async_for_all(integer(0, 100), predicate), {"seed": 9})
        assert async_details.counterexample_path == sync_details.counterexample_path

    @pytest.mark.asyncio
    async def test_sync_properties_accepted(self) -> None:
        details = await check_async(for_all(nat(), lambda n: n >= 0), {"seed": 1})
        assert details.failed is False

    @pytest.mark.asyncio
    async def test_evaluations_never_overlap(self) -> None:
        running = 0
        overlaps = 0

        async def predicate(n: int) -> bool:
            nonlocal running, overlaps
            running += 1
            if running > 1:
                overlaps += 1
            await asyncio.sleep(0)
            running -= 1
            return True

        await check_async(async_for_all(nat(), predicate), {"seed": 1, "num_runs": 20})
        assert overlaps == 0

    @pytest.mark.asyncio
    async def test_timeout_is_a_failure(self) -> None:
        async def slow(n: int) -> bool:
            await asyncio.sleep(1)
            return True

        details = await check_async(
            async_for_all(nat(), slow),
            {"seed": 1, "timeout": 10, "end_on_failure": True},
        )

        assert details.failed is True
        assert details.error == "Property timeout: exceeded limit of 10 milliseconds"

    @pytest.mark.asyncio
    async def test_async_precondition(self) -> None:
        async def never(n: int) -> bool:
            return False

        details = await check_async(
            async_for_all(nat(), lambda n: True, precondition=never),
            {"seed": 1, "num_runs": 2, "max_skips_per_run": 1},
        )
        assert details.too_many_skips is True


class TestAssertPropertyAsync:
    """Tests for assert_property_async."""

    @pytest.mark.asyncio
    async def test_raises_on_failure(self) -> None:
        async def predicate(n: int) -> bool:
            return n < 50

        with pytest.raises(PropertyFailedError, match="Property failed after"):
            await assert_property_async(for_all(integer(0, 100), predicate), {"seed": 42})

    @pytest.mark.asyncio
    async def test_passes(self) -> None:
        async def predicate(n: int) -> bool:
            return n >= 0

        await assert_property_async(for_all(nat(), predicate), {"seed": 42})


class TestPredicateErrors:
    """Errors raised by async predicates are reported as their own failures."""

    @staticmethod
    async def upstream_timeout(n: int) -> bool:
        raise TimeoutError("upstream service timed out")

    @pytest.mark.asyncio
    async def test_timeout_error_without_time_limit(self) -> None:
        details = await check_async(for_all(integer(0, 100), self.upstream_timeout), {"seed": 1})

        assert details.failed is True
        assert details.error == "TimeoutError: upstream service timed out"
        assert isinstance(details.error_instance, TimeoutError)

    @pytest.mark.asyncio
    async def test_timeout_error_within_time_limit(self) -> None:
        details = await check_async(
            for_all(integer(0, 100), self.upstream_timeout),
            {"seed": 1, "timeout": 1000},
        )

        assert details.error == "TimeoutError: upstream service timed out"
        assert isinstance(details.error_instance, TimeoutError)

    @pytest.mark.asyncio
    async def test_other_errors_within_time_limit(self) -> None:
        async def boom(n: int) -> bool:
            raise ValueError("boom")

        details = await check_async(for_all(nat(), boom), {"seed": 1, "timeout": 1000})

        assert details.error == "ValueError: boom"
        assert details.counterexample == (0,)


class TestAsyncPreconditionDetection:
    """for_all builds an AsyncProperty for coroutine preconditions."""

    @pytest.mark.asyncio
    async def test_async_precondition_with_sync_predicate(self) -> None:
        async def never(n: int) -> bool:
            return False

        prop = for_all(nat(), lambda n: True, precondition=never)
        assert isinstance(prop, AsyncProperty)

        details = await check_async(prop, {"seed": 1, "num_runs": 2, "max_skips_per_run": 1})
        assert details.too_many_skips is True
        assert details.num_skips == 3
