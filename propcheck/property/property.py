"""Properties: a generator paired with a predicate.

A property turns a predicate into the uniform outcome the runner consumes:

- ``None``: the predicate held.
- :class:`PreconditionFailure`: the value was skipped.
- :class:`PropertyFailure`: the predicate returned False or raised.

Example:
    >>> prop = for_all(integer(0, 100), string(), lambda n, s: len(s) <= n + 10)
    >>> details = check(prop, {"seed": 42})

    Async predicates are detected automatically::

        async def responds(n):
            return await service.ping(n)

        details = await check_async(for_all(nat(10), responds))
"""

from __future__ import annotations

import asyncio
import inspect
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from propcheck.errors import ConfigurationError
from propcheck.generators import Generator, Value, tuple_of
from propcheck.random import Random


class PreconditionFailure(Exception):
    """Raised by :func:`pre` to skip the current value."""

    def __init__(self, message: str = "Precondition not met") -> None:
        super().__init__(message)


def pre(condition: bool) -> None:
    """Skip the current value unless ``condition`` holds."""
    if not condition:
        raise PreconditionFailure()


@dataclass(frozen=True)
class PropertyFailure:
    """A failed evaluation.

    Attributes:
        message: Error text reported in RunDetails.
        error: The exception raised by the predicate, if any.
        traceback: Formatted traceback of ``error``.
    """

    message: str
    error: BaseException | None = None
    traceback: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> PropertyFailure:
        text = str(exc)
        message = f"{type(exc).__name__}: {text}" if text else type(exc).__name__
        return cls(message, exc, "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))


RETURNED_FALSE = "Property failed by returning false"

Outcome = PropertyFailure | PreconditionFailure | None


def _outcome_from_output(output: Any) -> Outcome:
    if output is False:
        return PropertyFailure(RETURNED_FALSE)
    return None


class Property:
    """Synchronous property.

    Args:
        generator: Produces the values handed to the predicate.
        predicate: Called with the generated value; see ``unpack``.
        precondition: Optional filter; a falsy result skips the value.
        unpack: Spread a generated tuple over the predicate arguments.
    """

    is_async = False

    def __init__(
        self,
        generator: Generator[Any],
        predicate: Callable[..., Any],
        precondition: Callable[..., Any] | None = None,
        unpack: bool = False,
    ) -> None:
        self.generator = generator
        self.predicate = predicate
        self.precondition = precondition
        self.unpack = unpack

    def __repr__(self) -> str:
        name = getattr(self.predicate, "__name__", repr(self.predicate))
        return f"{type(self).__name__}({name})"

    def generate(self, rng: Random, bias: int | None) -> Value[Any]:
        return self.generator.generate(rng, bias)

    def value_from_example(self, example: Any) -> Value[Any]:
        return self.generator.value_without_context(example)

    def _call(self, fn: Callable[..., Any], value: Any) -> Any:
        if self.unpack:
            return fn(*value)
        return fn(value)

    def run(self, value: Any) -> Outcome:
        try:
            if self.precondition is not None and not self._call(self.precondition, value):
                return PreconditionFailure()
            output = self._call(self.predicate, value)
        except PreconditionFailure as skip:
            return skip
        except Exception as e:
            return PropertyFailure.from_exception(e)
        return _outcome_from_output(output)


class AsyncProperty(Property):
    """Property whose predicate (and optionally precondition) is awaited.

    Evaluations never overlap: the runner awaits each one before pulling
    the next value.
    """

    is_async = True

    async def _await(self, fn: Callable[..., Any], value: Any) -> Any:
        output = self._call(fn, value)
        if inspect.isawaitable(output):
            output = await output
        return output

    async def _evaluate(self, value: Any) -> Outcome:
        # the predicate's own exceptions never reach wait_for
        try:
            if self.precondition is not None and not await self._await(self.precondition, value):
                return PreconditionFailure()
            output = await self._await(self.predicate, value)
        except PreconditionFailure as skip:
            return skip
        except Exception as e:
            return PropertyFailure.from_exception(e)
        return _outcome_from_output(output)

    async def run(self, value: Any, timeout: int | None = None) -> Outcome:  # type: ignore[override]
        if timeout is None:
            return await self._evaluate(value)
        try:
            return await asyncio.wait_for(self._evaluate(value), timeout / 1000)
        except asyncio.TimeoutError:
            return PropertyFailure(f"Property timeout: exceeded limit of {timeout} milliseconds")


def _split_arguments(args: tuple[Any, ...], builder: str) -> tuple[tuple[Generator[Any], ...], Callable[..., Any]]:
    if not args or not callable(args[-1]) or isinstance(args[-1], Generator):
        raise ConfigurationError(f"{builder}() expects generators followed by a predicate")
    *generators, predicate = args
    for g in generators:
        if not isinstance(g, Generator):
            raise ConfigurationError(f"{builder}() expects generators before the predicate, got {g!r}")
    return tuple(generators), predicate


def for_all(*args: Any, precondition: Callable[..., Any] | None = None) -> Property:
    """Build a property from generators followed by a predicate.

    The predicate receives one argument per generator. A coroutine function
    as predicate or precondition produces an :class:`AsyncProperty`.
    """
    generators, predicate = _split_arguments(args, "for_all")
    is_async = inspect.iscoroutinefunction(predicate) or inspect.iscoroutinefunction(precondition)
    cls = AsyncProperty if is_async else Property
    return cls(tuple_of(*generators), predicate, precondition, unpack=True)


def async_for_all(*args: Any, precondition: Callable[..., Any] | None = None) -> AsyncProperty:
    """Like :func:`for_all`, always producing an :class:`AsyncProperty`."""
    generators, predicate = _split_arguments(args, "async_for_all")
    return AsyncProperty(tuple_of(*generators), predicate, precondition, unpack=True)
