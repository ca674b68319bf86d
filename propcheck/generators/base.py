"""The value generator contract and its composite variants.

A generator knows how to produce values of some type from a random source
(``generate``) and how to propose simpler versions of a value it produced
(``shrink``). Every produced :class:`Value` carries the generator-owned
context needed to shrink it, bound into a shrinker closure, so the engine
can walk the shrink tree without knowing which generator made the value.

Composite generators form a small closed set:

- :class:`MappedGenerator`: shrinks in the pre-image space, then re-maps.
- :class:`FilteredGenerator`: drops shrink candidates its predicate rejects.
- :class:`ChainedGenerator`: regenerates the chained value for every
  shrink of the source value, then shrinks the chained value itself.

Example:
    >>> evens = integer(0, 100).filter(lambda n: n % 2 == 0)
    >>> labels = evens.map(lambda n: f"#{n}")
    >>> sized = nat(5).chain(lambda n: array(boolean(), n, n))
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

from propcheck.errors import ErrorCode, GeneratorContractViolation
from propcheck.random import Random, RandomSource
from propcheck.stream import Stream, make_lazy

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Value(Generic[T]):
    """A generated instance plus what its generator needs to shrink it.

    Attributes:
        value: The generated instance handed to predicates.
        context: Opaque shrink bookkeeping, only meaningful to the
            generator that produced the value.
        shrinker: Closure producing simpler candidates from this value
            alone. None means the value cannot be shrunk.
    """

    value: T
    context: Any = None
    shrinker: Callable[[], Stream[Value[T]]] | None = field(default=None, repr=False, compare=False)

    def shrink(self) -> Stream[Value[T]]:
        """Build a fresh, finite, single-pass stream of simpler candidates."""
        if self.shrinker is None:
            return Stream.nil()
        return self.shrinker()


class Generator(ABC, Generic[T]):
    """Contract shared by every value generator.

    Implementations must be pure functions of ``(random state, bias)`` and
    must return finite shrink sequences.
    """

    @abstractmethod
    def generate(self, rng: Random, bias: int | None) -> Value[T]:
        """Generate a value.

        Args:
            rng: Random cursor owned by this call.
            bias: Percentage in ``[0, 100]`` of draws that should favour
                edge cases, or None to disable biasing.
        """

    @abstractmethod
    def shrink(self, value: T, context: Any) -> Stream[Value[T]]:
        """Stream strictly simpler candidates; empty when ``value`` is minimal."""

    @abstractmethod
    def can_shrink_without_context(self, value: Any) -> bool:
        """Whether ``value`` could have been produced by this generator and
        can be shrunk starting from a default context."""

    def make_value(self, value: T, context: Any = None) -> Value[T]:
        """Wrap ``value`` with a shrinker bound to this generator."""
        return Value(value, context, functools.partial(self.shrink, value, context))

    def value_without_context(self, value: Any) -> Value[T]:
        """Wrap a value received from outside (e.g. a user example)."""
        if self.can_shrink_without_context(value):
            return self.make_value(value, None)
        return Value(value)

    def map(self, mapper: Callable[[T], U], unmapper: Callable[[Any], T] | None = None) -> Generator[U]:
        """Apply ``mapper`` to generated values.

        ``unmapper`` (the inverse of ``mapper``) is only needed to shrink
        values that arrive without context; it must raise ValueError or
        TypeError for values outside the mapper's image.
        """
        return MappedGenerator(self, mapper, unmapper)

    def filter(self, predicate: Callable[[T], bool]) -> Generator[T]:
        """Only keep values satisfying ``predicate``."""
        return FilteredGenerator(self, predicate)

    def chain(self, chainer: Callable[[T], Generator[U]]) -> Generator[U]:
        """Use a generated value to pick the generator of the final value."""
        return ChainedGenerator(self, chainer)


@dataclass(frozen=True)
class MappedContext:
    """Shrink context of a mapped value: the pre-image value."""

    source: Value[Any]


class MappedGenerator(Generator[U]):
    """Generator applying a function to the values of another one."""

    def __init__(
        self,
        source: Generator[T],
        mapper: Callable[[T], U],
        unmapper: Callable[[Any], T] | None = None,
    ) -> None:
        self.source = source
        self.mapper = mapper
        self.unmapper = unmapper

    def _map_value(self, pre_image: Value[T]) -> Value[U]:
        return self.make_value(self.mapper(pre_image.value), MappedContext(pre_image))

    def generate(self, rng: Random, bias: int | None) -> Value[U]:
        return self._map_value(self.source.generate(rng, bias))

    def shrink(self, value: U, context: Any) -> Stream[Value[U]]:
        if isinstance(context, MappedContext):
            return context.source.shrink().map(self._map_value)
        if self.unmapper is not None and self.can_shrink_without_context(value):
            pre_image = self.unmapper(value)
            return self.source.shrink(pre_image, None).map(self._map_value)
        return Stream.nil()

    def can_shrink_without_context(self, value: Any) -> bool:
        if self.unmapper is None:
            return False
        try:
            pre_image = self.unmapper(value)
        except (TypeError, ValueError):
            return False
        return self.source.can_shrink_without_context(pre_image)


@dataclass(frozen=True)
class FilteredContext:
    """Shrink context of a filtered value: the underlying value."""

    source: Value[Any]


class FilteredGenerator(Generator[T]):
    """Generator rejecting the values of another one that fail a predicate.

    Rejected draws are retried from the same random cursor, so generation
    stays deterministic. Rejected shrink candidates are dropped.
    """

    def __init__(self, source: Generator[T], predicate: Callable[[T], bool]) -> None:
        self.source = source
        self.predicate = predicate

    def _refine(self, candidate: Value[T]) -> Value[T]:
        return self.make_value(candidate.value, FilteredContext(candidate))

    def _accepts(self, candidate: Value[T]) -> bool:
        return bool(self.predicate(candidate.value))

    def generate(self, rng: Random, bias: int | None) -> Value[T]:
        while True:
            candidate = self.source.generate(rng, bias)
            if self._accepts(candidate):
                return self._refine(candidate)

    def shrink(self, value: T, context: Any) -> Stream[Value[T]]:
        if not self.predicate(value):
            raise GeneratorContractViolation(
                f"Filtered generator asked to shrink {value!r}, which its predicate rejects",
                error_code=ErrorCode.FILTER_REJECTED,
            )
        if isinstance(context, FilteredContext):
            candidates = context.source.shrink()
        else:
            candidates = self.source.shrink(value, None)
        return candidates.filter(self._accepts).map(self._refine)

    def can_shrink_without_context(self, value: Any) -> bool:
        return self.source.can_shrink_without_context(value) and bool(self.predicate(value))


@dataclass(frozen=True)
class ChainedContext:
    """Shrink context of a chained value.

    Attributes:
        source_value: Value produced by the source generator.
        source_state: Random state captured before the source was
            generated; chained values are regenerated from it.
        bias: Bias used for the original generation.
        chained_generator: Generator returned by the chainer.
        chained_value: Value produced by ``chained_generator``.
        stopped_for_source: Once the chained value has been shrunk, the
            source is no longer shrunk.
    """

    source_value: Value[Any]
    source_state: RandomSource
    bias: int | None
    chained_generator: Generator[Any]
    chained_value: Value[Any]
    stopped_for_source: bool = False


class ChainedGenerator(Generator[U]):
    """Generator whose output generator depends on a generated value."""

    def __init__(self, source: Generator[T], chainer: Callable[[T], Generator[U]]) -> None:
        self.source = source
        self.chainer = chainer

    def _chain_value(self, source_value: Value[T], rng: Random, source_state: RandomSource, bias: int | None) -> Value[U]:
        chained_generator = self.chainer(source_value.value)
        chained_value = chained_generator.generate(rng, bias)
        context = ChainedContext(source_value, source_state, bias, chained_generator, chained_value)
        return self.make_value(chained_value.value, context)

    def generate(self, rng: Random, bias: int | None) -> Value[U]:
        source_state = rng.source
        source_value = self.source.generate(rng, bias)
        return self._chain_value(source_value, rng, source_state, bias)

    def shrink(self, value: U, context: Any) -> Stream[Value[U]]:
        if not isinstance(context, ChainedContext):
            return Stream.nil()

        def source_shrinks() -> Stream[Value[U]]:
            if context.stopped_for_source:
                return Stream.nil()
            return context.source_value.shrink().map(
                lambda shrunk: self._chain_value(
                    shrunk, Random(context.source_state), context.source_state, context.bias
                )
            )

        def chained_shrinks() -> Stream[Value[U]]:
            return context.chained_value.shrink().map(
                lambda shrunk: self.make_value(
                    shrunk.value,
                    replace(context, chained_value=shrunk, stopped_for_source=True),
                )
            )

        return make_lazy(source_shrinks).join(make_lazy(chained_shrinks))

    def can_shrink_without_context(self, value: Any) -> bool:
        return False
