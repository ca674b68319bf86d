"""Sampling and classification of generated values, without predicates."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from typing import Any

from propcheck.config import Parameters
from propcheck.errors import ConfigurationError
from propcheck.generators import Generator, Value
from propcheck.property import Property
from propcheck.runner.path import path_walk
from propcheck.runner.tosser import toss
from propcheck.stream import Stream


def _always_true(_: Any) -> bool:
    return True


def to_property(source: Property | Generator[Any]) -> Property:
    if isinstance(source, Property):
        return source
    if isinstance(source, Generator):
        return Property(source, _always_true)
    raise ConfigurationError(f"Expected a generator or a property, got {source!r}")


def stream_sample(source: Property | Generator[Any], params: Parameters | dict[str, Any] | int | None = None) -> Stream[Any]:
    """Lazily produce the values check() would evaluate for the same parameters."""
    qualified = Parameters.read(params).qualified()
    prop = to_property(source)
    tossed = toss(prop, qualified.seed, qualified.examples, qualified.unbiased)
    if qualified.path is None:
        return tossed.take(qualified.num_runs).map(lambda produce: produce().value)
    values: Stream[Value[Any]] = path_walk(qualified.path, tossed)
    return values.take(qualified.num_runs).map(lambda value: value.value)


def sample(source: Property | Generator[Any], params: Parameters | dict[str, Any] | int | None = None) -> list[Any]:
    """Generate the values check() would evaluate for the same parameters.

    Example:
        >>> sample(nat(), 10)             # 10 values
        >>> sample(nat(), {"seed": 42})   # as check() would with seed=42
    """
    return stream_sample(source, params).to_list()


def statistics(
    source: Property | Generator[Any],
    classify: Callable[[Any], str | list[str]],
    params: Parameters | dict[str, Any] | int | None = None,
) -> dict[str, float]:
    """Classify generated values and report the share of each category.

    Lines are written to ``params.logger``, most frequent category first.

    Returns:
        Percentage of generated values per category.
    """
    qualified = Parameters.read(params).qualified()
    recorded: Counter[str] = Counter()
    for value in stream_sample(source, qualified):
        out = classify(value)
        categories = out if isinstance(out, list) else [out]
        recorded.update(categories)

    shares = {
        category: count * 100.0 / qualified.num_runs for category, count in recorded.most_common()
    }
    rows = [(category, f"{share:.2f}%") for category, share in shares.items()]
    longest_name = max((len(name) for name, _ in rows), default=0)
    longest_share = max((len(share) for _, share in rows), default=0)
    for name, share in rows:
        qualified.logger(f"{name.ljust(longest_name, '.')}..{share.rjust(longest_share, '.')}")
    return shares
