"""Replay paths.

A path records where a counterexample lives: the index of the first
failing toss, then the index of the accepted child at every shrink step,
joined by colons (``"12:0:3:1"``). Replaying it tosses up to the offset and
follows the recorded children instead of searching. A path only means
something for the exact (property, seed) pair that produced it.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from propcheck.errors import InvalidPathError
from propcheck.generators import Value
from propcheck.stream import Stream

PATH_PATTERN = re.compile(r"^\d+(:\d+)*$")


def encode_path(offset: int, steps: Sequence[int] = ()) -> str:
    """Encode a toss offset and the chosen shrink indices."""
    if offset < 0 or any(step < 0 for step in steps):
        raise InvalidPathError(f"Path segments must be non-negative, got {offset} and {list(steps)}")
    return ":".join(str(segment) for segment in (offset, *steps))


def decode_path(path: str) -> tuple[int, list[int]]:
    """Split a path into its toss offset and shrink indices.

    Raises:
        InvalidPathError: If ``path`` is not colon-joined decimal numbers.
    """
    if not isinstance(path, str) or not PATH_PATTERN.match(path):
        raise InvalidPathError(f"Unable to replay, got invalid path={path!r}", path=str(path))
    offset, *steps = (int(segment) for segment in path.split(":"))
    return offset, steps


def merge_paths(offset_path: str | None, path: str) -> str:
    """Append ``path``, recorded from where ``offset_path`` ends, to it.

    The last segment of ``offset_path`` and the first segment of ``path``
    index the same sequence, so they are summed.
    """
    if not offset_path:
        return path
    offset_items = offset_path.split(":")
    remaining_items = path.split(":")
    middle = int(offset_items[-1]) + int(remaining_items[0])
    return ":".join([*offset_items[:-1], str(middle), *remaining_items[1:]])


def path_walk(path: str, tossed: Iterable[Callable[[], Value[Any]]]) -> Stream[Value[Any]]:
    """Position a toss stream on the node a path designates.

    Args:
        path: Encoded path.
        tossed: Lazy tosses, as produced by ``toss()``.

    Returns:
        The values remaining from the designated node onwards: the
        designated value first, followed by its later siblings.

    Raises:
        InvalidPathError: If the path is malformed or leads past the end of
            a shrink sequence.
    """
    offset, steps = decode_path(path)
    values: Stream[Value[Any]] = Stream(tossed).drop(offset).map(lambda produce: produce())
    for step in steps:
        to_shrink = values.head()
        if to_shrink is None:
            raise InvalidPathError(f"Unable to replay, got wrong path={path}", path=path)
        values = to_shrink.shrink().drop(step)
    designated = values.head()
    if designated is None:
        raise InvalidPathError(f"Unable to replay, got wrong path={path}", path=path)
    return Stream.of(designated).join(values)
