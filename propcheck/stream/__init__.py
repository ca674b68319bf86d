"""Lazy sequences used for tossing and shrinking."""

from propcheck.stream.stream import Stream, make_lazy

__all__ = ["Stream", "make_lazy"]
