"""Deterministic random sources."""

from propcheck.random.source import MASK64, Random, RandomSource

__all__ = ["MASK64", "Random", "RandomSource"]
