"""Runtime helpers for builder execution."""

from depbuilder.runtime.aggregator import aggregate, read_all

__all__ = ["aggregate", "read_all"]
