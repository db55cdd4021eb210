"""depbuilder - pluggable module builders for dependency analysis."""

__version__ = "0.1.0"
