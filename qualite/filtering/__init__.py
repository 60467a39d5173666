"""Filtering module - pattern based file narrowing."""

from .patterns import PatternSet, compile_patterns, filter_files

__all__ = ["PatternSet", "compile_patterns", "filter_files"]
