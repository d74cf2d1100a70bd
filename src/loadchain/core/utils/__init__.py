"""Shared helpers for Loadchain core (merging, YAML reading, profiling, logging)."""
from __future__ import annotations

from .merge import deep_merge, merge_arrays
from .profiling import Profiler, enable_profiler, span
from .stdlib_logging import configure_logging
from .yaml_io import iter_yaml_files, read_yaml

__all__ = [
    "deep_merge",
    "merge_arrays",
    "Profiler",
    "enable_profiler",
    "span",
    "configure_logging",
    "read_yaml",
    "iter_yaml_files",
]
