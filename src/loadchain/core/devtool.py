"""Devtool classification.

A devtool string is only substring-tested:

- ``source-map`` with ``module``, or without ``cheap`` -> full source maps
- ``source-map`` with ``cheap`` and no ``module`` -> simple source maps
- no ``source-map`` -> none
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class SourceMapPolicy(str, Enum):
    FULL = "full"
    SIMPLE = "simple"
    NONE = "none"


def is_use_source_map(devtool: str) -> bool:
    return "source-map" in devtool and ("module" in devtool or "cheap" not in devtool)


def is_use_simple_source_map(devtool: str) -> bool:
    return "source-map" in devtool and not is_use_source_map(devtool)


def classify_devtool(devtool: Optional[Union[str, bool]]) -> SourceMapPolicy:
    """Map a devtool setting to a source map policy.

    ``None`` and ``False`` (devtool disabled) classify as ``NONE``.
    """
    if not isinstance(devtool, str):
        return SourceMapPolicy.NONE
    if is_use_source_map(devtool):
        return SourceMapPolicy.FULL
    if is_use_simple_source_map(devtool):
        return SourceMapPolicy.SIMPLE
    return SourceMapPolicy.NONE


__all__ = ["SourceMapPolicy", "is_use_source_map", "is_use_simple_source_map", "classify_devtool"]
