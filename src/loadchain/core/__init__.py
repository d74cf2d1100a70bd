"""Loadchain core library package.

Compiles module rule ``use`` declarations into build engine descriptors.
The public entry points are re-exported from :mod:`loadchain.core.uses`.
"""

from . import exceptions  # noqa: F401
from .devtool import SourceMapPolicy, classify_devtool, is_use_simple_source_map, is_use_source_map

__all__ = [
    "exceptions",
    "SourceMapPolicy",
    "classify_devtool",
    "is_use_source_map",
    "is_use_simple_source_map",
]
