"""Deep merge used to layer configuration sources.

Arrays follow override semantics controlled by a marker in the first element:
- no marker: the override array replaces the base array
- ``"+"``: override items (without the marker) are appended to the base
- ``"="``: explicit replace (same as no marker)
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` onto ``base`` without mutating either.

    Example:
        >>> deep_merge({"resolve": {"modules": ["a"]}}, {"resolve": {"modules": ["+", "b"]}})
        {'resolve': {'modules': ['a', 'b']}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            result[key] = merge_arrays(current, value)
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    if override and override[0] == "+":
        return list(base) + list(override[1:])
    if override and override[0] == "=":
        return list(override[1:])
    return list(override)


__all__ = ["deep_merge", "merge_arrays"]
