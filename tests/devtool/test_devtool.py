from __future__ import annotations

import pytest

from loadchain.core.devtool import (
    SourceMapPolicy,
    classify_devtool,
    is_use_simple_source_map,
    is_use_source_map,
)


@pytest.mark.parametrize(
    "devtool, full, simple",
    [
        ("source-map", True, False),
        ("cheap-source-map", False, True),
        ("cheap-module-source-map", True, False),
        ("eval-cheap-source-map", False, True),
        ("eval-cheap-module-source-map", True, False),
        ("inline-source-map", True, False),
        ("hidden-nosources-source-map", True, False),
        ("eval", False, False),
        ("", False, False),
    ],
)
def test_source_map_predicates(devtool: str, full: bool, simple: bool) -> None:
    assert is_use_source_map(devtool) is full
    assert is_use_simple_source_map(devtool) is simple
    assert not (is_use_source_map(devtool) and is_use_simple_source_map(devtool))


@pytest.mark.parametrize(
    "devtool, policy",
    [
        ("source-map", SourceMapPolicy.FULL),
        ("cheap-source-map", SourceMapPolicy.SIMPLE),
        ("eval", SourceMapPolicy.NONE),
        (None, SourceMapPolicy.NONE),
        (False, SourceMapPolicy.NONE),
    ],
)
def test_classify_devtool(devtool, policy: SourceMapPolicy) -> None:
    assert classify_devtool(devtool) is policy


def test_context_exposes_policy(make_context) -> None:
    assert make_context(devtool="cheap-module-source-map").source_map_policy is SourceMapPolicy.FULL
    assert make_context().source_map_policy is SourceMapPolicy.NONE
