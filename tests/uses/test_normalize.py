from __future__ import annotations

import pytest

from loadchain.core.exceptions import RuleUseValidationError
from loadchain.core.uses.models import LoaderSpec
from loadchain.core.uses.normalize import normalize_uses


def test_bare_string_becomes_loader_spec() -> None:
    assert normalize_uses("style-loader") == [LoaderSpec(loader="style-loader")]


def test_single_object_is_wrapped_in_list() -> None:
    specs = normalize_uses({"loader": "css-loader", "options": {"modules": True}, "ident": "css"})
    assert specs == [LoaderSpec(loader="css-loader", options={"modules": True}, ident="css")]


def test_mixed_list_keeps_order() -> None:
    specs = normalize_uses(["a", {"loader": "b", "options": "q"}, LoaderSpec(loader="c")])
    assert [s.loader for s in specs] == ["a", "b", "c"]
    assert specs[1].options == "q"


def test_empty_list_yields_empty_list() -> None:
    assert normalize_uses([]) == []


def test_unsupported_item_raises() -> None:
    with pytest.raises(RuleUseValidationError):
        normalize_uses([42])
