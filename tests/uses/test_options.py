from __future__ import annotations

import re

import pytest

from loadchain.core.context import BuildContext
from loadchain.core.exceptions import LoaderOptionsError, LoaderResolutionError
from loadchain.core.resolve import CallableLoaderResolver
from loadchain.core.uses.models import LoaderSpec
from loadchain.core.uses.options import (
    resolve_options_query,
    resolve_stringified_loader,
    stringify_json,
)
from loadchain.core.uses.references import IDENT_ALPHABET, generate_random_string


def test_absent_options_have_empty_query(build_context: BuildContext) -> None:
    assert resolve_options_query(LoaderSpec(loader="a"), build_context) == ("", None)
    assert resolve_options_query(LoaderSpec(loader="a", options=None, ident="X"), build_context) == ("", None)
    assert len(build_context.references) == 0


def test_string_options_pass_through_verbatim(build_context: BuildContext) -> None:
    query, ident = resolve_options_query(LoaderSpec(loader="a", options="foo=1&bar"), build_context)
    assert query == "?foo=1&bar"
    assert ident is None
    assert len(build_context.references) == 0


def test_string_options_ignore_explicit_ident(build_context: BuildContext) -> None:
    query, _ = resolve_options_query(LoaderSpec(loader="a", options="foo", ident="X"), build_context)
    assert query == "?foo"
    assert "X" not in build_context.references


def test_explicit_ident_wins_and_records_options(build_context: BuildContext) -> None:
    options = {"a": 1, "ident": "inner"}
    query, ident = resolve_options_query(LoaderSpec(loader="a", options=options, ident="outer"), build_context)
    assert (query, ident) == ("??outer", "outer")
    assert build_context.references.get("outer") is options
    assert "inner" not in build_context.references


def test_options_ident_field_is_used(build_context: BuildContext) -> None:
    options = {"a": 1, "ident": "X"}
    query, _ = resolve_options_query(LoaderSpec(loader="a", options=options), build_context)
    assert query == "??X"
    assert build_context.references.snapshot() == {"X": options}


def test_structured_options_get_generated_ident(build_context: BuildContext, idents) -> None:
    options = {"a": 1}
    query, ident = resolve_options_query(LoaderSpec(loader="a", options=options), build_context)
    assert ident == "ident00000"
    assert query == "??ident00000"
    assert idents.calls == [10]
    assert build_context.references.get("ident00000") == {"a": 1}


def test_array_options_are_structured(build_context: BuildContext) -> None:
    query, ident = resolve_options_query(LoaderSpec(loader="a", options=[1, 2]), build_context)
    assert query == f"??{ident}"
    assert build_context.references.get(ident) == [1, 2]


def test_default_generator_yields_ten_alphanumerics(tmp_path, fake_resolver) -> None:
    context = BuildContext(context_dir=tmp_path, resolver=fake_resolver)
    query, ident = resolve_options_query(LoaderSpec(loader="a", options={"a": 1}), context)
    assert re.fullmatch(r"\?\?[A-Za-z0-9]{10}", query)
    assert context.references.snapshot() == {ident: {"a": 1}}


@pytest.mark.parametrize(
    "options, expected",
    [(3, "?3"), (2.5, "?2.5"), (2.0, "?2"), (True, "?true"), (False, "?false")],
)
def test_primitive_options_are_json_encoded(build_context: BuildContext, options, expected) -> None:
    query, ident = resolve_options_query(LoaderSpec(loader="a", options=options), build_context)
    assert (query, ident) == (expected, None)
    assert len(build_context.references) == 0


def test_primitive_options_with_explicit_ident_skip_table(build_context: BuildContext) -> None:
    query, _ = resolve_options_query(LoaderSpec(loader="a", options=5, ident="N"), build_context)
    assert query == "??N"
    assert "N" not in build_context.references


def test_invalid_options_shape_raises(build_context: BuildContext) -> None:
    with pytest.raises(LoaderOptionsError):
        resolve_options_query(LoaderSpec(loader="a", options={1, 2}), build_context)


def test_one_table_write_per_structured_spec(build_context: BuildContext) -> None:
    writes = []
    original_put = build_context.references.put

    def _put(ident, value):
        writes.append(ident)
        original_put(ident, value)

    build_context.references.put = _put  # type: ignore[method-assign]
    for options in (None, "q", {"a": 1}, {"ident": "Y"}, [1], 7):
        resolve_options_query(LoaderSpec(loader="a", options=options), build_context)
    assert writes == ["ident00000", "Y", "ident00001"]


def test_stringified_loader_joins_path_query_fragment(build_context: BuildContext, resolved_paths) -> None:
    spec = LoaderSpec(loader="my-loader?ignored#frag", options="x=1")
    assert resolve_stringified_loader(spec, build_context) == "/abs/my-loader?x=1#frag"
    assert resolved_paths == {"my-loader": "/abs/my-loader"}


def test_stringified_loader_drops_embedded_query_without_options(build_context: BuildContext) -> None:
    spec = LoaderSpec(loader="my-loader?embedded")
    assert resolve_stringified_loader(spec, build_context) == "/abs/my-loader"


def test_resolution_failure_propagates(tmp_path) -> None:
    def _fail(request, context):
        raise LoaderResolutionError(f"Cannot resolve loader '{request}'", loader=request)

    context = BuildContext(context_dir=tmp_path, resolver=CallableLoaderResolver(_fail))
    with pytest.raises(LoaderResolutionError) as excinfo:
        resolve_stringified_loader(LoaderSpec(loader="missing-loader", options={"a": 1}), context)
    assert excinfo.value.loader == "missing-loader"
    assert len(context.references) == 0


def test_stringify_json_matches_js_compact_form() -> None:
    assert stringify_json({"a": [1, 2.0], "b": "é"}) == '{"a":[1,2],"b":"é"}'


def test_generate_random_string_alphabet() -> None:
    value = generate_random_string(64)
    assert len(value) == 64
    assert set(value) <= set(IDENT_ALPHABET)
    assert len(IDENT_ALPHABET) == 62


@pytest.mark.parametrize(("own_ident", "expected"), [(True, "??true"), (7, "??7"), (1.0, "??1")])
def test_non_string_options_ident_is_json_encoded(build_context: BuildContext, own_ident, expected) -> None:
    options = {"a": 1, "ident": own_ident}
    query, ident = resolve_options_query(LoaderSpec(loader="a", options=options), build_context)
    assert query == expected
    assert build_context.references.get(ident) is options
