from __future__ import annotations

import json

import pytest

import loadchain.core.uses.builtin as builtin_mod
from loadchain.core.context import BuildContext
from loadchain.core.exceptions import BuiltinLoaderError, LoaderOptionsError
from loadchain.core.uses.builtin import (
    BUILTIN_OPTION_AUGMENTERS,
    SASS_LOADER,
    materialize_builtin_use,
    node_arch,
    node_platform,
    register_builtin_augmenter,
    sass_executable_request,
)
from loadchain.core.uses.models import LoaderSpec


@pytest.fixture
def linux_x64(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(builtin_mod, "node_platform", lambda raw=None: "linux")
    monkeypatch.setattr(builtin_mod, "node_arch", lambda raw=None: "x64")


def test_non_builtin_loader_is_an_invariant_violation(build_context: BuildContext) -> None:
    with pytest.raises(BuiltinLoaderError) as excinfo:
        materialize_builtin_use(LoaderSpec(loader="sass-loader"), build_context)
    assert isinstance(excinfo.value, AssertionError)
    assert excinfo.value.context == {"loader": "sass-loader"}


def test_absent_options_serialize_as_empty_object(build_context: BuildContext) -> None:
    use = materialize_builtin_use(LoaderSpec(loader="builtin:swc-loader"), build_context)
    assert use.builtin_loader == "builtin:swc-loader"
    assert use.options == "{}"


def test_other_builtins_are_not_augmented(build_context: BuildContext) -> None:
    options = {"a": 1}
    use = materialize_builtin_use(LoaderSpec(loader="builtin:lightningcss-loader", options=options), build_context)
    assert use.options == '{"a":1}'
    assert options == {"a": 1}


def test_sass_loader_gets_executable_path(build_context: BuildContext, linux_x64, resolved_paths) -> None:
    options = {"x": 1}
    use = materialize_builtin_use(LoaderSpec(loader=SASS_LOADER, options=options), build_context)

    request = "sass-embedded-linux-x64/dart-sass-embedded/dart-sass-embedded"
    assert resolved_paths == {request: f"/abs/{request}"}
    assert json.loads(use.options) == {"x": 1, "__exePath": f"/abs/{request}"}
    # Options object is updated in place before encoding.
    assert options["__exePath"] == f"/abs/{request}"


def test_sass_loader_without_options(build_context: BuildContext, linux_x64) -> None:
    use = materialize_builtin_use(LoaderSpec(loader=SASS_LOADER), build_context)
    assert json.loads(use.options) == {
        "__exePath": "/abs/sass-embedded-linux-x64/dart-sass-embedded/dart-sass-embedded"
    }


def test_configured_sass_executable_skips_resolution(make_context, resolved_paths, tmp_path) -> None:
    context = make_context(sass_executable="bin/dart-sass-embedded")
    use = materialize_builtin_use(LoaderSpec(loader=SASS_LOADER, options={}), context)
    assert json.loads(use.options)["__exePath"] == str(tmp_path / "bin" / "dart-sass-embedded")
    assert resolved_paths == {}


def test_sass_loader_rejects_string_options(build_context: BuildContext, linux_x64) -> None:
    with pytest.raises(LoaderOptionsError):
        materialize_builtin_use(LoaderSpec(loader=SASS_LOADER, options="indented"), build_context)


def test_windows_executable_has_bat_suffix() -> None:
    assert sass_executable_request("win32", "x64") == (
        "sass-embedded-win32-x64/dart-sass-embedded/dart-sass-embedded.bat"
    )
    assert sass_executable_request("darwin", "arm64").endswith("/dart-sass-embedded")


@pytest.mark.parametrize(
    "raw, expected",
    [("linux", "linux"), ("linux2", "linux"), ("darwin", "darwin"), ("win32", "win32"), ("cygwin", "win32")],
)
def test_node_platform_names(raw: str, expected: str) -> None:
    assert node_platform(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("x86_64", "x64"), ("AMD64", "x64"), ("aarch64", "arm64"), ("arm64", "arm64"), ("i686", "ia32"), ("armv7l", "arm")],
)
def test_node_arch_names(raw: str, expected: str) -> None:
    assert node_arch(raw) == expected


def test_registered_augmenter_runs_before_encoding(build_context: BuildContext, monkeypatch) -> None:
    monkeypatch.setitem(BUILTIN_OPTION_AUGMENTERS, "builtin:custom-loader", None)

    @register_builtin_augmenter("builtin:custom-loader")
    def _augment(options, context):
        return {**(options or {}), "context": str(context.context_dir)}

    use = materialize_builtin_use(LoaderSpec(loader="builtin:custom-loader"), build_context)
    assert json.loads(use.options) == {"context": str(build_context.context_dir)}
