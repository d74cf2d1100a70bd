"""Builtin (native) loader steps.

A builtin step is never merged with its neighbours; it is handed to the
build engine as its loader name plus JSON-encoded options. Loaders that need
extra options computed on the host register an augmenter here.
"""
from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from loadchain.core.exceptions import BuiltinLoaderError, LoaderOptionsError
from loadchain.core.uses.models import (
    BUILTIN_LOADER_PREFIX,
    BuiltinLoaderUse,
    LoaderSpec,
    is_builtin_loader,
)
from loadchain.core.uses.options import stringify_json

if TYPE_CHECKING:
    from loadchain.core.context import BuildContext

logger = logging.getLogger(__name__)

SASS_LOADER = f"{BUILTIN_LOADER_PREFIX}sass-loader"
SASS_EXE_PATH_KEY = "__exePath"

OptionsAugmenter = Callable[[Any, "BuildContext"], Any]

BUILTIN_OPTION_AUGMENTERS: Dict[str, OptionsAugmenter] = {}

_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "armv6l": "arm",
    "armv7l": "arm",
    "arm": "arm",
    "ppc64le": "ppc64",
    "s390x": "s390x",
}


def register_builtin_augmenter(name: str) -> Callable[[OptionsAugmenter], OptionsAugmenter]:
    """Register an options augmenter for the builtin loader ``name``."""

    def decorator(func: OptionsAugmenter) -> OptionsAugmenter:
        BUILTIN_OPTION_AUGMENTERS[name] = func
        return func

    return decorator


def node_platform(raw: Optional[str] = None) -> str:
    """Map ``sys.platform`` to Node's ``process.platform`` names."""
    value = raw if raw is not None else sys.platform
    for prefix in ("linux", "freebsd", "openbsd"):
        if value.startswith(prefix):
            return prefix
    if value in ("win32", "cygwin", "msys"):
        return "win32"
    return value


def node_arch(raw: Optional[str] = None) -> str:
    """Map ``platform.machine()`` to Node's ``process.arch`` names."""
    value = (raw if raw is not None else platform.machine()).lower()
    return _ARCH_ALIASES.get(value, value)


def sass_executable_request(plat: Optional[str] = None, arch: Optional[str] = None) -> str:
    plat = plat or node_platform()
    arch = arch or node_arch()
    suffix = ".bat" if plat == "win32" else ""
    return f"sass-embedded-{plat}-{arch}/dart-sass-embedded/dart-sass-embedded{suffix}"


@register_builtin_augmenter(SASS_LOADER)
def inject_sass_executable(options: Any, context: "BuildContext") -> Dict[str, Any]:
    if options is None:
        options = {}
    if not isinstance(options, dict):
        raise LoaderOptionsError(
            f"{SASS_LOADER} options must be an object, got {type(options).__name__}",
            context={"loader": SASS_LOADER, "type": type(options).__name__},
        )

    if context.sass_executable:
        exe_path = str(Path(context.context_dir) / context.sass_executable)
    else:
        exe_path = context.resolver.resolve(sass_executable_request(), context.context_dir)

    options[SASS_EXE_PATH_KEY] = exe_path
    return options


def materialize_builtin_use(spec: LoaderSpec, context: "BuildContext") -> BuiltinLoaderUse:
    """Build the descriptor for one builtin loader step.

    Absent options serialize as ``"{}"`` so the engine always receives
    parseable JSON text.
    """
    if not is_builtin_loader(spec.loader):
        raise BuiltinLoaderError(
            f"Not a builtin loader: {spec.loader!r}",
            context={"loader": spec.loader},
        )

    options = spec.options
    augmenter = BUILTIN_OPTION_AUGMENTERS.get(spec.loader)
    if augmenter is not None:
        options = augmenter(options, context)

    encoded = stringify_json({} if options is None else options)
    logger.debug("Materialized builtin loader %s", spec.loader)
    return BuiltinLoaderUse(builtin_loader=spec.loader, options=encoded)


__all__ = [
    "SASS_LOADER",
    "SASS_EXE_PATH_KEY",
    "BUILTIN_OPTION_AUGMENTERS",
    "register_builtin_augmenter",
    "node_platform",
    "node_arch",
    "sass_executable_request",
    "inject_sass_executable",
    "materialize_builtin_use",
]
