"""Data model for loader use compilation.

``LoaderSpec`` is one declared loader step; ``JsLoaderUse`` and
``BuiltinLoaderUse`` are the two descriptor shapes handed to the build engine.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

BUILTIN_LOADER_PREFIX = "builtin:"

# path, then an optional ?query, then an optional #fragment. A NUL escapes the
# following character so paths may contain literal "?" or "#".
_PATH_QUERY_FRAGMENT = re.compile(
    r"^((?:\0.|[^?#\0])*)(\?(?:\0.|[^#\0])*)?(#.*)?$", re.DOTALL
)
_NUL_ESCAPE = re.compile(r"\0(.)", re.DOTALL)


@dataclass(frozen=True)
class LoaderSpec:
    """One user-declared loader step.

    ``options`` is ``None`` when absent, a query string, a structured value
    (dict/list) or a JSON primitive. ``ident`` names the options entry in the
    rule set references table.
    """

    loader: str
    options: Any = None
    ident: Optional[str] = None

    @property
    def is_builtin(self) -> bool:
        return is_builtin_loader(self.loader)


@dataclass(frozen=True)
class ParsedLoaderRequest:
    path: str
    query: str = ""
    fragment: str = ""

    def __str__(self) -> str:
        return f"{self.path}{self.query}{self.fragment}"


@dataclass(frozen=True)
class JsLoaderUse:
    """A run of ordinary loaders composed into one identifier."""

    identifier: str

    def to_raw(self) -> Dict[str, Any]:
        return {"jsLoader": {"identifier": self.identifier}}


@dataclass(frozen=True)
class BuiltinLoaderUse:
    """A single native loader with its JSON-encoded options."""

    builtin_loader: str
    options: str

    def to_raw(self) -> Dict[str, Any]:
        return {"builtinLoader": self.builtin_loader, "options": self.options}


UseDescriptor = Union[JsLoaderUse, BuiltinLoaderUse]


def is_builtin_loader(loader: Any) -> bool:
    return isinstance(loader, str) and loader.startswith(BUILTIN_LOADER_PREFIX)


def parse_path_query_fragment(request: str) -> ParsedLoaderRequest:
    """Split a loader request into path, query and fragment.

    Example:
        >>> parse_path_query_fragment("./loader.js?flag#frag")
        ParsedLoaderRequest(path='./loader.js', query='?flag', fragment='#frag')
    """
    match = _PATH_QUERY_FRAGMENT.match(request)
    if match is None:
        return ParsedLoaderRequest(path=request)
    path, query, fragment = match.groups()
    return ParsedLoaderRequest(
        path=_NUL_ESCAPE.sub(r"\1", path or ""),
        query=_NUL_ESCAPE.sub(r"\1", query or ""),
        fragment=fragment or "",
    )


__all__ = [
    "BUILTIN_LOADER_PREFIX",
    "LoaderSpec",
    "ParsedLoaderRequest",
    "JsLoaderUse",
    "BuiltinLoaderUse",
    "UseDescriptor",
    "is_builtin_loader",
    "parse_path_query_fragment",
]
