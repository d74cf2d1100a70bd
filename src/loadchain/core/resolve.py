"""Loader path resolution.

Resolution turns a loader request path (``./my-loader``, ``babel-loader``,
``/abs/loader.js``) into an absolute file path against the build context.
This is a small lookup over the filesystem, not a full Node resolver:

- absolute and ``./``/``../`` relative requests are checked as a file, then
  with each configured extension, then as a directory
- bare requests are looked up in ``node_modules`` walking up from the
  context, then in the extra ``resolve.modules`` roots
- a directory resolves through ``package.json`` ``main``, else ``index``
  with each extension

Every failure raises :class:`LoaderResolutionError`. Nothing is retried.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Protocol, Sequence, Union

from loadchain.core.exceptions import LoaderResolutionError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".js", ".cjs", ".mjs", ".json")


class LoaderResolver(Protocol):
    def resolve(self, request: str, context: Path) -> str: ...


def _is_path_request(request: str) -> bool:
    return (
        os.path.isabs(request)
        or request in (".", "..")
        or request.startswith(("./", "../", ".\\", "..\\"))
    )


class FilesystemLoaderResolver:
    """Resolve loader requests against the local filesystem."""

    def __init__(
        self,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        modules: Iterable[Union[str, Path]] = (),
    ) -> None:
        self.extensions = tuple(extensions)
        self.modules = [Path(m) for m in modules]

    def resolve(self, request: str, context: Path) -> str:
        if not request:
            raise LoaderResolutionError(
                "Cannot resolve an empty loader request",
                loader=request,
                context={"context": str(context)},
            )

        context = Path(context)
        if _is_path_request(request):
            candidates = [context / request]
        else:
            candidates = [root / request for root in self._module_roots(context)]

        for candidate in candidates:
            found = self._try_file(candidate) or self._try_directory(candidate)
            if found is not None:
                resolved = str(found.resolve())
                logger.debug("Resolved loader %s -> %s", request, resolved)
                return resolved

        raise LoaderResolutionError(
            f"Cannot resolve loader '{request}' from {context}",
            loader=request,
            context={
                "context": str(context),
                "searched": [str(c) for c in candidates],
            },
        )

    def _module_roots(self, context: Path) -> List[Path]:
        roots: List[Path] = []
        current = context.resolve()
        for directory in (current, *current.parents):
            if directory.name == "node_modules":
                continue
            roots.append(directory / "node_modules")
        for extra in self.modules:
            roots.append(extra if extra.is_absolute() else context / extra)
        return roots

    def _try_file(self, path: Path) -> Optional[Path]:
        if path.is_file():
            return path
        for ext in self.extensions:
            with_ext = path.with_name(path.name + ext)
            if with_ext.is_file():
                return with_ext
        return None

    def _try_directory(self, path: Path) -> Optional[Path]:
        if not path.is_dir():
            return None

        main = self._package_main(path / "package.json")
        if main:
            target = path / main
            found = self._try_file(target) or self._try_index(target)
            if found is not None:
                return found

        return self._try_index(path)

    def _try_index(self, directory: Path) -> Optional[Path]:
        if not directory.is_dir():
            return None
        for ext in self.extensions:
            index = directory / f"index{ext}"
            if index.is_file():
                return index
        return None

    @staticmethod
    def _package_main(package_json: Path) -> Optional[str]:
        if not package_json.is_file():
            return None
        try:
            data = json.loads(package_json.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.debug("Ignoring unreadable %s: %s", package_json, exc)
            return None
        main = data.get("main") if isinstance(data, dict) else None
        return main if isinstance(main, str) and main else None


class CallableLoaderResolver:
    """Adapt a plain ``(request, context) -> path`` function to a resolver."""

    def __init__(self, func: Callable[[str, Path], str]) -> None:
        self._func = func

    def resolve(self, request: str, context: Path) -> str:
        return self._func(request, Path(context))


__all__ = [
    "DEFAULT_EXTENSIONS",
    "LoaderResolver",
    "FilesystemLoaderResolver",
    "CallableLoaderResolver",
]
