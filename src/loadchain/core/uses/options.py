"""Loader option resolution.

Turns one ordinary loader spec into ``resolvedPath + query + fragment``.
Structured options are not encoded into the identifier; they are stored in
the rule set references table and the query carries ``??<ident>`` instead.

Query precedence:
1. absent options -> no query
2. string options -> ``?<options>`` verbatim
3. explicit ``ident`` on the spec -> ``??<ident>``
4. ``ident`` inside dict options -> ``??<ident>``
5. other structured options -> ``??<random ident>``
6. JSON primitives -> ``?<json>``

Cases 3-5 write the options into the table when they are structured.
"""
from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING, Any, Optional, Tuple

from loadchain.core.exceptions import LoaderOptionsError
from loadchain.core.uses.models import LoaderSpec, parse_path_query_fragment
from loadchain.core.uses.references import IDENT_LENGTH

if TYPE_CHECKING:
    from loadchain.core.context import BuildContext

logger = logging.getLogger(__name__)

_PRIMITIVES = (bool, int, float)


def is_structured_options(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def stringify_json(value: Any) -> str:
    """Compact JSON text, matching ``JSON.stringify`` output for plain data."""
    return json.dumps(
        _js_number(value), separators=(",", ":"), ensure_ascii=False, default=_reject
    )


def _js_number(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _js_number(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_js_number(v) for v in value]
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        if value.is_integer():
            return int(value)
    return value


def _reject(value: Any) -> Any:
    raise LoaderOptionsError(
        f"Loader options contain a value that is not JSON data: {type(value).__name__}",
        context={"type": type(value).__name__},
    )


def resolve_options_query(
    spec: LoaderSpec, context: "BuildContext"
) -> Tuple[str, Optional[str]]:
    """Return ``(query, ident)`` for ``spec`` and record structured options."""
    options = spec.options
    ident: Optional[str] = None

    if options is None:
        return "", None
    if isinstance(options, str):
        return "?" + options, None

    if not (is_structured_options(options) or isinstance(options, _PRIMITIVES)):
        raise LoaderOptionsError(
            f"Unsupported options for loader '{spec.loader}': {type(options).__name__}",
            context={"loader": spec.loader, "type": type(options).__name__},
        )

    if spec.ident:
        ident = spec.ident
    elif isinstance(options, dict) and options.get("ident"):
        own = options["ident"]
        ident = own if isinstance(own, str) else stringify_json(own)
    elif is_structured_options(options):
        ident = context.ident_generator(IDENT_LENGTH)
        logger.debug("Generated options ident %s for loader %s", ident, spec.loader)
    else:
        return "?" + stringify_json(options), None

    if is_structured_options(options):
        context.references.put(ident, options)
    return "??" + ident, ident


def resolve_stringified_loader(spec: LoaderSpec, context: "BuildContext") -> str:
    """Resolve one loader to its identifier segment.

    Path resolution failures propagate as ``LoaderResolutionError``.
    """
    parsed = parse_path_query_fragment(spec.loader)
    resolved_path = context.resolver.resolve(parsed.path, context.context_dir)
    query, _ = resolve_options_query(spec, context)
    return resolved_path + query + parsed.fragment


__all__ = [
    "is_structured_options",
    "stringify_json",
    "resolve_options_query",
    "resolve_stringified_loader",
]
