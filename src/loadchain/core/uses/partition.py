"""Split a loader chain at builtin loaders.

Ordinary loaders between two builtin loaders compose into one ``JsLoaderUse``
whose identifier is the ``$``-joined list of resolved loader strings. Each
builtin loader becomes its own ``BuiltinLoaderUse``. Order is preserved and
nothing crosses a builtin boundary.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from loadchain.core.uses.builtin import materialize_builtin_use
from loadchain.core.uses.models import JsLoaderUse, LoaderSpec, UseDescriptor
from loadchain.core.uses.options import resolve_stringified_loader
from loadchain.core.utils.profiling import span

if TYPE_CHECKING:
    from loadchain.core.context import BuildContext

logger = logging.getLogger(__name__)

IDENTIFIER_SEPARATOR = "$"


def compose_js_use(
    specs: Sequence[LoaderSpec], context: "BuildContext"
) -> Optional[JsLoaderUse]:
    """Compose a run of ordinary loaders, or ``None`` for an empty run."""
    if not specs:
        return None
    identifier = IDENTIFIER_SEPARATOR.join(
        resolve_stringified_loader(spec, context) for spec in specs
    )
    return JsLoaderUse(identifier=identifier)


def partition_uses(
    specs: Sequence[LoaderSpec], context: "BuildContext"
) -> List[UseDescriptor]:
    """Compile normalized specs into descriptors in declaration order."""
    descriptors: List[UseDescriptor] = []
    run_start = 0

    with span("uses.partition", count=len(specs)):
        for index, spec in enumerate(specs):
            if not spec.is_builtin:
                continue
            js_use = compose_js_use(specs[run_start:index], context)
            if js_use is not None:
                descriptors.append(js_use)
            descriptors.append(materialize_builtin_use(spec, context))
            run_start = index + 1

        tail = compose_js_use(specs[run_start:], context)
        if tail is not None:
            descriptors.append(tail)

    logger.debug("Partitioned %d loader(s) into %d use(s)", len(specs), len(descriptors))
    return descriptors


__all__ = ["IDENTIFIER_SEPARATOR", "compose_js_use", "partition_uses"]
