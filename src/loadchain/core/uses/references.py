"""Rule set references: ident -> structured loader options.

The table is owned by the build context and outlives every descriptor that
points into it. Loader option resolution only ever calls :meth:`put`.
"""
from __future__ import annotations

import logging
import random
import string
import threading
from typing import Any, Callable, Dict, Iterator

logger = logging.getLogger(__name__)

IDENT_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
IDENT_LENGTH = 10

IdentGenerator = Callable[[int], str]


def generate_random_string(length: int) -> str:
    """Return ``length`` characters drawn uniformly from ``A-Za-z0-9``."""
    return "".join(random.choice(IDENT_ALPHABET) for _ in range(length))


class RuleSetReferences:
    """Ident to options mapping shared by every rule compiled in a build context.

    Compilation only adds entries. Reusing an ident replaces the earlier
    options (last write wins, as with a JS ``Map``). Writes are guarded by a
    lock so rules may be compiled from several threads.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def put(self, ident: str, value: Any) -> None:
        with self._lock:
            if ident in self._entries and self._entries[ident] is not value:
                logger.debug("Replacing options reference %s", ident)
            self._entries[ident] = value

    def get(self, ident: str, default: Any = None) -> Any:
        return self._entries.get(ident, default)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._entries)

    def __contains__(self, ident: object) -> bool:
        return ident in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())


__all__ = [
    "IDENT_ALPHABET",
    "IDENT_LENGTH",
    "IdentGenerator",
    "generate_random_string",
    "RuleSetReferences",
]
