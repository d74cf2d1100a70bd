"""Timing spans for config loading, chain compilation and CLI dispatch.

``span()`` costs nothing until a :class:`Profiler` is bound to the current
context via ``enable_profiler()`` (the CLI does this for ``--profile``).
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from time import perf_counter
from typing import Any, Dict, Iterator, List, Tuple


_current: ContextVar["Profiler | None"] = ContextVar("loadchain_profiler", default=None)


@dataclass(frozen=True)
class SpanRecord:
    name: str
    duration_ms: float
    depth: int
    meta: Dict[str, Any] = field(default_factory=dict)


class Profiler:
    """Records finished spans in completion order (children before parents)."""

    def __init__(self) -> None:
        self._records: List[SpanRecord] = []
        self._open = 0

    @property
    def spans(self) -> List[SpanRecord]:
        return list(self._records)

    @contextmanager
    def span(self, name: str, **meta: Any) -> Iterator[None]:
        depth = self._open
        self._open += 1
        started = perf_counter()
        try:
            yield
        finally:
            elapsed = (perf_counter() - started) * 1000.0
            self._open -= 1
            self._records.append(SpanRecord(name, elapsed, depth, dict(meta)))

    def totals(self) -> Dict[str, Tuple[int, float]]:
        """Per span name: (call count, summed milliseconds)."""
        out: Dict[str, Tuple[int, float]] = {}
        for record in self._records:
            calls, total = out.get(record.name, (0, 0.0))
            out[record.name] = (calls + 1, total + record.duration_ms)
        return out

    def summary_ms(self) -> Dict[str, float]:
        return {name: total for name, (_, total) in self.totals().items()}

    def format_summary(self) -> List[str]:
        ranked = sorted(self.totals().items(), key=lambda item: -item[1][1])
        return [f"  {name}: {total:.2f} ({calls}x)" for name, (calls, total) in ranked]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spans": [asdict(record) for record in self._records],
            "summary_ms": self.summary_ms(),
        }


@contextmanager
def enable_profiler(profiler: Profiler) -> Iterator[Profiler]:
    token = _current.set(profiler)
    try:
        yield profiler
    finally:
        _current.reset(token)


@contextmanager
def span(name: str, **meta: Any) -> Iterator[None]:
    profiler = _current.get()
    if profiler is None:
        yield
    else:
        with profiler.span(name, **meta):
            yield


__all__ = ["Profiler", "SpanRecord", "enable_profiler", "span"]
