from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_LOADCHAIN_HANDLER: logging.Handler | None = None
_CONFIGURED_KEY: str | None = None
_JSON_MODE_NULL_HANDLER_INSTALLED: bool = False

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    value = logging.getLevelName(str(name).upper())
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install the Loadchain handler on the ``loadchain`` logger.

    Logs go to ``log_path`` when given, else to stderr. Idempotent for the same
    (level, path); switching either replaces the previously installed handler.
    """
    global _LOADCHAIN_HANDLER, _CONFIGURED_KEY

    key = f"{level.upper()}:{Path(log_path).resolve() if log_path else '<stderr>'}"
    if _CONFIGURED_KEY == key and _LOADCHAIN_HANDLER is not None:
        return

    logger = logging.getLogger("loadchain")
    if _LOADCHAIN_HANDLER is not None:
        logger.removeHandler(_LOADCHAIN_HANDLER)
        _LOADCHAIN_HANDLER.close()
        _LOADCHAIN_HANDLER = None

    handler: logging.Handler
    if log_path:
        path = Path(log_path).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))

    logger.setLevel(_level_from_name(level))
    logger.addHandler(handler)

    _LOADCHAIN_HANDLER = handler
    _CONFIGURED_KEY = key


def suppress_lastresort_in_json_mode() -> None:
    """Keep stdlib's lastResort handler from writing into ``--json`` output.

    Ensures the root logger has at least a NullHandler when it has none.
    """
    global _JSON_MODE_NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER_INSTALLED:
        return
    root.addHandler(logging.NullHandler())
    _JSON_MODE_NULL_HANDLER_INSTALLED = True


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by :func:`configure_logging`."""
    global _LOADCHAIN_HANDLER, _CONFIGURED_KEY
    logger = logging.getLogger("loadchain")
    if _LOADCHAIN_HANDLER is not None:
        logger.removeHandler(_LOADCHAIN_HANDLER)
        _LOADCHAIN_HANDLER.close()
    logger.setLevel(logging.NOTSET)
    _LOADCHAIN_HANDLER = None
    _CONFIGURED_KEY = None


__all__ = ["configure_logging", "suppress_lastresort_in_json_mode", "reset_logging_for_tests"]
