"""Centralized configuration caching.

Loaded configuration is cached per project root. The cache key also
fingerprints ``LOADCHAIN_*`` env vars and project config file mtimes so a
long-running process (or a test) never sees stale config.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from loadchain.core.utils.paths import get_project_config_dir, resolve_project_root
from loadchain.core.utils.profiling import span
from loadchain.core.utils.yaml_io import iter_yaml_files

_config_cache: Dict[str, Dict[str, Any]] = {}
_cache_clearers: Dict[str, Callable[[], None]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _cache_key(repo_root: Path) -> str:
    env_items = sorted((k, v) for k, v in os.environ.items() if k.startswith("LOADCHAIN_"))
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files = []
    for p in iter_yaml_files(get_project_config_dir(repo_root) / "config"):
        st = p.stat()
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Get merged (unvalidated) configuration, loading it on first use.

    Returns the same dict instance for the same key; treat it as immutable.
    """
    from .manager import ConfigManager

    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root)
    with span("config.cache.get"):
        if key not in _config_cache:
            with span("config.cache.miss"):
                manager = ConfigManager(repo_root=normalized_root)
                _config_cache[key] = manager._load_config_uncached(validate=False)
        return _config_cache[key]


def clear_all_caches() -> None:
    """Clear the config cache and every registered derived cache."""
    _config_cache.clear()
    for clearer in list(_cache_clearers.values()):
        clearer()


def register_cache_clearer(name: str, clearer: Callable[[], None]) -> None:
    _cache_clearers[name] = clearer


def is_cached(repo_root: Optional[Path] = None) -> bool:
    return _cache_key(_normalize_repo_root(repo_root)) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "register_cache_clearer", "is_cached"]
