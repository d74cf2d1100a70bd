"""Loadchain configuration system.

Usage:
    from loadchain.core.config import ConfigManager, BuildConfig

    manager = ConfigManager(repo_root=Path("/path/to/project"))
    config = manager.load_config()

    build = BuildConfig(repo_root=Path("/path/to/project"))
    context_dir = build.context_dir
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import get_cached_config, clear_all_caches, is_cached
from .base import BaseDomainConfig
from .domains import BuildConfig, ResolveConfig, LoggingConfig

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "BuildConfig",
    "ResolveConfig",
    "LoggingConfig",
]
