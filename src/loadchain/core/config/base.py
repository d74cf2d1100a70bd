"""Base class for section-scoped configuration accessors."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from loadchain.core.utils.paths import resolve_project_root

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Typed view over one top-level config section.

    Usage:
        class ResolveConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "resolve"

            @cached_property
            def extensions(self) -> list[str]:
                return list(self.section.get("extensions") or [])
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self._repo_root = Path(repo_root) if repo_root else None
        self._config = get_cached_config(repo_root=self._repo_root)

    @property
    def repo_root(self) -> Path:
        return self._repo_root or resolve_project_root()

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key this accessor reads."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        return self._config.get(self._config_section(), {}) or {}


__all__ = ["BaseDomainConfig"]
