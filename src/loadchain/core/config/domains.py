"""Section accessors for build, resolve and logging configuration."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import List, Optional

from loadchain.core.resolve import DEFAULT_EXTENSIONS

from .base import BaseDomainConfig


class BuildConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "build"

    @cached_property
    def context_dir(self) -> Path:
        """Build context directory; relative values are taken from the repo root."""
        raw = Path(str(self.section.get("context") or "."))
        return raw if raw.is_absolute() else (self.repo_root / raw).resolve()

    @cached_property
    def devtool(self) -> str:
        value = self.section.get("devtool")
        return value if isinstance(value, str) else ""

    @cached_property
    def sass_executable(self) -> Optional[str]:
        value = self.section.get("sassExecutable")
        return str(value) if value else None


class ResolveConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "resolve"

    @cached_property
    def extensions(self) -> List[str]:
        return list(self.section.get("extensions") or DEFAULT_EXTENSIONS)

    @cached_property
    def modules(self) -> List[str]:
        return [str(m) for m in self.section.get("modules") or []]


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level") or "WARNING").upper()

    @cached_property
    def path(self) -> Optional[Path]:
        raw = self.section.get("path")
        if not raw:
            return None
        p = Path(str(raw))
        return p if p.is_absolute() else self.repo_root / p


__all__ = ["BuildConfig", "ResolveConfig", "LoggingConfig"]
