"""Project root and config directory lookup."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

PROJECT_ROOT_ENV = "LOADCHAIN_PROJECT_ROOT"
PROJECT_CONFIG_DIR = ".loadchain"

# Any of these marks a project root when walking up from the cwd.
_ROOT_MARKERS = (PROJECT_CONFIG_DIR, "package.json", ".git")


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Resolve the project root.

    Resolution priority:
    1. ``LOADCHAIN_PROJECT_ROOT`` environment variable
    2. Nearest ancestor of ``start`` (default: cwd) holding ``.loadchain/``,
       ``package.json`` or ``.git``
    3. ``start`` itself
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        return Path(env_root).expanduser().resolve()

    current = Path(start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if any((directory / marker).exists() for marker in _ROOT_MARKERS):
            return directory
    return current


def get_project_config_dir(repo_root: Path) -> Path:
    return Path(repo_root) / PROJECT_CONFIG_DIR


__all__ = ["PROJECT_ROOT_ENV", "PROJECT_CONFIG_DIR", "resolve_project_root", "get_project_config_dir"]
