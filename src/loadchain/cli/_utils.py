"""Shared CLI utilities."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from loadchain.core.config import LoggingConfig
from loadchain.core.exceptions import ConfigError
from loadchain.core.utils.paths import resolve_project_root
from loadchain.core.utils.stdlib_logging import configure_logging, suppress_lastresort_in_json_mode
from loadchain.core.utils.yaml_io import read_yaml


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get project root from ``--repo-root`` or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()


def setup_logging(repo_root: Path, *, json_mode: bool = False) -> None:
    """Configure logging from the ``logging`` config section.

    In JSON mode without a log file nothing is written to stderr.
    """
    cfg = LoggingConfig(repo_root=repo_root)
    if json_mode and cfg.path is None:
        suppress_lastresort_in_json_mode()
        return
    configure_logging(level=cfg.level, log_path=cfg.path)


def load_structured_file(path: Path) -> Any:
    """Load a JSON (``.json``) or YAML file."""
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"File not found: {path}", context={"path": str(path)})
    if path.suffix == ".json":
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {path}: {exc}", context={"path": str(path)}) from exc
    return read_yaml(path, default=None, raise_on_error=True)


__all__ = ["get_repo_root", "setup_logging", "load_structured_file"]
