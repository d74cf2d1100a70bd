"""
Loadchain configuration management (YAML layers + env overrides + schema).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import yaml

from loadchain.core.exceptions import ConfigError
from loadchain.core.config.cache import register_cache_clearer
from loadchain.core.schemas import SchemaValidationError, load_schema, validate_payload
from loadchain.core.utils.merge import deep_merge
from loadchain.core.utils.paths import get_project_config_dir, resolve_project_root
from loadchain.core.utils.profiling import span
from loadchain.core.utils.yaml_io import iter_yaml_files, read_yaml
from loadchain.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "LOADCHAIN_"
CONFIG_SCHEMA = "config.schema.yaml"

# Environment keys that are not config paths.
_RESERVED_ENV_KEYS = {"LOADCHAIN_PROJECT_ROOT"}

register_cache_clearer("schemas", load_schema.cache_clear)


class ConfigManager:
    """Load, merge, and validate Loadchain configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: LOADCHAIN_*
    2. Project config: <repo>/.loadchain/config/*.yaml (alphabetical order)
    3. Bundled defaults: loadchain.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root else resolve_project_root()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = get_project_config_dir(self.repo_root) / "config"

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file must contain a mapping: {path}", context={"path": str(path)}
            )
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            cfg = deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ---- env overrides -------------------------------------------------

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if low in {"null", "none"}:
            return None
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return s
        return s

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[str]:
        segs = raw.split("__") if "__" in raw else raw.split("_")
        if any(seg == "" for seg in segs):
            if strict:
                raise ConfigError(
                    f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                    context={"key": raw},
                )
            return []
        return segs

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV_KEYS:
                continue
            path = self._parse_env_key(key[len(ENV_PREFIX):], strict=strict)
            if path:
                yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Union[Dict[str, Any], Any] = root
        for i, part in enumerate(path):
            if not isinstance(cur, dict):
                raise ConfigError(
                    f"Env override path traverses a non-mapping at '{'.'.join(path[:i])}'",
                    context={"path": ".".join(path)},
                )
            # Case-insensitive match against existing keys keeps camelCase keys reachable.
            existing = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = existing.get(part.lower(), part)
            if i == len(path) - 1:
                cur[key] = value
                return
            cur = cur.setdefault(key, {})

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        for path, typed_value in self._iter_env_overrides(strict=strict):
            self._set_nested(cfg, path, typed_value)

    # ---- loading -------------------------------------------------------

    def validate_schema(self, config: Dict[str, Any]) -> None:
        try:
            validate_payload(config, CONFIG_SCHEMA)
        except SchemaValidationError as exc:
            raise ConfigError(str(exc), context={"errors": exc.errors}) from exc

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        """Merge bundled defaults, project config and env overrides (uncached)."""
        with span("config.load_config.total", validate=validate):
            cfg: Dict[str, Any] = {}
            with span("config.load_config.core"):
                cfg = self._load_directory(self.core_config_dir, cfg)
            with span("config.load_config.project"):
                cfg = self._load_directory(self.project_config_dir, cfg)
            with span("config.load_config.env"):
                self.apply_env_overrides(cfg, strict=validate)
            if validate:
                with span("config.load_config.validate"):
                    self.validate_schema(cfg)
            return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load merged configuration through the shared cache."""
        from loadchain.core.config.cache import get_cached_config

        cfg = get_cached_config(repo_root=self.repo_root)
        if validate:
            _ = list(self._iter_env_overrides(strict=True))
            self.validate_schema(cfg)
        return cfg

    # ---- accessors -----------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get('build.devtool')
            'source-map'
            >>> manager.get('nonexistent.key', 'fallback')
            'fallback'
        """
        current: Any = self.load_config(validate=False)
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


__all__ = ["ConfigManager", "ENV_PREFIX", "CONFIG_SCHEMA"]
