"""Loader use compilation.

Usage:
    from loadchain.core.context import BuildContext
    from loadchain.core.uses import compose_rule_uses, to_raw_uses

    context = BuildContext.from_config(repo_root)
    raw = to_raw_uses(compose_rule_uses(["style-loader", "builtin:sass-loader"], context))
"""
from __future__ import annotations

from .builtin import (
    BUILTIN_OPTION_AUGMENTERS,
    SASS_LOADER,
    materialize_builtin_use,
    register_builtin_augmenter,
)
from .compiler import compile_module_rule, compile_module_rules, compose_rule_uses, to_raw_uses
from .models import (
    BUILTIN_LOADER_PREFIX,
    BuiltinLoaderUse,
    JsLoaderUse,
    LoaderSpec,
    ParsedLoaderRequest,
    UseDescriptor,
    is_builtin_loader,
    parse_path_query_fragment,
)
from .normalize import normalize_uses
from .options import resolve_options_query, resolve_stringified_loader
from .partition import compose_js_use, partition_uses
from .references import RuleSetReferences, generate_random_string

__all__ = [
    "BUILTIN_LOADER_PREFIX",
    "BUILTIN_OPTION_AUGMENTERS",
    "SASS_LOADER",
    "LoaderSpec",
    "ParsedLoaderRequest",
    "JsLoaderUse",
    "BuiltinLoaderUse",
    "UseDescriptor",
    "RuleSetReferences",
    "is_builtin_loader",
    "parse_path_query_fragment",
    "normalize_uses",
    "resolve_options_query",
    "resolve_stringified_loader",
    "compose_js_use",
    "partition_uses",
    "materialize_builtin_use",
    "register_builtin_augmenter",
    "generate_random_string",
    "compose_rule_uses",
    "compile_module_rule",
    "compile_module_rules",
    "to_raw_uses",
]
