"""
Loadchain uses compile command.

SUMMARY: Compile module rules into use descriptors

Reads a JSON or YAML file holding ``module.rules`` (or a bare list of rules),
compiles every rule's ``use`` into build engine descriptors and prints the
compiled rules together with the options references table.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List

from loadchain.cli import (
    OutputFormatter,
    add_json_flag,
    add_repo_root_flag,
    get_repo_root,
    load_structured_file,
    setup_logging,
)
from loadchain.core.context import BuildContext
from loadchain.core.exceptions import RuleUseValidationError
from loadchain.core.uses import compile_module_rules

SUMMARY = "Compile module rules into use descriptors"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("rules_file", help="JSON or YAML file with module.rules or a list of rules")
    parser.add_argument(
        "--context",
        type=str,
        help="Build context directory loaders are resolved from (default: build.context)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _extract_rules(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        module = data.get("module")
        if isinstance(module, dict) and isinstance(module.get("rules"), list):
            return module["rules"]
        if isinstance(data.get("rules"), list):
            return data["rules"]
    raise RuleUseValidationError(
        "Rules file must hold a list of rules, 'rules', or 'module.rules'"
    )


def _print_rule(formatter: OutputFormatter, index: str, rule: Dict[str, Any]) -> None:
    test = rule.get("test", "")
    formatter.text(f"rule {index}" + (f" ({test})" if test else ""))
    for use in rule.get("use") or []:
        if "jsLoader" in use:
            formatter.text_kv("js", use["jsLoader"]["identifier"], prefix="    ")
        else:
            formatter.text_kv(use["builtinLoader"], use["options"], prefix="    ")
    for key in ("oneOf", "rules"):
        for i, nested in enumerate(rule.get(key) or []):
            _print_rule(formatter, f"{index}.{key}[{i}]", nested)


def main(args: argparse.Namespace) -> int:
    """Compile rules - delegates to compile_module_rules."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        setup_logging(repo_root, json_mode=formatter.json_mode)

        rules = _extract_rules(load_structured_file(Path(args.rules_file)))
        context = BuildContext.from_config(
            repo_root,
            context_dir=Path(args.context) if args.context else None,
        )
        compiled = compile_module_rules(rules, context)

        if formatter.json_mode:
            formatter.json_output(
                {"rules": compiled, "references": context.references.snapshot()}
            )
            return 0

        for i, rule in enumerate(compiled):
            _print_rule(formatter, str(i), rule)
        references = context.references.snapshot()
        if references:
            formatter.text("references:")
            for ident in sorted(references):
                formatter.text_kv(ident, references[ident])
        return 0

    except Exception as e:
        formatter.error(e, error_code="uses_compile_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
