"""Compile module rule ``use`` declarations into build engine descriptors.

``compose_rule_uses`` is the entry point for a single ``use`` value;
``compile_module_rules`` walks a whole ``module.rules`` list.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Sequence

from loadchain.core.exceptions import RuleUseValidationError
from loadchain.core.schemas import SchemaValidationError, validate_payload
from loadchain.core.uses.models import LoaderSpec, UseDescriptor
from loadchain.core.uses.normalize import normalize_uses
from loadchain.core.uses.partition import partition_uses
from loadchain.core.utils.profiling import span

if TYPE_CHECKING:
    from loadchain.core.context import BuildContext

logger = logging.getLogger(__name__)

RULE_USE_SCHEMA = "rule-use.schema.yaml"
NESTED_RULE_KEYS = ("oneOf", "rules")


def _schema_payload(uses: Any) -> Any:
    """Turn ``LoaderSpec`` items and tuples into the plain shapes the schema checks."""
    if isinstance(uses, LoaderSpec):
        options = list(uses.options) if isinstance(uses.options, tuple) else uses.options
        raw = {"loader": uses.loader, "options": options, "ident": uses.ident}
        return {key: value for key, value in raw.items() if value is not None}
    if isinstance(uses, (list, tuple)):
        return [_schema_payload(item) for item in uses]
    return uses


def validate_rule_uses(uses: Any) -> None:
    try:
        validate_payload(_schema_payload(uses), RULE_USE_SCHEMA)
    except SchemaValidationError as exc:
        raise RuleUseValidationError(str(exc), context={"errors": exc.errors}) from exc


def compose_rule_uses(
    uses: Any, context: "BuildContext", *, validate: bool = True
) -> List[UseDescriptor]:
    """Normalize and partition one ``use`` value.

    Args:
        uses: Loader path, loader object, or a list mixing both.
        context: Build context providing the resolver and references table.
        validate: Check ``uses`` against the rule-use schema first.

    Returns:
        Descriptors in declaration order.

    Raises:
        RuleUseValidationError: ``uses`` does not match the schema.
        LoaderResolutionError: A loader path cannot be resolved.
    """
    if validate:
        validate_rule_uses(uses)
    with span("uses.normalize"):
        specs = normalize_uses(uses)
    return partition_uses(specs, context)


def to_raw_uses(descriptors: Sequence[UseDescriptor]) -> List[Dict[str, Any]]:
    return [d.to_raw() for d in descriptors]


def _rule_uses(rule: Mapping[str, Any]) -> Any:
    if "use" in rule:
        return rule["use"]
    shorthand: Dict[str, Any] = {"loader": rule["loader"]}
    if rule.get("options") is not None:
        shorthand["options"] = rule["options"]
    return [shorthand]


def compile_module_rule(rule: Mapping[str, Any], context: "BuildContext") -> Dict[str, Any]:
    """Compile one rule; keys other than ``use``/``loader``/``options`` pass through."""
    if not isinstance(rule, Mapping):
        raise RuleUseValidationError(
            f"Module rule must be a mapping, got {type(rule).__name__}",
            context={"type": type(rule).__name__},
        )

    compiled = {k: v for k, v in rule.items() if k not in ("use", "loader", "options")}
    if "use" in rule or "loader" in rule:
        compiled["use"] = to_raw_uses(compose_rule_uses(_rule_uses(rule), context))

    for key in NESTED_RULE_KEYS:
        nested = rule.get(key)
        if isinstance(nested, list):
            compiled[key] = compile_module_rules(nested, context)
    return compiled


def compile_module_rules(
    rules: Sequence[Mapping[str, Any]], context: "BuildContext"
) -> List[Dict[str, Any]]:
    with span("uses.compile_rules", count=len(rules)):
        compiled = [compile_module_rule(rule, context) for rule in rules]
    logger.debug(
        "Compiled %d rule(s); %d options reference(s)", len(compiled), len(context.references)
    )
    return compiled


__all__ = [
    "RULE_USE_SCHEMA",
    "validate_rule_uses",
    "compose_rule_uses",
    "to_raw_uses",
    "compile_module_rule",
    "compile_module_rules",
]
