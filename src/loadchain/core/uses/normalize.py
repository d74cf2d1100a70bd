"""Normalize a rule's ``use`` value into an ordered list of LoaderSpec."""
from __future__ import annotations

from typing import Any, List, Mapping, Union

from loadchain.core.exceptions import RuleUseValidationError
from loadchain.core.uses.models import LoaderSpec

UseItem = Union[str, Mapping[str, Any], LoaderSpec]


def normalize_use_item(item: UseItem) -> LoaderSpec:
    if isinstance(item, LoaderSpec):
        return item
    if isinstance(item, str):
        return LoaderSpec(loader=item)
    if isinstance(item, Mapping):
        return LoaderSpec(
            loader=item.get("loader"),
            options=item.get("options"),
            ident=item.get("ident"),
        )
    raise RuleUseValidationError(
        f"Use item must be a loader path or loader object, got {type(item).__name__}",
        context={"type": type(item).__name__},
    )


def normalize_uses(uses: Any) -> List[LoaderSpec]:
    """Coerce a single item or a list of items into LoaderSpec entries.

    Example:
        >>> normalize_uses(["a-loader", {"loader": "b-loader", "options": "x"}])
        [LoaderSpec(loader='a-loader', options=None, ident=None), LoaderSpec(loader='b-loader', options='x', ident=None)]
    """
    if isinstance(uses, (list, tuple)):
        return [normalize_use_item(item) for item in uses]
    return [normalize_use_item(uses)]


__all__ = ["UseItem", "normalize_use_item", "normalize_uses"]
