"""Prop resolution: schema defaults, placeholder interpolation, slot defaults.

Interpolation is best-effort. A ``{field}`` or ``{field.sub}`` placeholder
whose path cannot be resolved to a scalar stays in the output verbatim, so
templates remain valid when the data context is incomplete.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from typing import Any

from anticustom_ui.specs.component import ComponentSchema, PropBag

_PLACEHOLDER_RE = re.compile(r"\{([A-Za-z0-9_.]+)\}")

_MISSING = object()


def merge_defaults(schema: ComponentSchema, props: Mapping[str, Any]) -> PropBag:
    """Fill in schema defaults for fields absent from ``props``.

    Keys already in ``props`` are never overwritten; keys the schema does
    not declare pass through. Returns a new dict.
    """
    merged: PropBag = dict(props)
    for field in schema.fields:
        if field.name not in merged:
            merged[field.name] = copy.deepcopy(field.default)
    return merged


def resolve_path(path: str, context: Any) -> Any:
    """Walk a dotted path through nested mappings and sequences.

    Returns the sentinel ``_MISSING`` when any segment is absent.
    """
    current: Any = context
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return _MISSING
            current = current[part]
        elif isinstance(current, (list, tuple)) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return _MISSING
            current = current[index]
        else:
            return _MISSING
    return current


def _format_scalar(value: Any) -> str | None:
    """String form of a scalar, or None for non-scalars."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def interpolate(template: str, context: Mapping[str, Any]) -> str:
    """Replace ``{path}`` placeholders in ``template`` with context values."""

    def replace(match: re.Match[str]) -> str:
        path = match.group(1)
        # Paths like "{.a}" or "{a..b}" never resolve
        if not all(path.split(".")):
            return match.group(0)
        value = resolve_path(path, context)
        if value is _MISSING:
            return match.group(0)
        formatted = _format_scalar(value)
        return match.group(0) if formatted is None else formatted

    return _PLACEHOLDER_RE.sub(replace, template)


def _interpolate_value(value: Any, context: Mapping[str, Any]) -> Any:
    if isinstance(value, str):
        return interpolate(value, context)
    if isinstance(value, Mapping):
        return {key: _interpolate_value(item, context) for key, item in value.items()}
    if isinstance(value, list):
        return [_interpolate_value(item, context) for item in value]
    return value


def interpolate_props(props: Mapping[str, Any], context: Mapping[str, Any]) -> PropBag:
    """Interpolate every string in ``props``, recursing into nested bags."""
    return {key: _interpolate_value(value, context) for key, value in props.items()}


def resolve_child_props(
    parent_schema: ComponentSchema, slot_index: int, props: PropBag
) -> PropBag:
    """Merge the parent's slot defaults for ``slot_index`` under ``props``.

    Without a slot at that index, ``props`` is returned unchanged.
    """
    slot = parent_schema.get_slot(slot_index)
    if slot is None:
        return props
    return {**copy.deepcopy(slot.defaults), **props}
