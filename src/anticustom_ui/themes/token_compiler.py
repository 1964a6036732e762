"""
Design token compiler.

Converts a token document (the JSON settings exported by the design panel)
into an ordered table of CSS custom properties.

Token sections:
- spacing: geometric scale -> --space-{name}
- typography.text: geometric scale -> --text-{name} (one decimal)
- typography.headings: geometric scale -> --heading-{n} plus line height,
  letter spacing and weight
- color.sections: concrete colors -> --{name}, with optional hue shades
- borders.sizes / radius.sizes: flat px values
- shadows: box-shadow strings

Scale sections are only compiled when present, so an empty document yields
an empty table.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from anticustom.core.errors import TokenDocumentError
from anticustom_ui.specs.tokens import (
    DEFAULT_HEADING_SCALE,
    DEFAULT_SCALE_SCHEMA,
    DEFAULT_SPACING_SCALE,
    DEFAULT_TEXT_SCALE,
    Colorway,
    ResolvedTokenTable,
    ScaleDefinition,
    ScalePosition,
    ScaleSchema,
    TokenCategory,
)
from anticustom_ui.themes.colors import generate_shades

logger = logging.getLogger(__name__)

SHADOW_KEYS = ("x", "y", "blur", "spread", "opacity")

# Heading extras: document key -> (variable suffix, unit)
_HEADING_EXTRAS = (
    ("lineHeight", "line-height", ""),
    ("letterSpacing", "letter-spacing", "em"),
    ("weight", "weight", ""),
)


# =============================================================================
# Number Helpers
# =============================================================================


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like JavaScript's ``Math.round`` (halves go up)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def format_number(value: Any) -> str:
    """Format a number for CSS: ``24.0`` -> ``"24"``, ``14.2`` -> ``"14.2"``."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def _px(value: Any) -> str:
    """Pixel value for numbers; strings carrying their own unit pass through."""
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return value
    return f"{format_number(value)}px"


def _number(value: Any, field: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        raise TokenDocumentError(f"'{field}' must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass
    raise TokenDocumentError(f"'{field}' must be a number, got {value!r}")


def _section(data: Mapping[str, Any], key: str, where: str = "") -> Mapping[str, Any] | None:
    """Fetch a nested mapping; None when absent, error when not a mapping."""
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise TokenDocumentError(f"'{where}{key}' must be an object")
    return value


def _enabled(entry: Mapping[str, Any]) -> bool:
    return entry.get("enabled") is not False


# =============================================================================
# Scales
# =============================================================================


def scale_definition(
    section: Mapping[str, Any], default: ScaleDefinition, where: str = ""
) -> ScaleDefinition:
    """Read ``baseSize``/``scale`` from a section, falling back to ``default``."""
    return ScaleDefinition(
        base_size=_number(section.get("baseSize"), f"{where}baseSize", default.base_size),
        scale=_number(section.get("scale"), f"{where}scale", default.scale),
    )


def compile_scale(
    definition: ScaleDefinition,
    positions: Iterable[ScalePosition],
    overrides: Mapping[str, Any] | None = None,
    digits: int = 0,
) -> dict[str, Any]:
    """
    Compute the value of every named position on a scale.

    ``round(base * scale ** position)`` unless ``overrides[name]`` is
    ``{"enabled": true, "value": v}``, in which case ``v`` is used verbatim.

    Example:
        >>> compile_scale(ScaleDefinition(base_size=16, scale=1.5),
        ...               [ScalePosition(name="l", position=1)])
        {'l': 24.0}
    """
    overrides = overrides or {}
    values: dict[str, Any] = {}
    for pos in positions:
        override = overrides.get(pos.name)
        if (
            isinstance(override, Mapping)
            and override.get("enabled")
            and override.get("value") is not None
        ):
            values[pos.name] = override["value"]
            continue
        raw = definition.base_size * definition.scale**pos.position
        values[pos.name] = round_half_up(raw, digits)
    return values


def _compile_scale_section(
    table: ResolvedTokenTable,
    section: Mapping[str, Any],
    where: str,
    default: ScaleDefinition,
    positions: list[ScalePosition],
    prefix: str,
    category: str,
    digits: int = 0,
) -> None:
    definition = scale_definition(section, default, where)
    overrides = _section(section, "sizes", where) or {}
    values = compile_scale(definition, positions, overrides, digits)
    for pos in positions:
        table.add(f"--{prefix}{pos.name}", category, _px(values[pos.name]))


def _compile_headings(
    table: ResolvedTokenTable, section: Mapping[str, Any], positions: list[ScalePosition]
) -> None:
    where = "typography.headings."
    definition = scale_definition(section, DEFAULT_HEADING_SCALE, where)
    overrides = _section(section, "sizes", where) or {}
    values = compile_scale(definition, positions, overrides)

    for pos in positions:
        css_key = pos.css_key or f"heading-{pos.name}"
        table.add(f"--{css_key}", TokenCategory.TYPOGRAPHY, _px(values[pos.name]))

        entry = overrides.get(pos.name)
        if not isinstance(entry, Mapping):
            continue
        for key, suffix, unit in _HEADING_EXTRAS:
            if entry.get(key) is not None:
                table.add(
                    f"--{css_key}-{suffix}",
                    TokenCategory.TYPOGRAPHY,
                    f"{format_number(entry[key])}{unit}",
                )


# =============================================================================
# Flat Sections
# =============================================================================


def _hue_lightness(hues: Mapping[str, Any]) -> dict[str, float]:
    result: dict[str, float] = {}
    for name, entry in hues.items():
        if isinstance(entry, Mapping):
            if not _enabled(entry) or entry.get("value") is None:
                continue
            result[name] = _number(entry["value"], f"color.hues.{name}.value", 0)
        elif entry is not None:
            result[name] = _number(entry, f"color.hues.{name}", 0)
    return result


def _color_sections(color: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    sections = color.get("sections")
    if sections is None:
        return []
    if isinstance(sections, Mapping):
        items = list(sections.values())
    elif isinstance(sections, list):
        items = sections
    else:
        raise TokenDocumentError("'color.sections' must be an object or a list")
    return [section for section in items if isinstance(section, Mapping)]


def _compile_colors(table: ResolvedTokenTable, color: Mapping[str, Any]) -> None:
    hues_section = _section(color, "hues", "color.")
    hues = _hue_lightness(hues_section) if hues_section else {}

    for section in _color_sections(color):
        colors = _section(section, "colors", "color.sections.*.") or {}
        for name, entry in colors.items():
            if isinstance(entry, str):
                value: Any = entry
            elif isinstance(entry, Mapping) and _enabled(entry):
                value = entry.get("color") or entry.get("value")
            else:
                continue
            if not value:
                continue

            table.add(f"--{name}", TokenCategory.COLORS, str(value))
            if not hues:
                continue
            for hue, shade in generate_shades(str(value), hues).items():
                table.add(f"--{name}-{hue}", TokenCategory.COLORS, shade)


def _compile_sizes(
    table: ResolvedTokenTable, section: Mapping[str, Any], where: str, prefix: str, category: str
) -> None:
    sizes = _section(section, "sizes", where) or {}
    for name, entry in sizes.items():
        if not isinstance(entry, Mapping) or not _enabled(entry):
            continue
        if entry.get("value") is None:
            continue
        table.add(f"--{prefix}-{name}", category, _px(entry["value"]))


def shadow_value(entry: Mapping[str, Any]) -> str | None:
    """Format a shadow entry, or None if any component is missing."""
    if any(entry.get(key) is None for key in SHADOW_KEYS):
        return None
    x, y, blur, spread, opacity = (format_number(entry[key]) for key in SHADOW_KEYS)
    return f"{x}px {y}px {blur}px {spread}px rgba(0,0,0,{opacity})"


def _compile_shadows(table: ResolvedTokenTable, shadows: Mapping[str, Any]) -> None:
    for name, entry in shadows.items():
        if not isinstance(entry, Mapping) or not _enabled(entry):
            continue
        value = shadow_value(entry)
        if value is None:
            logger.debug("Skipping incomplete shadow '%s'", name)
            continue
        table.add(f"--shadow-{name}", TokenCategory.SHADOWS, value)


# =============================================================================
# Public API
# =============================================================================


def compile_tokens(
    doc: Mapping[str, Any], scale_schema: ScaleSchema = DEFAULT_SCALE_SCHEMA
) -> ResolvedTokenTable:
    """
    Compile a token document into an ordered table of custom properties.

    Args:
        doc: Parsed token document.
        scale_schema: Named positions for spacing, text and heading scales.

    Returns:
        Tokens in section order: spacing, text, headings, colors, borders,
        shadows, radius.

    Raises:
        TokenDocumentError: A section has the wrong shape or a scale
            parameter is not numeric.
    """
    if not isinstance(doc, Mapping):
        raise TokenDocumentError("Token document must be an object")

    table = ResolvedTokenTable()

    spacing = _section(doc, "spacing")
    if spacing is not None:
        _compile_scale_section(
            table,
            spacing,
            "spacing.",
            DEFAULT_SPACING_SCALE,
            scale_schema.spacing,
            "space-",
            TokenCategory.SPACING,
        )

    typography = _section(doc, "typography") or {}
    text = _section(typography, "text", "typography.")
    if text is not None:
        _compile_scale_section(
            table,
            text,
            "typography.text.",
            DEFAULT_TEXT_SCALE,
            scale_schema.text,
            "text-",
            TokenCategory.TYPOGRAPHY,
            digits=1,
        )
    headings = _section(typography, "headings", "typography.")
    if headings is not None:
        _compile_headings(table, headings, scale_schema.headings)

    color = _section(doc, "color")
    if color is not None:
        _compile_colors(table, color)

    borders = _section(doc, "borders")
    if borders is not None:
        _compile_sizes(table, borders, "borders.", "border", TokenCategory.BORDERS)

    shadows = _section(doc, "shadows")
    if shadows is not None:
        _compile_shadows(table, shadows)

    radius = _section(doc, "radius")
    if radius is not None:
        _compile_sizes(table, radius, "radius.", "radius", TokenCategory.RADIUS)

    logger.debug("Compiled %d tokens", len(table))
    return table


def compile_colorways(doc: Mapping[str, Any]) -> list[Colorway]:
    """
    Collect colorway overrides from ``color.colorways`` (or ``colorways``).

    Non-string values are stringified; empty values are dropped, and so are
    colorways left with nothing to emit.
    """
    color = _section(doc, "color") or {}
    source = _section(color, "colorways", "color.")
    if source is None:
        source = _section(doc, "colorways") or {}

    colorways: list[Colorway] = []
    for name, entry in source.items():
        if not isinstance(entry, Mapping):
            raise TokenDocumentError(f"Colorway '{name}' must be an object")
        values = {
            key: value if isinstance(value, str) else format_number(value)
            for key, value in entry.items()
            if value is not None and not isinstance(value, (Mapping, list)) and value != ""
        }
        if values:
            colorways.append(Colorway(name=name, values=values))
    return colorways


# =============================================================================
# Loading
# =============================================================================


def parse_token_document(text: str, source: str | Path | None = None) -> dict[str, Any]:
    """Parse token document JSON; the top level must be an object."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TokenDocumentError(f"Invalid JSON: {e}", path=source) from e
    if not isinstance(data, dict):
        raise TokenDocumentError("Token document must be a JSON object", path=source)
    return data


def load_token_document(path: str | Path) -> dict[str, Any]:
    """
    Read and parse a token document file.

    Raises:
        TokenDocumentError: The file is missing, unreadable or not a JSON
            object.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TokenDocumentError(f"Cannot read token document: {e.strerror}", path=path) from e
    return parse_token_document(text, source=path)


def _schema_positions(data: Mapping[str, Any], key: str) -> list[ScalePosition]:
    group = data.get(key)
    if group is None:
        return []
    items = group.get("items") if isinstance(group, Mapping) else None
    if not isinstance(items, Mapping):
        raise TokenDocumentError(f"'{key}.items' must be an object")

    positions = []
    for name, item in items.items():
        if not isinstance(item, Mapping):
            raise TokenDocumentError(f"'{key}.items.{name}' must be an object")
        positions.append(ScalePosition.model_validate({"name": name, **item}))
    return positions


def scale_schema_from_data(data: Mapping[str, Any]) -> ScaleSchema:
    """
    Build a scale schema from ``{spacingSizes, textSizes, headingLevels}``.

    Each group is ``{"items": {name: {"position": n, "cssKey"?: ...}}}``;
    absent groups fall back to the built-in positions.
    """
    try:
        spacing = _schema_positions(data, "spacingSizes")
        text = _schema_positions(data, "textSizes")
        headings = _schema_positions(data, "headingLevels")
    except ValidationError as e:
        raise TokenDocumentError(f"Invalid scale schema: {e}") from e

    return ScaleSchema(
        spacing=spacing or DEFAULT_SCALE_SCHEMA.spacing,
        text=text or DEFAULT_SCALE_SCHEMA.text,
        headings=headings or DEFAULT_SCALE_SCHEMA.headings,
    )


def load_scale_schema(path: str | Path) -> ScaleSchema:
    """Load a custom scale schema from a JSON file."""
    path = Path(path)
    data = load_token_document(path)
    sizes = data.get("sizes")
    if isinstance(sizes, Mapping):
        data = dict(sizes)
    try:
        return scale_schema_from_data(data)
    except TokenDocumentError as e:
        raise TokenDocumentError(e.message, path=path) from e
