"""
CSS generator for compiled design tokens.

Emits the resolved token table as a ``:root`` block, followed by one
``[data-colorway="name"]`` block per colorway.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from anticustom_ui.specs.tokens import (
    DEFAULT_SCALE_SCHEMA,
    Colorway,
    ResolvedTokenTable,
    ScaleSchema,
)
from anticustom_ui.themes.token_compiler import compile_colorways, compile_tokens

INDENT = "    "


def emit_css(table: ResolvedTokenTable, colorways: Iterable[Colorway] = ()) -> str:
    """
    Generate CSS from a resolved token table.

    Args:
        table: Tokens in emission order.
        colorways: Palette overrides, emitted in the given order.

    Returns:
        CSS string with a :root block and colorway selectors
    """
    lines: list[str] = [":root {"]
    for token in table:
        lines.append(f"{INDENT}{token.variable_name}: {token.value};")
    lines.append("}")

    for colorway in colorways:
        lines.append(f'[data-colorway="{colorway.name}"] {{')
        for key, value in colorway.values.items():
            lines.append(f"{INDENT}--colorway-{key}: {value};")
        lines.append("}")

    return "\n".join(lines) + "\n"


def compile_css(doc: Mapping[str, Any], scale_schema: ScaleSchema = DEFAULT_SCALE_SCHEMA) -> str:
    """Compile a token document straight to CSS."""
    return emit_css(compile_tokens(doc, scale_schema), compile_colorways(doc))
