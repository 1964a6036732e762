"""
Design token compilation: token documents to CSS custom properties.
"""

from anticustom_ui.themes.css_generator import compile_css, emit_css
from anticustom_ui.themes.token_compiler import (
    compile_colorways,
    compile_scale,
    compile_tokens,
    load_scale_schema,
    load_token_document,
    parse_token_document,
)

__all__ = [
    "compile_colorways",
    "compile_css",
    "compile_scale",
    "compile_tokens",
    "emit_css",
    "load_scale_schema",
    "load_token_document",
    "parse_token_document",
]
