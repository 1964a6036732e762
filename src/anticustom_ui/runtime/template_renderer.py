"""
Jinja2 environment for component templates.

Sets up template loading from component directories together with the
class/attribute helpers every component template uses.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape


def _classes(classes: Mapping[str, Any]) -> str:
    """Build a class string from a ``{class: condition}`` mapping."""
    return " ".join(name for name, condition in classes.items() if name and condition)


def _attrs(attrs: Mapping[str, Any]) -> Markup:
    """Build HTML attributes, skipping None, False and empty-string values."""
    parts = []
    for name, value in attrs.items():
        if value is None or value is False or value == "":
            continue
        if value is True:
            value = "true"
        parts.append(f'{name}="{escape(str(value))}"')
    return Markup(" ".join(parts))


def _nl2br_filter(value: Any) -> Markup:
    """Escape text and convert newlines to <br>."""
    if value is None:
        return Markup("")
    return Markup("<br>\n").join(escape(line) for line in str(value).split("\n"))


def _split_lines_filter(value: Any) -> list[str]:
    """Split text on newlines."""
    if value is None:
        return []
    return str(value).split("\n")


def _first_char_filter(value: Any) -> str:
    """First character of a string (used for avatar placeholders)."""
    if not value:
        return ""
    return str(value)[:1]


def _truthy_flag(value: Any) -> bool:
    """Interpret schema flags stored as booleans or "true"/"false" strings."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def template_name(component: str) -> str:
    """Loader-relative template path of a component."""
    return f"{component}/templates/{component}.html"


def create_jinja_env(components_dirs: Sequence[Path]) -> Environment:
    """Create and configure the Jinja2 environment.

    Args:
        components_dirs: Component directories, searched in order. A
            component template in an earlier directory shadows one with
            the same name in a later directory.
    """
    loader = ChoiceLoader([FileSystemLoader(str(path)) for path in components_dirs])

    env = Environment(
        loader=loader,
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )

    env.globals["classes"] = _classes
    env.globals["attrs"] = _attrs
    env.globals["flag"] = _truthy_flag

    env.filters["nl2br"] = _nl2br_filter
    env.filters["first_char"] = _first_char_filter
    env.filters["split_lines"] = _split_lines_filter
    env.tests["flag"] = _truthy_flag

    return env
