"""Shared pytest fixtures for Anticustom tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from anticustom_ui.runtime import ComponentRenderer, SchemaCatalog


def write_component(
    base: Path,
    name: str,
    schema: dict[str, Any] | None = None,
    template: str | None = None,
    styles: dict[str, str] | None = None,
) -> Path:
    """Create ``base/<name>/`` with a schema, optional template and styles."""
    component_dir = base / name
    component_dir.mkdir(parents=True, exist_ok=True)
    (component_dir / f"{name}.schema.json").write_text(json.dumps(schema or {}))

    if template is not None:
        templates_dir = component_dir / "templates"
        templates_dir.mkdir(exist_ok=True)
        (templates_dir / f"{name}.html").write_text(template)

    if styles:
        styles_dir = component_dir / "styles"
        styles_dir.mkdir(exist_ok=True)
        for style, css in styles.items():
            (styles_dir / f"{style}.css").write_text(css)

    return component_dir


@pytest.fixture
def make_component():
    """Factory fixture for ad-hoc component directories."""
    return write_component


@pytest.fixture
def components_dir(tmp_path: Path) -> Path:
    """A small component library: a slotted parent, a leaf and a template-less stub."""
    base = tmp_path / "components"

    write_component(
        base,
        "panel",
        schema={
            "label": "Panel",
            "fields": [
                {"name": "title", "default": "Untitled"},
                {"name": "children", "default": []},
            ],
            "children": {
                "slots": [
                    {"defaults": {"text": "first slot", "tone": "loud"}},
                    {"defaults": {"text": "second slot"}},
                ]
            },
        },
        template=(
            '<div class="panel" data-title="{{ props.title }}">'
            '{{ render_components(props.children, "panel") }}</div>'
        ),
        styles={"_base": ".panel { display: block; }", "plato": ".panel { color: red; }"},
    )
    write_component(
        base,
        "label",
        schema={
            "fields": [
                {"name": "text"},
                {"name": "tone", "default": "quiet"},
            ]
        },
        template=(
            "{% if props.text %}"
            '<span class="label label--{{ props.tone }}" data-index="{{ props._child_index }}">'
            "{{ props.text }}</span>"
            "{% endif %}"
        ),
        styles={"_base": ".label { display: inline; }", "loud": ".label { font-weight: 700; }"},
    )
    write_component(base, "stub", schema={"fields": [{"name": "value", "default": 1}]})

    return base


@pytest.fixture
def catalog(components_dir: Path) -> SchemaCatalog:
    return SchemaCatalog(components_dir)


@pytest.fixture
def renderer(catalog: SchemaCatalog) -> ComponentRenderer:
    return ComponentRenderer(catalog)


@pytest.fixture
def shipped_renderer() -> ComponentRenderer:
    """Renderer over the bundled component library."""
    return ComponentRenderer()
