"""
Component runtime: schema catalog, prop resolution and rendering.
"""

from anticustom_ui.runtime.component_renderer import (
    ComponentRegistry,
    ComponentRenderer,
    MissingTemplate,
    RenderFunction,
    TemplateComponent,
)
from anticustom_ui.runtime.css_loader import generate_component_css
from anticustom_ui.runtime.props import (
    interpolate,
    interpolate_props,
    merge_defaults,
    resolve_child_props,
)
from anticustom_ui.runtime.schema_catalog import SchemaCache, SchemaCatalog
from anticustom_ui.runtime.verification import (
    VerifyCase,
    VerifyResult,
    default_cases,
    verify_components,
)

__all__ = [
    "ComponentRegistry",
    "ComponentRenderer",
    "MissingTemplate",
    "RenderFunction",
    "SchemaCache",
    "SchemaCatalog",
    "TemplateComponent",
    "VerifyCase",
    "VerifyResult",
    "default_cases",
    "generate_component_css",
    "interpolate",
    "interpolate_props",
    "merge_defaults",
    "resolve_child_props",
    "verify_components",
]
