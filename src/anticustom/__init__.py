"""
Anticustom - composable UI components and design tokens.

Renders trees of reusable components from declarative definitions and
compiles design-token documents into CSS custom properties.
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import (
    AnticustomError,
    ComponentNotFoundError,
    ManifestError,
    NotFoundError,
    SchemaError,
    SchemaNotFoundError,
    TokenDocumentError,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "AnticustomError",
    "NotFoundError",
    "SchemaNotFoundError",
    "ComponentNotFoundError",
    "SchemaError",
    "TokenDocumentError",
    "ManifestError",
]
