"""
Specification types for components and design tokens.
"""

from anticustom_ui.specs.component import (
    ChildrenSpec,
    ComponentInfo,
    ComponentInvocation,
    ComponentSchema,
    FieldSpec,
    PropBag,
    SlotSpec,
)
from anticustom_ui.specs.tokens import (
    DEFAULT_SCALE_SCHEMA,
    Colorway,
    ResolvedToken,
    ResolvedTokenTable,
    ScaleDefinition,
    ScalePosition,
    ScaleSchema,
    TokenCategory,
)

__all__ = [
    # Components
    "ChildrenSpec",
    "ComponentInfo",
    "ComponentInvocation",
    "ComponentSchema",
    "FieldSpec",
    "PropBag",
    "SlotSpec",
    # Tokens
    "DEFAULT_SCALE_SCHEMA",
    "Colorway",
    "ResolvedToken",
    "ResolvedTokenTable",
    "ScaleDefinition",
    "ScalePosition",
    "ScaleSchema",
    "TokenCategory",
]
