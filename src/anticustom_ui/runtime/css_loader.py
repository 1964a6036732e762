"""
Component CSS aggregation.

Concatenates each discovered component's ``styles/_base.css`` followed by
the selected style variant (``styles/<style>.css``) into one stylesheet.
"""

from __future__ import annotations

import logging

from anticustom_ui.runtime.schema_catalog import SchemaCatalog

logger = logging.getLogger(__name__)

BASE_STYLESHEET = "_base"


def generate_component_css(catalog: SchemaCatalog, style: str = "plato") -> str:
    """
    Collect component CSS for one style variant.

    Args:
        catalog: Catalog used to discover components.
        style: Style variant name; components without it contribute only
            their base stylesheet.

    Returns:
        Concatenated CSS, one commented section per file.
    """
    parts: list[str] = []

    for name in catalog.component_names():
        component_dir = catalog.component_dir(name)
        if component_dir is None:
            continue
        styles_dir = component_dir / "styles"

        for stylesheet, label in ((BASE_STYLESHEET, "base"), (style, style)):
            path = styles_dir / f"{stylesheet}.css"
            if not path.is_file():
                continue
            parts.append(f"/* {name}: {label} */")
            parts.append(path.read_text(encoding="utf-8").rstrip())
            parts.append("")

        if style not in catalog.list_styles(name):
            logger.debug("Component '%s' has no '%s' style", name, style)

    return "\n".join(parts)
