"""
Schema catalog for component discovery and schema loading.

Each component lives in its own directory::

    components/
        badge/
            badge.schema.json
            templates/badge.html
            styles/_base.css
            styles/plato.css

Schemas are read once per name and memoized in a ``SchemaCache``. The
cache is populate-on-miss with no eviction; entries are immutable pydantic
models, so one cache may be shared by catalogs reading the same
directories.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from anticustom.core.errors import SchemaError, SchemaNotFoundError
from anticustom_ui import COMPONENTS_DIR
from anticustom_ui.specs.component import ComponentInfo, ComponentSchema

logger = logging.getLogger(__name__)

SCHEMA_SUFFIX = ".schema.json"


class SchemaCache:
    """Append-only store of loaded schemas, keyed by component name."""

    def __init__(self) -> None:
        self._entries: dict[str, ComponentSchema] = {}

    def get(self, name: str) -> ComponentSchema | None:
        return self._entries.get(name)

    def put(self, name: str, schema: ComponentSchema) -> ComponentSchema:
        """Insert ``schema`` unless an entry exists; return the stored entry."""
        return self._entries.setdefault(name, schema)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _parse_schema_data(name: str, data: Any, path: Path) -> ComponentSchema:
    """Build a ComponentSchema from raw JSON data."""
    if not isinstance(data, dict):
        raise SchemaError("Schema must be a JSON object", path)

    payload = dict(data)
    payload["name"] = name
    if not payload.get("label"):
        payload["label"] = name[:1].upper() + name[1:]
    if payload.get("fields") is None:
        payload["fields"] = []

    try:
        return ComponentSchema.model_validate(payload)
    except ValidationError as e:
        raise SchemaError(f"Invalid schema: {e}", path) from e


class SchemaCatalog:
    """
    Loads component schemas and style variants from component directories.

    Directories are searched in order; the first one containing a
    component wins.
    """

    def __init__(
        self,
        components_dirs: Path | Sequence[Path] | None = None,
        cache: SchemaCache | None = None,
    ) -> None:
        if components_dirs is None:
            components_dirs = [COMPONENTS_DIR]
        elif isinstance(components_dirs, Path):
            components_dirs = [components_dirs]
        self.components_dirs: list[Path] = list(components_dirs)
        self.cache = cache if cache is not None else SchemaCache()

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def component_dir(self, name: str) -> Path | None:
        """Directory of the named component, or None if it has no schema."""
        if not name or "/" in name or "\\" in name or name.startswith("."):
            return None
        for base in self.components_dirs:
            candidate = base / name
            if (candidate / f"{name}{SCHEMA_SUFFIX}").is_file():
                return candidate
        return None

    def schema_path(self, name: str) -> Path | None:
        component_dir = self.component_dir(name)
        if component_dir is None:
            return None
        return component_dir / f"{name}{SCHEMA_SUFFIX}"

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_schema(self, name: str) -> ComponentSchema:
        """
        Load the schema for ``name``.

        Raises:
            SchemaNotFoundError: No schema source exists for the name.
            SchemaError: The schema file is not valid JSON or fails validation.
        """
        cached = self.cache.get(name)
        if cached is not None:
            return cached

        path = self.schema_path(name)
        if path is None:
            raise SchemaNotFoundError(name)

        logger.debug("Loading schema for '%s' from %s", name, path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SchemaError(f"Invalid JSON: {e}", path) from e

        return self.cache.put(name, _parse_schema_data(name, data, path))

    def get_schema(self, name: str) -> ComponentSchema:
        """Load the schema for ``name``, or an empty schema if none exists."""
        try:
            return self.load_schema(name)
        except SchemaNotFoundError:
            return ComponentSchema(name=name, label=name[:1].upper() + name[1:])

    # -------------------------------------------------------------------------
    # Discovery
    # -------------------------------------------------------------------------

    def list_styles(self, name: str) -> list[str]:
        """Style variants of a component: non-underscore CSS files in styles/."""
        component_dir = self.component_dir(name)
        if component_dir is None:
            return []
        styles_dir = component_dir / "styles"
        if not styles_dir.is_dir():
            return []
        return sorted(
            css_file.stem for css_file in styles_dir.glob("*.css") if not css_file.stem.startswith("_")
        )

    def component_names(self) -> list[str]:
        """Names of every discoverable component, sorted."""
        names: set[str] = set()
        for base in self.components_dirs:
            if not base.is_dir():
                continue
            for entry in base.iterdir():
                if entry.is_dir() and (entry / f"{entry.name}{SCHEMA_SUFFIX}").is_file():
                    names.add(entry.name)
        return sorted(names)

    def scan_components(self) -> dict[str, ComponentInfo]:
        """Discover all components, keyed by name."""
        components: dict[str, ComponentInfo] = {}
        for name in self.component_names():
            schema = self.load_schema(name)
            path = self.component_dir(name)
            if path is None:
                logger.debug("Component '%s' disappeared during discovery", name)
                continue
            components[name] = ComponentInfo(
                name=name,
                label=schema.label,
                schema=schema,
                path=path,
                styles=self.list_styles(name),
            )
        logger.debug("Discovered %d components", len(components))
        return components
