"""
Error types for Anticustom component rendering and token compilation.
"""

from pathlib import Path


class AnticustomError(Exception):
    """Base exception for all Anticustom errors."""

    def __init__(self, message: str, path: Path | None = None):
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the source path if available."""
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class NotFoundError(AnticustomError):
    """
    Raised when a requested component resource does not exist.

    Never substituted with other content; callers that treat absence as
    "no constraints" use the non-raising catalog accessors instead.
    """

    pass


class SchemaNotFoundError(NotFoundError):
    """
    Raised when no schema source exists for a component name.

    Examples:
    - components/<name>/<name>.schema.json missing
    - Component directory missing entirely
    """

    def __init__(self, name: str, path: Path | None = None):
        self.name = name
        super().__init__(f"No schema for component '{name}'", path)


class ComponentNotFoundError(NotFoundError):
    """
    Raised when no render function is registered for a component type.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown component: {name}")


class SchemaError(AnticustomError):
    """
    Raised when a component schema file exists but cannot be used.

    Examples:
    - Invalid JSON
    - Fields missing a name
    - Slots that are not objects
    """

    pass


class TokenDocumentError(AnticustomError):
    """
    Raised when a design token document is malformed.

    Aborts the whole compile; no partial CSS is produced.

    Examples:
    - Invalid JSON
    - Top level is not an object
    - A section that should be an object is a list or scalar
    - Non-numeric baseSize or scale
    """

    pass


class ManifestError(AnticustomError):
    """
    Raised when anticustom.toml cannot be loaded.

    Examples:
    - Invalid TOML
    - Unknown render.on_unknown_child policy
    """

    pass
