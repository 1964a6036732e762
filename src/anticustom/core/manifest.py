import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ManifestError

MANIFEST_FILE = "anticustom.toml"

UNKNOWN_CHILD_POLICIES = ("raise", "skip")

DEFAULT_PLACEHOLDER = "<!-- Template not found -->"


# =============================================================================
# Components Configuration
# =============================================================================


@dataclass
class ComponentsConfig:
    """Where components are discovered.

    Examples in anticustom.toml:

        [components]
        paths = ["components", "vendor/components"]
        default_style = "plato"
    """

    paths: list[str] = field(default_factory=list)  # empty = bundled components
    default_style: str = "plato"


# =============================================================================
# Render Configuration
# =============================================================================


@dataclass
class RenderConfig:
    """Composition renderer behaviour."""

    on_unknown_child: str = "raise"  # "raise" | "skip"
    placeholder: str = DEFAULT_PLACEHOLDER


# =============================================================================
# Tokens Configuration
# =============================================================================


@dataclass
class TokensConfig:
    """Design token compilation inputs and output."""

    path: str | None = None
    scale_schema: str | None = None
    output: str | None = None


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from anticustom.toml.

    Relative paths are resolved against ``project_root``.
    """

    name: str = "anticustom"
    project_root: Path = field(default_factory=Path.cwd)
    components: ComponentsConfig = field(default_factory=ComponentsConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    tokens: TokensConfig = field(default_factory=TokensConfig)

    def component_dirs(self) -> list[Path]:
        """Component directories in lookup order."""
        return [self.resolve(p) for p in self.components.paths]

    def token_path(self) -> Path | None:
        return self.resolve(self.tokens.path) if self.tokens.path else None

    def scale_schema_path(self) -> Path | None:
        return self.resolve(self.tokens.scale_schema) if self.tokens.scale_schema else None

    def output_path(self) -> Path | None:
        return self.resolve(self.tokens.output) if self.tokens.output else None

    def resolve(self, path: str) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.project_root / candidate


def _optional_str(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def load_manifest(path: Path) -> ProjectManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML: {e}", path) from e

    project = data.get("project", {})
    components_data = data.get("components", {})
    render_data = data.get("render", {})
    tokens_data = data.get("tokens", {})

    components_config = ComponentsConfig(
        paths=list(components_data.get("paths", [])),
        default_style=components_data.get("default_style", "plato"),
    )

    on_unknown_child = render_data.get("on_unknown_child", "raise")
    if on_unknown_child not in UNKNOWN_CHILD_POLICIES:
        raise ManifestError(
            f"render.on_unknown_child must be one of {', '.join(UNKNOWN_CHILD_POLICIES)}, "
            f"got '{on_unknown_child}'",
            path,
        )

    render_config = RenderConfig(
        on_unknown_child=on_unknown_child,
        placeholder=render_data.get("placeholder", DEFAULT_PLACEHOLDER),
    )

    tokens_config = TokensConfig(
        path=_optional_str(tokens_data.get("path")),
        scale_schema=_optional_str(tokens_data.get("scale_schema")),
        output=_optional_str(tokens_data.get("output")),
    )

    return ProjectManifest(
        name=project.get("name", "anticustom"),
        project_root=path.parent.resolve(),
        components=components_config,
        render=render_config,
        tokens=tokens_config,
    )


def find_manifest(start: Path | None = None) -> ProjectManifest:
    """Load anticustom.toml from ``start`` (default: cwd), or return defaults."""
    root = (start or Path.cwd()).resolve()
    manifest_path = root / MANIFEST_FILE
    if manifest_path.is_file():
        return load_manifest(manifest_path)
    return ProjectManifest(project_root=root)
