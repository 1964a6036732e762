"""
Composition renderer for component trees.

Dispatches a component type to its render function through a registry,
after merging schema defaults under the caller's props. Render functions
that own a ``children`` prop call back into ``render_components``, which
resolves each child's slot defaults against the parent schema and recurses.

Invocation trees must be finite and acyclic; they are built from
deserialized data and the renderer does not detect cycles. A failing child
aborts the whole render.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from jinja2 import Environment, Template, TemplateNotFound
from markupsafe import Markup

from anticustom.core.errors import ComponentNotFoundError
from anticustom.core.manifest import DEFAULT_PLACEHOLDER, UNKNOWN_CHILD_POLICIES, ProjectManifest
from anticustom_ui.runtime.props import interpolate_props, merge_defaults, resolve_child_props
from anticustom_ui.runtime.schema_catalog import SchemaCatalog
from anticustom_ui.runtime.template_renderer import create_jinja_env, template_name
from anticustom_ui.specs.component import ComponentInvocation, ComponentSchema, PropBag

logger = logging.getLogger(__name__)

RenderFunction = Callable[[PropBag], Markup | str]


# =============================================================================
# Render Functions
# =============================================================================


class TemplateComponent:
    """Render function backed by a component's Jinja2 template."""

    def __init__(self, name: str, template: Template, helpers: Mapping[str, Any]) -> None:
        self.name = name
        self.template = template
        self.helpers = helpers

    def __call__(self, props: PropBag) -> Markup:
        editable = props.get("editable") or ""
        return Markup(
            self.template.render(
                props=props,
                editable=Markup(editable),
                **self.helpers,
            )
        )

    def __repr__(self) -> str:
        return f"TemplateComponent({self.name!r})"


class MissingTemplate:
    """Render function for a component whose template file is absent."""

    def __init__(self, name: str, placeholder: str = DEFAULT_PLACEHOLDER) -> None:
        self.name = name
        self.placeholder = placeholder

    def __call__(self, props: PropBag) -> Markup:
        return Markup(self.placeholder)

    def __repr__(self) -> str:
        return f"MissingTemplate({self.name!r})"


# =============================================================================
# Registry
# =============================================================================


class ComponentRegistry:
    """Mapping from component type name to its render function."""

    def __init__(self) -> None:
        self._functions: dict[str, RenderFunction] = {}

    def register(self, name: str, function: RenderFunction) -> None:
        self._functions[name] = function

    def get(self, name: str) -> RenderFunction:
        """Look up a render function.

        Raises:
            ComponentNotFoundError: No function is registered for ``name``.
        """
        try:
            return self._functions[name]
        except KeyError:
            raise ComponentNotFoundError(name) from None

    def has(self, name: str) -> bool:
        return name in self._functions

    def names(self) -> list[str]:
        return sorted(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def discover(
        self,
        catalog: SchemaCatalog,
        env: Environment,
        helpers: Mapping[str, Any],
        placeholder: str = DEFAULT_PLACEHOLDER,
    ) -> ComponentRegistry:
        """Register every component in the catalog's directories."""
        for name in catalog.component_names():
            try:
                template = env.get_template(template_name(name))
            except TemplateNotFound:
                logger.warning("Component '%s' has no template; rendering placeholder", name)
                self.register(name, MissingTemplate(name, placeholder))
                continue
            self.register(name, TemplateComponent(name, template, helpers))
        logger.debug("Registered %d components: %s", len(self), ", ".join(self.names()))
        return self


# =============================================================================
# Renderer
# =============================================================================


class ComponentRenderer:
    """
    Renders component invocations to markup.

    Args:
        catalog: Schema source. Defaults to the bundled components.
        registry: Render functions. Defaults to discovering the catalog's
            templates.
        on_unknown_child: ``"raise"`` aborts the render when a child names
            an unregistered type; ``"skip"`` logs and omits that child.
        placeholder: Markup rendered for components without a template.
    """

    def __init__(
        self,
        catalog: SchemaCatalog | None = None,
        registry: ComponentRegistry | None = None,
        *,
        env: Environment | None = None,
        on_unknown_child: str = "raise",
        placeholder: str = DEFAULT_PLACEHOLDER,
    ) -> None:
        if on_unknown_child not in UNKNOWN_CHILD_POLICIES:
            raise ValueError(
                f"on_unknown_child must be one of {', '.join(UNKNOWN_CHILD_POLICIES)}"
            )
        self.catalog = catalog if catalog is not None else SchemaCatalog()
        self.env = env if env is not None else create_jinja_env(self.catalog.components_dirs)
        self.on_unknown_child = on_unknown_child
        if registry is None:
            registry = ComponentRegistry().discover(
                self.catalog, self.env, self.template_helpers(), placeholder
            )
        self.registry = registry

    @classmethod
    def from_manifest(cls, manifest: ProjectManifest) -> ComponentRenderer:
        """Build a renderer configured by anticustom.toml."""
        dirs = manifest.component_dirs() or None
        return cls(
            SchemaCatalog(dirs),
            on_unknown_child=manifest.render.on_unknown_child,
            placeholder=manifest.render.placeholder,
        )

    def template_helpers(self) -> dict[str, Any]:
        """Callables exposed to component templates."""
        return {
            "render_components": self.render_components,
            "render_child": self.render_child,
            "check_child": self.check_child,
            "component": self.render_component,
            "interpolate_props": interpolate_props,
            "resolve_child_props": resolve_child_props,
            "get_schema": self.catalog.get_schema,
        }

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def resolve_props(self, type_: str, props: Mapping[str, Any] | None = None) -> PropBag:
        """Merge the component's schema defaults under ``props``."""
        schema = self.catalog.get_schema(type_)
        return merge_defaults(schema, props or {})

    def render_component(self, type_: str, props: Mapping[str, Any] | None = None) -> Markup:
        """
        Render one component.

        Raises:
            ComponentNotFoundError: ``type_`` has no registered render function.
        """
        function = self.registry.get(type_)
        resolved = self.resolve_props(type_, props)
        logger.debug("Rendering component '%s'", type_)
        output = function(resolved)
        return Markup(str(output).strip())

    def render(self, invocation: ComponentInvocation | dict[str, Any]) -> Markup:
        """Render a top-level invocation node (``{"type": ..., "props": ...}``)."""
        node = ComponentInvocation.coerce(invocation)
        return self.render_component(node.type, node.props)

    def render_components(
        self,
        children: Iterable[ComponentInvocation | dict[str, Any]] | None,
        parent: str | ComponentSchema | None = None,
    ) -> Markup:
        """
        Render child invocations in order.

        Each child's props are resolved against the parent's slot at the
        child's index; the index is passed on as ``_child_index``.
        """
        if not children:
            return Markup("")

        parent_schema = self._parent_schema(parent)
        rendered: list[str] = []

        for index, entry in enumerate(children):
            child = ComponentInvocation.coerce(entry)
            if not self.check_child(child.type, index):
                continue

            child_props = dict(resolve_child_props(parent_schema, index, child.props))
            child_props["_child_index"] = index
            output = self.render_component(child.type, child_props)
            if output:
                rendered.append(output)

        return Markup("\n").join(rendered)

    def check_child(self, type_: str, index: int | None = None) -> bool:
        """
        Apply the unknown-child policy to a nested component type.

        Returns True when ``type_`` is registered. An unknown type raises
        under ``"raise"``; under ``"skip"`` it is logged and False returned.

        Raises:
            ComponentNotFoundError: ``type_`` is unknown and the policy is
                ``"raise"``.
        """
        if self.registry.has(type_):
            return True
        if self.on_unknown_child != "skip":
            raise ComponentNotFoundError(type_)
        if index is None:
            logger.warning("Skipping unknown child component '%s'", type_)
        else:
            logger.warning("Skipping unknown child component '%s' at index %d", type_, index)
        return False

    def render_child(
        self, type_: str, props: Mapping[str, Any] | None = None, index: int | None = None
    ) -> Markup:
        """Render a nested component, honouring the unknown-child policy."""
        if not self.check_child(type_, index):
            return Markup("")
        return self.render_component(type_, props)

    def _parent_schema(self, parent: str | ComponentSchema | None) -> ComponentSchema:
        if isinstance(parent, ComponentSchema):
            return parent
        if parent:
            return self.catalog.get_schema(parent)
        return ComponentSchema()
