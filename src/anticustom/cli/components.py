"""
Component commands for the Anticustom CLI.

render, components, component-css and verify.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.markup import escape
from rich.table import Table

from anticustom.cli.common import console, fail, load_project
from anticustom.core.errors import AnticustomError
from anticustom_ui.runtime import (
    ComponentRenderer,
    SchemaCatalog,
    generate_component_css,
    verify_components,
)


def _parse_props(props: str | None, props_file: Path | None) -> dict[str, Any]:
    if props is not None and props_file is not None:
        fail("Use either --props or --props-file, not both")

    if props_file is not None:
        try:
            props = props_file.read_text(encoding="utf-8")
        except OSError as e:
            fail(f"Cannot read {props_file}: {e.strerror}")

    if not props:
        return {}

    try:
        data = json.loads(props)
    except json.JSONDecodeError as e:
        fail(f"Invalid props JSON: {e}")
    if not isinstance(data, dict):
        fail("Props must be a JSON object")
    return data


def _catalog() -> SchemaCatalog:
    manifest = load_project()
    return SchemaCatalog(manifest.component_dirs() or None)


# =============================================================================
# Commands
# =============================================================================


def render_command(
    component: Annotated[str, typer.Argument(help="Component type to render")],
    props: Annotated[
        str | None, typer.Option("--props", "-p", help="Props as a JSON object")
    ] = None,
    props_file: Annotated[
        Path | None, typer.Option("--props-file", help="Read props from a JSON file")
    ] = None,
) -> None:
    """Render a component (and its children) to HTML."""
    bag = _parse_props(props, props_file)
    renderer = ComponentRenderer.from_manifest(load_project())
    try:
        html = renderer.render({"type": component, "props": bag})
    except AnticustomError as e:
        fail(str(e))
    typer.echo(str(html))


def components_command(
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List discovered components with their labels and style variants."""
    try:
        components = _catalog().scan_components()
    except AnticustomError as e:
        fail(str(e))

    if output_json:
        data = [
            {
                "name": info.name,
                "label": info.label,
                "category": info.schema_.category,
                "styles": info.styles,
                "path": str(info.path),
            }
            for info in components.values()
        ]
        console.print_json(json.dumps(data))
        return

    if not components:
        console.print("[dim]No components found.[/dim]")
        return

    table = Table(title="Components")
    table.add_column("Name", style="cyan")
    table.add_column("Label")
    table.add_column("Category")
    table.add_column("Styles")
    for info in components.values():
        table.add_row(info.name, info.label, info.schema_.category or "", ", ".join(info.styles))
    console.print(table)


def component_css_command(
    style: Annotated[
        str | None, typer.Option("--style", "-s", help="Style variant (default from manifest)")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write CSS to a file")
    ] = None,
) -> None:
    """Concatenate component stylesheets for one style variant."""
    manifest = load_project()
    catalog = SchemaCatalog(manifest.component_dirs() or None)
    css = generate_component_css(catalog, style or manifest.components.default_style)

    if output is not None:
        output.write_text(css, encoding="utf-8")
        console.print(f"[green]Wrote[/green] {output}")
        return
    typer.echo(css, nl=False)


def verify_command() -> None:
    """Render every shipped component with sample props and check the output."""
    renderer = ComponentRenderer.from_manifest(load_project())
    results = verify_components(renderer)

    for result in results:
        status = "[green]OK[/green]" if result.ok else f"[red]ERROR: {escape(result.error or '')}[/red]"
        console.print(f"{result.label:<18} {status}", highlight=False)

    failed = [r for r in results if not r.ok]
    console.print(f"\nPassed: {len(results) - len(failed)}  Failed: {len(failed)}")
    if failed:
        raise typer.Exit(code=1)
