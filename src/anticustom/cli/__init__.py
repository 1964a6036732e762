"""
Anticustom CLI.

- components.py: render, components, component-css, verify
- tokens.py: tokens
- common.py: global options and shared helpers
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from anticustom.cli.common import configure_logging, set_manifest_path, version_callback
from anticustom.cli.components import (
    component_css_command,
    components_command,
    render_command,
    verify_command,
)
from anticustom.cli.tokens import tokens_command

app = typer.Typer(
    help="""Anticustom: composable UI components and design tokens

Commands:
  • render, components, component-css, verify
    → Work with the component library

  • tokens
    → Compile a design token document to CSS
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    manifest: Annotated[
        Path | None,
        typer.Option("--manifest", "-m", help="Path to anticustom.toml (default: ./anticustom.toml)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging")] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
) -> None:
    """Anticustom CLI main callback for global options."""
    configure_logging(verbose)
    set_manifest_path(manifest)


app.command(name="render")(render_command)
app.command(name="components")(components_command)
app.command(name="component-css")(component_css_command)
app.command(name="verify")(verify_command)
app.command(name="tokens")(tokens_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
