"""Shared CLI helpers: global options, manifest loading and error output."""

from __future__ import annotations

import logging
import platform
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from anticustom._version import get_version
from anticustom.core.errors import AnticustomError
from anticustom.core.manifest import ProjectManifest, find_manifest, load_manifest

console = Console()
err_console = Console(stderr=True)

# Set by the main callback
_manifest_override: Path | None = None


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"Anticustom version {get_version()}")
        typer.echo(f"  Python:   {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform: {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def set_manifest_path(path: Path | None) -> None:
    global _manifest_override
    _manifest_override = path


def fail(message: str) -> NoReturn:
    """Print an error to stderr and exit with code 1."""
    err_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
    raise typer.Exit(code=1)


def load_project() -> ProjectManifest:
    """Load the manifest named by --manifest, or anticustom.toml in the cwd."""
    try:
        if _manifest_override is not None:
            if not _manifest_override.is_file():
                fail(f"Manifest not found: {_manifest_override}")
            return load_manifest(_manifest_override)
        return find_manifest()
    except AnticustomError as e:
        fail(str(e))
