"""
Design token commands for the Anticustom CLI.
"""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from anticustom.cli.common import console, fail, load_project
from anticustom.core.errors import AnticustomError
from anticustom_ui.specs.tokens import DEFAULT_SCALE_SCHEMA, Colorway, ResolvedTokenTable
from anticustom_ui.themes import (
    compile_colorways,
    compile_tokens,
    emit_css,
    load_scale_schema,
    load_token_document,
)


class OutputFormat(StrEnum):
    CSS = "css"
    JSON = "json"
    TABLE = "table"


def _as_json(table: ResolvedTokenTable, colorways: list[Colorway]) -> str:
    data = {
        "tokens": [token.model_dump() for token in table],
        "colorways": {colorway.name: colorway.values for colorway in colorways},
    }
    return json.dumps(data, indent=2)


def _as_rich_table(table: ResolvedTokenTable) -> Table:
    rich_table = Table(title="Design Tokens")
    rich_table.add_column("Variable", style="cyan")
    rich_table.add_column("Category")
    rich_table.add_column("Value")
    for token in table:
        rich_table.add_row(token.variable_name, token.category, token.value)
    return rich_table


def tokens_command(
    path: Annotated[
        Path | None,
        typer.Argument(help="Token document (JSON). Defaults to [tokens].path in anticustom.toml"),
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write the result to a file")
    ] = None,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="css, json or table")
    ] = OutputFormat.CSS,
    scale_schema: Annotated[
        Path | None, typer.Option("--scale-schema", help="Custom scale schema (JSON)")
    ] = None,
) -> None:
    """Compile a design token document to CSS custom properties."""
    manifest = load_project()

    source = path or manifest.token_path()
    if source is None:
        fail("No token document given and [tokens].path is not set in anticustom.toml")

    schema_path = scale_schema or manifest.scale_schema_path()
    if output is None and output_format == OutputFormat.CSS:
        output = manifest.output_path()

    try:
        doc = load_token_document(source)
        schema = load_scale_schema(schema_path) if schema_path else DEFAULT_SCALE_SCHEMA
        table = compile_tokens(doc, schema)
        colorways = compile_colorways(doc)
    except AnticustomError as e:
        fail(str(e))

    if output_format == OutputFormat.TABLE:
        console.print(_as_rich_table(table))
        return

    if output_format == OutputFormat.JSON:
        text = _as_json(table, colorways) + "\n"
    else:
        text = emit_css(table, colorways)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Wrote {len(table)} tokens to[/green] {output}")
        return
    typer.echo(text, nl=False)
