"""
tokencraft command line interface.

Commands:
- build: Build the stylesheet and constants module from tokencraft.toml
- css: Render a stylesheet from token files
- constants: Render a Python constants module from token files
- resolve: Print the resolved value of one token
- version: Show the installed version
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from tokencraft import __version__
from tokencraft.core.build import build_project
from tokencraft.core.constants_export import export_constants_file, generate_constants_module
from tokencraft.core.css_export import export_stylesheet_file, generate_stylesheets
from tokencraft.core.errors import TokenError
from tokencraft.core.ir.tokens import Document
from tokencraft.core.ir.values import to_display
from tokencraft.core.manifest import MANIFEST_FILE, load_manifest
from tokencraft.core.resolver import TokenResolver
from tokencraft.core.token_loader import DEFAULT_DOCUMENT_NAME, load_documents

app = typer.Typer(
    help="Build stylesheets and typed constants from design token exports",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(code=1)


def _load(files: list[Path], name: str) -> list[Document]:
    try:
        return load_documents(files, name)
    except TokenError as e:
        raise _fail(e)


@app.command(name="build")
def build_command(
    manifest: Path = typer.Option(  # noqa: B008
        Path(MANIFEST_FILE),
        "--manifest",
        "-m",
        help="Path to tokencraft.toml",
    ),
    out_dir: Path | None = typer.Option(
        None,
        "--out-dir",
        "-o",
        help="Output directory (overrides the manifest)",
    ),
) -> None:
    """Build the stylesheet and constants module for a project."""
    try:
        project = load_manifest(manifest)
        result = build_project(project, out_dir)
    except TokenError as e:
        raise _fail(e)

    table = Table(title="Design tokens", caption=f"{result.token_count} tokens total")
    table.add_column("Document", style="cyan")
    table.add_column("Tokens", justify="right")
    for doc in result.documents:
        table.add_row(doc.name, str(sum(1 for _ in doc.tokens())))
    console.print(table)
    console.print(f"[green]Stylesheet:[/green] {result.stylesheet_path}")
    console.print(f"[green]Constants:[/green] {result.constants_path}")


@app.command(name="css")
def css_command(
    files: list[Path] = typer.Argument(..., help="Token JSON files"),  # noqa: B008
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
    name: str = typer.Option(DEFAULT_DOCUMENT_NAME, "--name", help="Default document name"),
    root_selector: str | None = typer.Option(
        None, "--root-selector", help="Selector scoping declarations (default: .<name>)"
    ),
) -> None:
    """Render a stylesheet from token files."""
    documents = _load(files, name)
    try:
        if output is not None:
            export_stylesheet_file(documents, output, root_selector)
            typer.echo(f"Wrote {output}")
        else:
            typer.echo(generate_stylesheets(documents, root_selector))
    except TokenError as e:
        raise _fail(e)


@app.command(name="constants")
def constants_command(
    files: list[Path] = typer.Argument(..., help="Token JSON files"),  # noqa: B008
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
    name: str = typer.Option(DEFAULT_DOCUMENT_NAME, "--name", help="Default document name"),
) -> None:
    """Render a Python constants module from token files."""
    documents = _load(files, name)
    try:
        if output is not None:
            export_constants_file(documents, output)
            typer.echo(f"Wrote {output}")
        else:
            typer.echo(generate_constants_module(documents), nl=False)
    except TokenError as e:
        raise _fail(e)


@app.command(name="resolve")
def resolve_command(
    file: Path = typer.Argument(..., help="Token JSON file"),  # noqa: B008
    path: str = typer.Argument(..., help="Dot-separated token path, e.g. Color.Brand"),
    document: str | None = typer.Option(
        None, "--document", "-d", help="Document name (default: first document)"
    ),
    name: str = typer.Option(DEFAULT_DOCUMENT_NAME, "--name", help="Default document name"),
) -> None:
    """Print the resolved value of one token."""
    documents = _load([file], name)
    candidates = [d for d in documents if document is None or d.name == document]
    if not candidates:
        typer.echo(f"Error: no document named {document!r}", err=True)
        raise typer.Exit(code=1)

    segments = tuple(path.split("."))
    resolver = TokenResolver(candidates[0])
    try:
        token = resolver.lookup(segments)
        value = resolver.resolve_token(segments, token)
    except TokenError as e:
        raise _fail(e)
    typer.echo(to_display(value))


@app.command(name="version")
def version_command() -> None:
    """Show the installed version."""
    typer.echo(f"tokencraft {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
