"""rsfmt command line: render templates and catalog messages, inspect templates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rsfmt.arguments import Renderer
from rsfmt.catalog import parse_catalog_file
from rsfmt.config import RenderConfig
from rsfmt.demo import run_demo
from rsfmt.errors import FormatError
from rsfmt.options import Count
from rsfmt.parser import parse_template

app = typer.Typer(name="rsfmt", no_args_is_help=True)
_con = Console()


def parse_value(text: str) -> object:
    """Interpret a command line argument as a YAML value (``31`` is an int)."""
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        return text


def parse_named(items: list[str]) -> dict[str, object]:
    named: dict[str, object] = {}
    for item in items:
        name, separator, value = item.partition("=")
        if not separator or not name:
            raise typer.BadParameter(f"Expected name=value, got {item!r}", param_hint="--arg")
        named[name] = parse_value(value)
    return named


def _count_text(count: Count | None) -> str:
    """A width or precision as written in the template (``5``, ``1$``, ``name$``)."""
    if count is None:
        return ""
    if isinstance(count, int):
        return str(count)
    return f"{count}$"


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"error: {error}", err=True)
    return typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Rust-style format strings."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s  %(message)s")


@app.command("render")
def render_command(
    template: str = typer.Argument(help="Format string, e.g. '{} days'"),
    values: Optional[list[str]] = typer.Argument(None, help="Positional arguments"),
    named: Optional[list[str]] = typer.Option(None, "--arg", "-a", help="Named argument as name=value"),
    lenient: bool = typer.Option(False, "--lenient", help="Allow unused arguments"),
):
    """Render a template with the given arguments."""
    renderer = Renderer(RenderConfig(strict=not lenient, capture=False))
    try:
        text = renderer.render(
            parse_template(template),
            [parse_value(value) for value in values or ()],
            parse_named(named or []),
        )
    except FormatError as e:
        raise _fail(e) from e
    typer.echo(text)


@app.command("catalog")
def catalog_command(
    file: Path = typer.Argument(help="Catalog file (.yaml, .yml, .json or .toml)"),
    name: str = typer.Argument(help="Message name"),
    values: Optional[list[str]] = typer.Argument(None, help="Positional arguments"),
    named: Optional[list[str]] = typer.Option(None, "--arg", "-a", help="Named argument as name=value"),
):
    """Render a message from a catalog file."""
    try:
        catalog = parse_catalog_file(file)
        text = catalog.render(
            name,
            *[parse_value(value) for value in values or ()],
            **parse_named(named or []),
        )
    except (ValueError, KeyError, OSError) as e:
        raise _fail(e) from e
    typer.echo(text)


@app.command("check")
def check_command(
    template: str = typer.Argument(help="Format string to inspect"),
):
    """Parse a template and list its placeholders."""
    try:
        parsed = parse_template(template)
    except FormatError as e:
        raise _fail(e) from e

    table = Table(title=f"Placeholders ({sum(1 for _ in parsed.placeholders())})", show_lines=False)
    table.add_column("Argument", style="cyan", no_wrap=True)
    table.add_column("Trait", style="bold")
    table.add_column("Width")
    table.add_column("Precision")
    for placeholder in parsed.placeholders():
        spec = placeholder.spec
        table.add_row(
            escape(str(placeholder.argument)),
            spec.trait.name.lower(),
            _count_text(spec.width),
            _count_text(spec.precision),
        )
    _con.print(table)
    typer.echo(f"positional arguments: {parsed.positional_count}")
    typer.echo(f"named arguments: {', '.join(sorted(parsed.names)) or '-'}")


@app.command("demo")
def demo_command():
    """Run the guided tour of the format syntax."""
    table = Table(title="rsfmt tour", show_lines=False)
    table.add_column("Template", style="cyan", no_wrap=True)
    table.add_column("Output", style="bold")
    table.add_column("", no_wrap=True)
    table.add_column("Note", style="dim")
    failures = 0
    for result in run_demo():
        if not result.passed:
            failures += 1
        table.add_row(
            escape(result.case.template),
            escape(repr(result.output)),
            "ok" if result.passed else "FAIL",
            result.case.comment,
        )
    _con.print(table)
    if failures:
        typer.echo(f"{failures} case(s) failed", err=True)
        raise typer.Exit(1)
