"""Command-line interface for podrender.

Commands:
    podrender render INPUT OUTPUT [--format text|html|pod] [options]
    podrender dump INPUT

Exit codes:
    0  success (unresolved references are reported but do not fail the run)
    1  the input is not valid Pod
    2  a file could not be read or written, or the configuration is invalid
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from podrender import parse, render_document
from podrender.config import OutputFormat, ParseConfig, RenderConfig, load_config, load_references
from podrender.errors import ConfigError, ParseError, ReferenceWarning
from podrender.files import read_source, write_output
from podrender.highlighting import has_highlighter
from podrender.nodes import Document
from podrender.serialization import to_json

EXIT_PARSE_ERROR = 1
EXIT_IO_ERROR = 2

app = typer.Typer(
    name="podrender",
    help="Render Pod documentation as plain text, HTML or Pod.",
    add_completion=False,
    no_args_is_help=True,
)

# Diagnostics go to stderr so stdout stays clean for `dump`
console = Console(stderr=True, soft_wrap=True)


@app.callback()
def main() -> None:
    """Render Pod documentation as plain text, HTML or Pod."""


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logger = logging.getLogger("podrender")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def _load_settings(
    config_path: Optional[Path], refs_path: Optional[Path]
) -> tuple[ParseConfig, RenderConfig]:
    if config_path is not None:
        parse_config, render_config = load_config(config_path)
    else:
        parse_config, render_config = ParseConfig(), RenderConfig()
    if refs_path is not None:
        render_config = render_config.with_references(load_references(refs_path))
    return parse_config, render_config


def _parse_file(path: Path, parse_config: ParseConfig) -> Document:
    """Read and parse ``path``, exiting with the matching code on failure."""
    try:
        source = read_source(path)
    except OSError as e:
        console.print(f"[red]Error: cannot read {escape(str(path))}: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_IO_ERROR) from e
    try:
        return parse(source, source_file=str(path), config=parse_config)
    except ParseError as e:
        console.print(f"[red]Parse error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_PARSE_ERROR) from e


def _report_warnings(warnings: tuple[ReferenceWarning, ...]) -> None:
    for warning in warnings:
        console.print(f"[yellow]Warning: {escape(str(warning))}[/yellow]")


@app.command()
def render(
    input_path: Path = typer.Argument(..., help="Pod source file to read"),
    output_path: Path = typer.Argument(..., help="File to write the rendered output to"),
    output_format: Optional[OutputFormat] = typer.Option(
        None, "--format", "-f", case_sensitive=False, help="Output format (default: text)"
    ),
    refs: Optional[Path] = typer.Option(
        None, "--refs", help="JSON or TOML file mapping reference names to locations"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="TOML file with [parse], [render] and [references] tables"
    ),
    standalone: bool = typer.Option(False, "--standalone", help="Wrap HTML in a full page"),
    highlight: bool = typer.Option(False, "--highlight", help="Syntax-highlight HTML code"),
    width: Optional[int] = typer.Option(
        None, "--width", min=1, help="Wrap plain-text paragraphs at this width"
    ),
    strict: bool = typer.Option(False, "--strict", help="Reject unknown directives"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Render a Pod file to text, HTML or Pod.

    Unresolved cross-references are printed as warnings; the output file is
    still written and the exit code stays 0.
    """
    _configure_logging(verbose)
    try:
        parse_config, render_config = _load_settings(config_path, refs)
    except ConfigError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_IO_ERROR) from e
    except OSError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_IO_ERROR) from e

    if strict:
        parse_config = replace(parse_config, strict=True)
    overrides: dict[str, Any] = {}
    if output_format is not None:
        overrides["format"] = output_format
    if standalone:
        overrides["standalone"] = True
    if highlight:
        overrides["highlight"] = True
    if width is not None:
        overrides["text_width"] = width
    if overrides:
        render_config = replace(render_config, **overrides)
    if render_config.highlight and render_config.format is OutputFormat.HTML:
        if not has_highlighter():
            console.print(
                f"[yellow]Note: install {escape('podrender[syntax]')} to highlight code[/yellow]"
            )

    doc = _parse_file(input_path, parse_config)
    result = render_document(doc, render_config)

    try:
        write_output(output_path, result.output)
    except OSError as e:
        console.print(
            f"[red]Error: cannot write {escape(str(output_path))}: {escape(str(e))}[/red]"
        )
        raise typer.Exit(EXIT_IO_ERROR) from e

    _report_warnings(result.warnings)
    if verbose:
        console.print(
            f"[green]Wrote {escape(str(output_path))}[/green] "
            f"({len(doc)} blocks, {len(result.warnings)} warnings)"
        )


@app.command()
def dump(
    input_path: Path = typer.Argument(..., help="Pod source file to read"),
    indent: int = typer.Option(2, "--indent", min=0, help="JSON indentation"),
    strict: bool = typer.Option(False, "--strict", help="Reject unknown directives"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Print the parsed document model as JSON."""
    _configure_logging(verbose)
    doc = _parse_file(input_path, ParseConfig(strict=strict))
    typer.echo(to_json(doc, indent=indent or None))


if __name__ == "__main__":
    app()
