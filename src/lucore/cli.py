"""
lucore command line interface.

Commands:
- parse: Parse LU files and print the consolidated model as JSON
- validate: Parse LU files and print a summary, failing on any error
"""

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from lucore._version import get_version
from lucore.core.errors import LuError
from lucore.core.manifest import ParseOptions, load_options
from lucore.core.parser import parse_files

CONFIG_FILE = "lucore.toml"

console = Console()

app = typer.Typer(
    help="lucore - semantic compiler for .lu and .qna files",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lucore {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
) -> None:
    """lucore CLI main callback for global options."""
    pass


def configure_logging(verbose: bool) -> None:
    # stdout is reserved for JSON output
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def resolve_options(
    config: Path | None, locale: str | None, verbose: bool | None
) -> ParseOptions:
    """
    Build parse options from the config file and command line overrides.

    ``lucore.toml`` in the current directory is used when ``config`` is not given.
    """
    if config is None and Path(CONFIG_FILE).exists():
        config = Path(CONFIG_FILE)
    options = load_options(config) if config is not None else ParseOptions()
    return options.with_overrides(locale=locale.lower() if locale else None, verbose=verbose)


@app.command()
def parse(
    files: list[Path] = typer.Argument(..., help="LU files to parse"),  # noqa: B008
    locale: str | None = typer.Option(None, "--locale", "-l", help="Target locale"),
    verbose: bool | None = typer.Option(
        None, "--verbose/--quiet", help="Log warnings and skip unavailable prebuilt entities"
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help=f"Path to {CONFIG_FILE}"
    ),
    out: Path | None = typer.Option(  # noqa: B008
        None, "--out", "-o", help="Write JSON here instead of stdout"
    ),
) -> None:
    """
    Parse LU files and print the consolidated model as JSON.

    Each file is parsed into its own model; several files give a JSON list.
    """
    try:
        options = resolve_options(config, locale, verbose)
        configure_logging(options.verbose)
        results = parse_files(files, options)
    except LuError as e:
        typer.echo(f"Error [{e.code.value}]: {e}", err=True)
        raise typer.Exit(code=1)

    payload = [content.to_dict() for content in results]
    text = json.dumps(payload[0] if len(payload) == 1 else payload, indent=2)
    if out is not None:
        out.write_text(text + "\n", encoding="utf-8")
        typer.echo(f"Wrote {out}", err=True)
    else:
        typer.echo(text)


@app.command()
def validate(
    files: list[Path] = typer.Argument(..., help="LU files to validate"),  # noqa: B008
    locale: str | None = typer.Option(None, "--locale", "-l", help="Target locale"),
    verbose: bool | None = typer.Option(None, "--verbose/--quiet", help="Log warnings"),
    config: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help=f"Path to {CONFIG_FILE}"
    ),
) -> None:
    """
    Parse LU files and report a summary.

    Exits with status 1 on the first file that fails to parse.
    """
    try:
        options = resolve_options(config, locale, verbose)
        configure_logging(options.verbose)
    except LuError as e:
        typer.echo(f"Error [{e.code.value}]: {e}", err=True)
        raise typer.Exit(code=1)

    table = Table(title="LU files")
    table.add_column("File", style="cyan")
    table.add_column("Intents", justify="right")
    table.add_column("Utterances", justify="right")
    table.add_column("Patterns", justify="right")
    table.add_column("Entities", justify="right")
    table.add_column("QnA pairs", justify="right")

    for path in files:
        try:
            [content] = parse_files([path], options)
        except LuError as e:
            typer.echo(f"Error [{e.code.value}]: {e}", err=True)
            raise typer.Exit(code=1)

        luis = content.luis
        table.add_row(
            str(path),
            str(len(luis.intents)),
            str(len(luis.utterances)),
            str(len(luis.patterns)),
            str(sum(1 for _ in luis.registry.records())),
            str(len(content.qna.qna_list)),
        )

    console.print(table)
    console.print(f"[green]OK[/green] {len(files)} file(s) valid")


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
