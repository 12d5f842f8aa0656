from __future__ import annotations

import typer

from relman import __version__
from relman.cli.commands.release_cmd import build, collect, targets


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(build)
app.command()(collect)
app.command()(targets)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """Bundle a Tauri app per macOS target and write the updater latest.json."""


def main() -> None:
    app()
