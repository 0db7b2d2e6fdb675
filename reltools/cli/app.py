from __future__ import annotations

import typer

from reltools import __version__
from reltools.cli.commands.pick_cmd import pick_app
from reltools.cli.commands.version_cmd import version_app


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(version_app, name="version", help="Derive names and targets from versions.")
app.add_typer(pick_app, name="pick", help="Report cherry-pick outcomes.")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    del version


def main() -> None:
    app()
