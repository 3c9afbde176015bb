"""Continuum CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from continuum.cli.capture import add_cmd, edit_cmd
from continuum.cli.init import init_cmd
from continuum.cli.insights import insights_cmd, review_cmd, stats_cmd
from continuum.cli.remove import remove_cmd
from continuum.cli.timeline import list_cmd, show_cmd
from continuum.cli.transfer import export_cmd, import_cmd
from continuum.logs import setup_logging


def _version() -> str:
    try:
        return importlib.metadata.version("continuum")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"continuum {_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="continuum",
    help=(
        "Continuum — a decision journal that remembers why.\n\n"
        "  continuum add       Capture a decision.\n"
        "  continuum insights  Heuristic patterns, biases and suggestions from your history."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging."),
    ] = False,
) -> None:
    """Continuum — a decision journal that remembers why."""
    setup_logging(verbose)


app.command("init")(init_cmd)
app.command("add")(add_cmd)
app.command("edit")(edit_cmd)
app.command("list")(list_cmd)
app.command("show")(show_cmd)
app.command("remove")(remove_cmd)
app.command("insights")(insights_cmd)
app.command("review")(review_cmd)
app.command("stats")(stats_cmd)
app.command("export")(export_cmd)
app.command("import")(import_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed Continuum version."""
    typer.echo(f"continuum {_version()}")


if __name__ == "__main__":
    app()
