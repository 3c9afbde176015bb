"""continuum remove — delete a decision permanently.

Usage:
  continuum remove 1700000000000
  continuum remove 1700000000000 --yes
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from continuum.cli.common import load_cfg, open_store, resolve_db
from continuum.cli.errors import err_decision_not_found

console = Console()


def remove_cmd(
    record_id: Annotated[int, typer.Argument(help="Id of the decision to delete.")],
    db: Annotated[Path | None, typer.Option("--db", help="Path to .continuum.db.")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompt.")] = False,
) -> None:
    """Delete a decision. This cannot be undone."""
    cfg = load_cfg()

    with open_store(resolve_db(db, cfg), cfg) as store:
        existing = store.get_by_id(record_id)

        if existing is None:
            console.print(err_decision_not_found(record_id))
            raise typer.Exit(0)

        console.print(f"\nDelete decision: [bold]{existing.title}[/]  [dim]({existing.date})[/]")

        if not yes:
            if not typer.confirm("This action cannot be undone. Delete?", default=False):
                console.print("[dim]Cancelled.[/]")
                raise typer.Exit(0)

        store.remove(record_id)

    console.print(f"\n[green]✓[/] Deleted: {existing.title}")
