"""continuum export / import — move decisions in and out as JSON.

Usage:
  continuum export                          → continuum-decisions-<date>.json
  continuum export --output backup.json --yes
  continuum import backup.json
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from continuum.cli.common import load_cfg, open_store, resolve_db
from continuum.cli.errors import err_import_format, err_import_unreadable, err_output_path_unsafe
from continuum.transfer import (
    ImportFormatError,
    check_overwrite,
    export_filename,
    import_json,
    serialize,
    validate_output_path,
    write_output,
)

console = Console()


def export_cmd(
    output: Annotated[str | None, typer.Option("--output", "-o", help="Output file (default: continuum-decisions-<date>.json).")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Overwrite without asking.")] = False,
    db: Annotated[Path | None, typer.Option("--db", help="Path to .continuum.db.")] = None,
) -> None:
    """Export all decisions to a JSON file."""
    cfg = load_cfg()

    try:
        target = validate_output_path(output or export_filename())
    except ValueError:
        console.print(err_output_path_unsafe(output or ""))
        raise typer.Exit(1)

    with open_store(resolve_db(db, cfg), cfg) as store:
        records = store.dump()
    content = serialize(records)

    if not check_overwrite(target, yes):
        console.print("[dim]Cancelled.[/]")
        raise typer.Exit(0)

    write_output(target, content + "\n")
    console.print(f"[green]✓[/] Exported {len(records)} decisions to {target}")


def import_cmd(
    file: Annotated[Path, typer.Argument(help="JSON file written by continuum export.")],
    db: Annotated[Path | None, typer.Option("--db", help="Path to .continuum.db.")] = None,
) -> None:
    """Import decisions from a JSON file. Decisions already present are kept as-is."""
    cfg = load_cfg()

    try:
        text = file.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        console.print(err_import_format(str(file), "file is not UTF-8 encoded text"))
        raise typer.Exit(1)
    except OSError:
        console.print(err_import_unreadable(str(file)))
        raise typer.Exit(1)

    with open_store(resolve_db(db, cfg), cfg) as store:
        try:
            added = import_json(store, text)
        except ImportFormatError as exc:
            console.print(err_import_format(str(file), str(exc)))
            raise typer.Exit(1)

    console.print(f"[green]✓[/] Successfully imported {added} new decisions")
