"""continuum init — create a journal in a directory.

Creates:
  .continuum.db            — empty journal database with schema
  continuum.yaml           — project config template (if missing)
  ~/.continuum/config.yaml — global defaults (created once, mode 0o600)
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from continuum.config import ensure_global_config
from continuum.db.connection import Database

console = Console()

_DEFAULT_PROJECT_DIR = Path(".")
_DB_NAME = ".continuum.db"

_PROJECT_YAML = """\
# Continuum project configuration.
storage:
  path: .continuum.db

insights:
  latency_seconds: 1.0
  recent_window: 5

timeline:
  items_per_page: 5

# Extra auto-tagging rules, appended to the built-in keyword families:
# tagging:
#   extend: true
#   rules:
#     - tag: health
#       keywords: [doctor, sleep, exercise]
"""


def init_cmd(
    project_dir: Annotated[
        Path,
        typer.Argument(help="Directory to initialize. Defaults to current directory."),
    ] = _DEFAULT_PROJECT_DIR,
    global_config: Annotated[
        Path | None,
        typer.Option("--global-config", hidden=True, help="Override global config path (for testing)."),
    ] = None,
) -> None:
    """Create a decision journal in PROJECT_DIR."""
    project_dir = project_dir.resolve()
    project_dir.mkdir(parents=True, exist_ok=True)

    db_path = project_dir / _DB_NAME
    if db_path.exists():
        console.print(f"[yellow]⚠[/]  {db_path} already exists; existing decisions are kept.")

    Database(db_path).open().close()
    console.print(f"  [green]✓[/] {_DB_NAME}")

    yaml_path = project_dir / "continuum.yaml"
    if not yaml_path.exists():
        yaml_path.write_text(_PROJECT_YAML, encoding="utf-8")
        console.print("  [green]✓[/] continuum.yaml")

    cfg_path = ensure_global_config(global_config)
    console.print(f"  [green]✓[/] {cfg_path} (global config)")

    console.print("\n[bold green]✓ Journal initialized.[/]")
    console.print("\nNext steps:")
    console.print("  1. continuum add                 (capture a decision)")
    console.print("  2. continuum list                (browse your timeline)")
    console.print("  3. continuum insights patterns   (see what your history says)")
