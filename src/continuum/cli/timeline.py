"""continuum list / show — browse the decision timeline.

Usage:
  continuum list --search laptop --timeframe month --tag financial --page 2
  continuum show 1700000000000
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from continuum.cli.common import load_cfg, open_store, resolve_db
from continuum.cli.errors import err_bad_filter, err_decision_not_found
from continuum.db.models import DecisionRecord
from continuum.engine.query import QueryEngine, QueryFilter, paginate

console = Console()


def list_cmd(
    search: Annotated[str, typer.Option("--search", "-s", help="Text to look for in titles, reasoning and tags.")] = "",
    timeframe: Annotated[str, typer.Option("--timeframe", "-t", help="all | week | month | year")] = "all",
    tag: Annotated[str, typer.Option("--tag", help="Only decisions with this tag.")] = "all",
    page: Annotated[int, typer.Option("--page", "-p", help="Page number (1-based).")] = 1,
    per_page: Annotated[int | None, typer.Option("--per-page", help="Decisions per page.")] = None,
    db: Annotated[Path | None, typer.Option("--db", help="Path to .continuum.db.")] = None,
) -> None:
    """List decisions, newest first."""
    cfg = load_cfg()

    try:
        query_filter = QueryFilter(timeframe=timeframe, tag=tag)
    except ValueError as exc:
        console.print(err_bad_filter(str(exc)))
        raise typer.Exit(1)

    with open_store(resolve_db(db, cfg), cfg) as store:
        matches = QueryEngine().query(store.list(), query_filter, search)

    try:
        result = paginate(matches, page, per_page or cfg.timeline.items_per_page)
    except ValueError as exc:
        console.print(err_bad_filter(str(exc)))
        raise typer.Exit(1)

    if not result.items:
        hint = "Try a different search term or filter." if (search or matches) else "Run:  continuum add"
        console.print(f"[yellow]No decisions found.[/]\n  {hint}")
        raise typer.Exit(0)

    table = Table(title="Decision Timeline", show_header=True, header_style="bold")
    table.add_column("Id", style="dim")
    table.add_column("Date")
    table.add_column("Title", style="bold")
    table.add_column("Tags")
    table.add_column("Emotion", justify="right")

    for record in result.items:
        table.add_row(
            str(record.id),
            record.date,
            record.title,
            ", ".join(record.tags),
            f"{_emotion_icon(record.emotional_state)} {record.emotional_state}/10",
        )

    console.print(table)
    console.print(f"\n  Page {result.page}/{result.total_pages}  ({result.total} decisions)")


def show_cmd(
    record_id: Annotated[int, typer.Argument(help="Id of the decision to show.")],
    db: Annotated[Path | None, typer.Option("--db", help="Path to .continuum.db.")] = None,
) -> None:
    """Show one decision in full."""
    cfg = load_cfg()

    with open_store(resolve_db(db, cfg), cfg) as store:
        record = store.get_by_id(record_id)

    if record is None:
        console.print(err_decision_not_found(record_id))
        raise typer.Exit(0)

    console.print(Panel(_render(record), title=f"[bold]{record.title}[/]", expand=False))


def _render(record: DecisionRecord) -> str:
    lines = [
        f"[dim]{record.date}  ·  id {record.id}[/]",
        "",
        f"[bold]Intent:[/]         {record.intent}",
        f"[bold]Constraints:[/]    {record.constraints}",
        f"[bold]Alternatives:[/]   {record.alternatives or '—'}",
        f"[bold]Final decision:[/] {record.final_decision}",
        f"[bold]Reasoning:[/]      {record.reasoning}",
        "",
        f"Emotional state: {_emotion_icon(record.emotional_state)} ({record.emotional_state}/10)",
    ]
    if record.tags:
        lines.append(f"Tags: {', '.join(record.tags)}")
    return "\n".join(lines)


def _emotion_icon(state: int) -> str:
    if state <= 3:
        return "😟"
    if state <= 7:
        return "😐"
    return "😊"
