"""continuum insights / review / stats — heuristic analysis of the journal.

Usage:
  continuum insights patterns        (patterns | biases | improvements | sentiment)
  continuum insights biases --json
  continuum review 1700000000000
  continuum stats
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from continuum.cli.common import load_cfg, make_generator, open_store, resolve_db
from continuum.cli.errors import err_decision_not_found, err_unknown_kind
from continuum.engine.insights import KINDS, REPORT_TITLES, Insight, Severity
from continuum.engine.review import collection_stats, monthly_activity, recent, review_decision

console = Console()

_SEVERITY_STYLE = {
    Severity.INFO: "cyan",
    Severity.WARNING: "yellow",
    Severity.DANGER: "red",
}


def insights_cmd(
    kind: Annotated[str, typer.Argument(help="patterns | biases | improvements | sentiment")],
    as_json: Annotated[bool, typer.Option("--json", help="Print insights as JSON.")] = False,
    db: Annotated[Path | None, typer.Option("--db", help="Path to .continuum.db.")] = None,
) -> None:
    """Analyze your decision history for one kind of insight."""
    if kind not in KINDS:
        console.print(err_unknown_kind(kind, list(KINDS)))
        raise typer.Exit(1)

    cfg = load_cfg()
    with open_store(resolve_db(db, cfg), cfg) as store:
        records = store.list()

    generator = make_generator(cfg)
    if as_json:
        insights = asyncio.run(generator.run(kind, records))
        typer.echo(json.dumps([i.to_dict() for i in insights], indent=2, ensure_ascii=False))
        return

    if not records:
        console.print(
            "[yellow]No data yet.[/]\n"
            "  Capture some decisions first to get insights.\n"
            "  Run:  continuum add"
        )
        raise typer.Exit(0)

    with console.status(f"Analyzing {len(records)} decisions for {kind} insights…"):
        insights = asyncio.run(generator.run(kind, records))

    console.print(f"\n[bold]{REPORT_TITLES[kind]}[/]")
    console.print(f"Based on analysis of {len(records)} decisions in your memory:\n")

    if not insights:
        console.print("[dim]Nothing stands out right now. Keep capturing decisions.[/]")
        return

    for insight in insights:
        console.print(_render_insight(insight))


def review_cmd(
    record_id: Annotated[int, typer.Argument(help="Id of the decision to review.")],
    db: Annotated[Path | None, typer.Option("--db", help="Path to .continuum.db.")] = None,
) -> None:
    """Review one decision's documentation quality."""
    cfg = load_cfg()
    with open_store(resolve_db(db, cfg), cfg) as store:
        record = store.get_by_id(record_id)

    if record is None:
        console.print(err_decision_not_found(record_id))
        raise typer.Exit(0)

    review = review_decision(record)
    lines = [
        f"Emotional state: {review.emotional_state}/10",
        "",
        "[bold]Decision quality indicators[/]",
        f"  • Reasoning length: {review.reasoning_length} characters",
        f"  • Alternatives considered: {review.alternatives}",
        f"  • Constraints documented: {review.constraints}",
        "",
        f"Key tags: {', '.join(record.tags) if record.tags else 'None'}",
        "",
        "[bold]Insight[/]",
    ]
    lines.extend(f"  {note}" for note in review.notes)
    console.print(Panel("\n".join(lines), title=f"[bold]Analysis of \"{record.title}\"[/]", expand=False))


def stats_cmd(
    db: Annotated[Path | None, typer.Option("--db", help="Path to .continuum.db.")] = None,
) -> None:
    """Show journal statistics and recent activity."""
    cfg = load_cfg()
    with open_store(resolve_db(db, cfg), cfg) as store:
        records = store.list()

    stats = collection_stats(records)
    console.print(
        Panel(
            f"Decisions: [bold]{stats.total}[/]  |  This month: [bold]{stats.this_month}[/]  |  "
            f"Avg emotional state: [bold]{stats.average_emotion:.1f}[/]\n"
            f"Time-sensitive: {stats.time_sensitive}  |  Financial: {stats.financial}  |  "
            f"Learning: {stats.learning}",
            title="[bold]Journal[/]",
            expand=False,
        )
    )

    table = Table(title="Decisions per month", show_header=True, header_style="bold")
    table.add_column("Month")
    table.add_column("Decisions", justify="right")
    for label, count in monthly_activity(records):
        table.add_row(label, str(count))
    console.print(table)

    latest = recent(records)
    if latest:
        console.print("\n[bold]Recent decisions[/]")
        for record in latest:
            summary = record.final_decision[:50] + ("..." if len(record.final_decision) > 50 else "")
            console.print(f"  [bold]{record.title}[/] — {summary} [dim]({record.date})[/]")


def _render_insight(insight: Insight) -> Panel:
    style = _SEVERITY_STYLE[insight.severity]
    heading = f"{insight.icon} {insight.title}".strip()
    return Panel(
        insight.message,
        title=f"[bold {style}]{heading}[/]",
        subtitle=f"{insight.confidence}% confidence",
        border_style=style,
        expand=False,
    )
