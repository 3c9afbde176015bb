"""continuum add / edit — capture and revise decisions.

Usage:
  continuum add --title "Buy laptop" --intent ... --constraints ... \\
                --final "Refurbished" --reasoning ... --emotion 7 --tags "tech, money"
  continuum edit 1700000000000 --reasoning "Better value" --emotion 8

Any required field not given as an option is prompted for.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from continuum.cli.common import load_cfg, make_classifier, open_store, resolve_db, split_tags
from continuum.cli.errors import err_decision_not_found, err_invalid_record
from continuum.db.models import RecordValidationError, new_record

console = Console()


def add_cmd(
    title: Annotated[str, typer.Option("--title", prompt="Title", help="Short name for the decision.")],
    intent: Annotated[str, typer.Option("--intent", prompt="Intent", help="What you were trying to achieve.")],
    constraints: Annotated[str, typer.Option("--constraints", prompt="Constraints", help="Limits you were working under.")],
    final_decision: Annotated[str, typer.Option("--final", prompt="Final decision", help="What you decided.")],
    reasoning: Annotated[str, typer.Option("--reasoning", prompt="Reasoning", help="Why you decided it.")],
    alternatives: Annotated[str, typer.Option("--alternatives", help="Options you considered.")] = "",
    emotion: Annotated[int, typer.Option("--emotion", "-e", help="Emotional state, 0 (low) to 10 (high).")] = 5,
    tags: Annotated[str, typer.Option("--tags", help="Comma-separated tags.")] = "",
    db: Annotated[Path | None, typer.Option("--db", help="Path to .continuum.db.")] = None,
) -> None:
    """Capture a new decision. Tags are enriched from the constraints and reasoning."""
    cfg = load_cfg()

    try:
        record = new_record(
            title=title,
            intent=intent,
            constraints=constraints,
            final_decision=final_decision,
            reasoning=reasoning,
            alternatives=alternatives,
            emotional_state=emotion,
            tags=split_tags(tags),
            classifier=make_classifier(cfg),
        )
    except RecordValidationError as exc:
        console.print(err_invalid_record(str(exc)))
        raise typer.Exit(1)

    with open_store(resolve_db(db, cfg), cfg) as store:
        stored = store.add(record)

    console.print(f"[green]✓[/] Decision saved: [bold]{stored.title}[/]  (id {stored.id})")
    if stored.tags:
        console.print(f"  Tags: {', '.join(stored.tags)}")


def edit_cmd(
    record_id: Annotated[int, typer.Argument(help="Id of the decision to edit.")],
    title: Annotated[str | None, typer.Option("--title")] = None,
    intent: Annotated[str | None, typer.Option("--intent")] = None,
    constraints: Annotated[str | None, typer.Option("--constraints")] = None,
    alternatives: Annotated[str | None, typer.Option("--alternatives")] = None,
    final_decision: Annotated[str | None, typer.Option("--final")] = None,
    reasoning: Annotated[str | None, typer.Option("--reasoning")] = None,
    emotion: Annotated[int | None, typer.Option("--emotion", "-e")] = None,
    tags: Annotated[str | None, typer.Option("--tags", help="Replaces all tags (comma-separated).")] = None,
    db: Annotated[Path | None, typer.Option("--db", help="Path to .continuum.db.")] = None,
) -> None:
    """Revise a decision. Only the given fields change; the timestamp is renewed."""
    cfg = load_cfg()

    fields: dict[str, Any] = {}
    for key, value in (
        ("title", title),
        ("intent", intent),
        ("constraints", constraints),
        ("alternatives", alternatives),
        ("finalDecision", final_decision),
        ("reasoning", reasoning),
    ):
        if value is not None:
            fields[key] = value
    if emotion is not None:
        fields["emotionalState"] = emotion
    if tags is not None:
        fields["tags"] = split_tags(tags)

    with open_store(resolve_db(db, cfg), cfg) as store:
        try:
            updated = store.update(record_id, fields)
        except RecordValidationError as exc:
            console.print(err_invalid_record(str(exc)))
            raise typer.Exit(1)

    if updated is None:
        console.print(err_decision_not_found(record_id))
        raise typer.Exit(0)

    console.print(f"[green]✓[/] Decision updated: [bold]{updated.title}[/]")
