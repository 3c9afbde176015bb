"""Continuum rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from continuum.cli.errors import err_no_db
    console.print(err_no_db(".continuum.db"))
    raise typer.Exit(1)
"""

from __future__ import annotations


def err_no_db(db_path: str = ".continuum.db") -> str:
    """No journal database at *db_path*."""
    return (
        f"[red]Error:[/] No journal found at '{db_path}'.\n"
        "  Run:  continuum init"
    )


def err_decision_not_found(record_id: int) -> str:
    """No decision with the given id."""
    return (
        f"[yellow]Decision not found:[/] no decision with id {record_id}.\n"
        "  Run:  continuum list  to see all decisions and their ids."
    )


def err_invalid_record(detail: str) -> str:
    """User input does not make a valid decision."""
    return (
        f"[red]Error:[/] Invalid decision: {detail}\n"
        "  Title, intent, constraints, final decision and reasoning are required;\n"
        "  emotional state must be a number from 0 to 10."
    )


def err_import_format(path: str, detail: str) -> str:
    """Import file rejected as a whole."""
    return (
        f"[red]Error:[/] Could not import '{path}': {detail}\n"
        "  Nothing was imported. The file must be a JSON array of decisions,\n"
        "  as written by:  continuum export"
    )


def err_import_unreadable(path: str) -> str:
    """Import file missing or unreadable."""
    return (
        f"[red]Error:[/] Cannot read import file '{path}'.\n"
        "  Check the path and file permissions."
    )


def err_unknown_kind(kind: str, kinds: list[str]) -> str:
    """Insight kind not recognised."""
    return (
        f"[red]Error:[/] Unknown insight kind '{kind}'.\n"
        f"  Choose one of: {', '.join(kinds)}"
    )


def err_bad_filter(detail: str) -> str:
    """Invalid timeline filter or page."""
    return (
        f"[red]Error:[/] {detail}\n"
        "  Timeframes: all, week, month, year. Pages start at 1."
    )


def err_config(detail: str) -> str:
    """Config file contains an invalid value."""
    return (
        f"[red]Error:[/] Invalid configuration: {detail}\n"
        "  Fix continuum.yaml (or ~/.continuum/config.yaml) and try again."
    )


def err_output_path_unsafe(path: str) -> str:
    """--output path fails security validation."""
    return (
        f"[red]Error:[/] Output path is not allowed: '{path}'\n"
        "  Use a path within the current working directory."
    )
