"""Logging setup for the command-line entry point.

Library modules only create ``logging.getLogger(__name__)`` loggers; the CLI
calls :func:`setup_logging` once to route them through rich on stderr.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "continuum-rich"


def setup_logging(verbose: bool = False) -> None:
    """Attach a RichHandler to the ``continuum`` logger (idempotent).

    WARNING and above by default; DEBUG when *verbose*.
    """
    logger = logging.getLogger("continuum")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
