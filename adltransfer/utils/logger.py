"""Logging setup for AdlTransfer (adltransfer)."""

import logging

from rich.console import Console
from rich.logging import RichHandler

# Third-party loggers surfaced at INFO with --verbose
LIBRARY_LOGGERS = ("azure.datalake.store", "msal")


def setup_logging(verbose=False, console=None):
    """Route log records through rich. Detailed output is enabled with ``verbose``."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("adltransfer").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if verbose else logging.WARNING)
