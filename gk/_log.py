"""Konfiguracja logowania CLI — rich.logging.RichHandler na stderr."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Podpina RichHandler do root loggera; --verbose włącza poziom DEBUG."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )
