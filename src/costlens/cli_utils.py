"""Shared CLI utilities for costlens.

Exit codes, the console singleton and logging setup for the typer app.
"""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

# Exit codes following Unix conventions
EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1  # General error (file not found, etc.)
EXIT_CONFIG_ERROR: int = 2  # ConfigError - invalid configuration file
EXIT_REPORT_ERROR: int = 3  # ReportError - unreadable cost report

# When stdout is piped, Rich strips ANSI codes
_is_tty = sys.stdout.isatty()

console = Console(force_terminal=_is_tty, no_color=not _is_tty)

logger = logging.getLogger(__name__)


def _error(message: str) -> None:
    """Display error message with red styling."""
    console.print(f"[red]Error:[/red] {message}")


def _warning(message: str) -> None:
    """Display warning message with yellow styling."""
    console.print(f"[yellow]Warning:[/yellow] {message}")


def _success(message: str) -> None:
    """Display success message with green styling."""
    console.print(f"[green]✓[/green] {message}")


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging based on verbosity flags.

    Args:
        verbose: If True, set DEBUG level.
        quiet: If True, set ERROR level.

    Note:
        verbose takes precedence over quiet. Default level is WARNING.
        COSTLENS_LOG_LEVEL env var overrides both flags.

    """
    env_level = os.environ.get("COSTLENS_LOG_LEVEL", "").upper()
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        level = getattr(logging, env_level)
    elif verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    # Clear any existing handlers to avoid duplicates
    logging.root.handlers.clear()

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setLevel(level)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )
