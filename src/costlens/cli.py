"""Command-line interface for costlens.

Runs the change-detection core on files, outside of any editor:

    costlens declarations Foo.java
    costlens classify Foo.old.java Foo.java --non-constant sort
    costlens history Foo.java run1.json run2.json
"""

import logging
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from costlens.changes.classifier import UNATTRIBUTED, classify_change
from costlens.changes.registry import NonConstantRegistry
from costlens.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_REPORT_ERROR,
    _error,
    _setup_logging,
    _success,
    _warning,
    console,
)
from costlens.core.config import CostLensConfig, load_config
from costlens.core.exceptions import ConfigError, ReportError
from costlens.costs.history import CostHistoryTracker
from costlens.costs.report import load_cost_report
from costlens.java.declarations import find_method_declarations

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="costlens",
    help="Change-aware method cost tracking",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
) -> None:
    """Change-aware method cost tracking."""
    _setup_logging(verbose, quiet)


def _read_source(path: Path) -> str:
    """Read a source file or exit with EXIT_ERROR."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _error(f"Cannot read {path}: {e}")
        raise typer.Exit(code=EXIT_ERROR) from e


@app.command("declarations")
def declarations_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Java source file"),
) -> None:
    """List the method identities declared in FILE."""
    declarations = find_method_declarations(_read_source(file))
    if not declarations:
        _warning(f"No method declarations found in {file}")
        return

    table = Table(title=escape(str(file)))
    table.add_column("Line", justify="right")
    table.add_column("Method")
    for declaration in declarations:
        table.add_row(
            str(declaration.declaration_range.start.line + 1),
            escape(declaration.identity),
        )
    console.print(table)


@app.command("classify")
def classify_command(
    previous: Path = typer.Argument(..., exists=True, dir_okay=False, help="Previous snapshot"),
    current: Path = typer.Argument(..., exists=True, dir_okay=False, help="Current snapshot"),
    non_constant: list[str] | None = typer.Option(
        None,
        "--non-constant",
        "-n",
        help="Method name with non-constant cost (repeatable)",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML config with method_whitelist",
    ),
) -> None:
    """Decide whether the edit from PREVIOUS to CURRENT is significant."""
    config = CostLensConfig()
    if config_path is not None:
        try:
            config = load_config(config_path)
        except ConfigError as e:
            _error(str(e))
            raise typer.Exit(code=EXIT_CONFIG_ERROR) from e

    result = classify_change(
        _read_source(previous),
        _read_source(current),
        NonConstantRegistry(non_constant or ()),
        config.method_whitelist,
    )

    if result.is_significant:
        console.print("[bold red]Significant change[/bold red]")
    else:
        _success("No significant change")
    for identity, causes in result.causes.items():
        label = identity if identity != UNATTRIBUTED else "<unknown method>"
        console.print(f"  {escape(label)}: {escape(', '.join(causes))}")


@app.command("history")
def history_command(
    source_file: str = typer.Argument(..., help="Analyzed source file path (used in ids)"),
    reports: list[Path] = typer.Argument(..., help="Cost reports, oldest first"),
) -> None:
    """Replay successive cost REPORTS and print each method's history."""
    tracker = CostHistoryTracker()
    for report in reports:
        try:
            tracker.update(load_cost_report(report, source_file))
        except ReportError as e:
            _error(str(e))
            raise typer.Exit(code=EXIT_REPORT_ERROR) from e

    table = Table(title=escape(source_file))
    table.add_column("Method")
    table.add_column("Execution cost")
    table.add_column("Big O")
    table.add_column("Recorded")
    for entry_id in tracker.ids():
        for entry in tracker.history(entry_id):
            table.add_row(
                escape(entry.identity),
                escape(entry.exec_cost.polynomial),
                escape(entry.exec_cost.big_o),
                entry.timestamp.strftime("%Y-%m-%d %H:%M:%S") if entry.timestamp else "",
            )
    console.print(table)


def main() -> None:
    """Entry point for the ``costlens`` console script."""
    app()


if __name__ == "__main__":
    main()
