"""
Main CLI application using Typer.
"""

from pathlib import Path
from typing import Optional, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..logging_config import setup_logging
from ..domain.exceptions import (
    AggregateBatchFailure,
    EmptyUsernameError,
    UnsupportedPlatformError,
    ValidationError,
)
from ..domain.models import BatchReport, DriveMapping, MappingOutcome, MappingResult
from ..adapters.provider_factory import create_drive_provider
from ..services.batch import BatchOrchestrator, FailurePolicy, build_retry_gate
from ..services.credentials import CredentialAcquirer
from ..services.reconciler import DriveReconciler

app = typer.Typer(
    name="drivemapper",
    help="Map network drives to UNC shares, repairing wrong mappings",
    add_completion=False
)

console = Console()

OUTCOME_STYLES = {
    MappingOutcome.ALREADY_MAPPED: "dim",
    MappingOutcome.CREATED: "green",
    MappingOutcome.REMAPPED: "cyan",
    MappingOutcome.SKIPPED: "yellow",
    MappingOutcome.FAILED: "bold red",
}


def _render_results(results: list[MappingResult], title: str) -> None:
    """Print mapping results as a table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Drive", style="bold yellow")
    table.add_column("Outcome")
    table.add_column("Detail", style="dim")

    for result in results:
        style = OUTCOME_STYLES[result.outcome]
        table.add_row(
            f"{result.letter}:",
            f"[{style}]{result.outcome.value}[/{style}]",
            escape(result.detail or "")
        )

    console.print()
    console.print(table)
    console.print()


def _render_report(report: BatchReport) -> None:
    title = "Drive mappings" if report.succeeded else "Drive mappings (incomplete)"
    _render_results(report.results, title)


@app.command("map")
def map_drive(
    letter: Annotated[str, typer.Argument(help="Drive letter, e.g. H")],
    path: Annotated[str, typer.Argument(help="UNC share, e.g. \\\\server\\share")],
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Only report what would change.")] = False,
    with_credential: Annotated[bool, typer.Option("--with-credential", help="Prompt for credentials before mapping.")] = False,
    domain: Annotated[Optional[str], typer.Option("--domain", help="Domain for the prompted username.")] = None,
    mock: Annotated[bool, typer.Option("--mock", help="Simulate drive mappings in memory.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Map a single drive letter to a share.

    Examples:

        drivemapper map H \\\\fileserver\\home
        drivemapper map S \\\\fileserver\\shared --with-credential --domain CORP
    """
    setup_logging(verbose=verbose)

    try:
        mapping = DriveMapping(letter=letter, target_path=path).validated()
        provider = create_drive_provider(mock=mock)
        reconciler = DriveReconciler(provider)

        credential = None
        if with_credential and not dry_run:
            credential = CredentialAcquirer().acquire(domain_hint=domain)

        result = reconciler.reconcile(mapping, credential=credential, dry_run=dry_run)

    except (ValidationError, EmptyUsernameError, UnsupportedPlatformError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    _render_results([result], "Drive mapping")

    if not result.succeeded:
        raise typer.Exit(1)


@app.command("map-all")
def map_all(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./drives.yaml")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Only report what would change.")] = False,
    on_failure: Annotated[Optional[FailurePolicy], typer.Option("--on-failure", help="prompt: ask for credentials, confirm: ask first, abort: never retry.")] = None,
    domain: Annotated[Optional[str], typer.Option("--domain", help="Domain for the prompted username. Overrides the config.")] = None,
    mock: Annotated[bool, typer.Option("--mock", help="Simulate drive mappings in memory.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Map every drive listed in the config file.

    Drives that fail with the current logon are retried once with
    credentials that are asked for only once.

    Examples:

        drivemapper map-all
        drivemapper map-all --config login.yaml --dry-run
        drivemapper map-all --on-failure confirm --domain CORP
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    setup_logging(verbose=verbose, log_file=config.log_file)

    policy = on_failure or config.on_failure

    try:
        provider = create_drive_provider(
            mock=mock,
            persistent=config.persistent,
            timeout_seconds=config.timeout_seconds
        )
        orchestrator = BatchOrchestrator(
            reconciler=DriveReconciler(provider),
            credential_acquirer=CredentialAcquirer(),
            domain_hint=domain or config.domain,
            on_failure=build_retry_gate(policy)
        )
        report = orchestrator.map_all(config.to_mappings(), dry_run=dry_run)

    except (ValidationError, UnsupportedPlatformError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    except AggregateBatchFailure as e:
        _render_report(e.report)
        console.print(f"[bold red]✗ {escape(str(e))}[/bold red]\n")
        raise typer.Exit(1)

    _render_report(report)
    console.print("[green]✓ All drives mapped.[/green]\n")


@app.command("list-drives")
def list_drives(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured drive mappings.
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if not config.drives:
        console.print("[yellow]No drives defined in the config file.[/yellow]")
        return

    table = Table(
        title="Configured drives",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Drive", style="bold yellow")
    table.add_column("Share", style="dim")

    for entry in config.drives:
        table.add_row(f"{entry.letter.upper()}:", escape(entry.path))

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]drivemapper[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
