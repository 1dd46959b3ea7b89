"""Typer-based CLI for the conversation archive."""

import logging

import orjson
import typer
from rich.logging import RichHandler

from conversation_archive.config import Settings
from conversation_archive.domain.errors import ConversationArchiveError
from conversation_archive.domain.services import ArchiveQueryService
from conversation_archive.orchestrators import ConversationSync
from conversation_archive.ui import Reporter
from conversation_archive.ui.tables import create_snapshot_table, format_status_summary

app = typer.Typer(help="Archive shared conversations as self-contained HTML snapshots")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Show help when no subcommand is provided."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command()
def sync(
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would change without touching any file"
    ),
    concurrency: int = typer.Option(
        None, "--concurrency", "-c", min=1, help="Maximum number of concurrent captures"
    ),
):
    """Archive newly linked conversations and delete stale snapshots."""
    reporter = Reporter()
    overrides = {"max_capture_concurrency": concurrency} if concurrency else {}

    try:
        config = Settings(**overrides)
        result = ConversationSync(config).sync(reporter=reporter, dry_run=dry_run)
    except ConversationArchiveError as e:
        reporter.report_error(str(e))
        raise typer.Exit(1) from e

    if dry_run:
        reporter.console.print(f"\n[bold]Report preview:[/bold]\n{result.report}")
        return

    if result.has_failures:
        raise typer.Exit(1)


@app.command("list")
def list_snapshots(
    status: str = typer.Option(
        None,
        "--status",
        "-s",
        help="Filter by status: tracked, stale (no longer linked), or missing (not yet archived)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print entries as JSON"),
):
    """List archived conversations and how they relate to workspace links."""
    reporter = Reporter()

    valid_statuses = {"tracked", "stale", "missing"}
    if status and status not in valid_statuses:
        reporter.console.print(
            f"[red]Invalid status: {status}[/red]\n"
            f"Valid options: {', '.join(sorted(valid_statuses))}"
        )
        raise typer.Exit(1)

    config = Settings()
    orchestrator = ConversationSync(config)

    try:
        desired = orchestrator.discover()
        entries = orchestrator.store.entries()
    except ConversationArchiveError as e:
        reporter.report_error(str(e))
        raise typer.Exit(1) from e

    results = ArchiveQueryService.get_entries_by_status(entries, desired=desired, status=status)

    if as_json:
        typer.echo(orjson.dumps(results, option=orjson.OPT_INDENT_2).decode("utf-8"))
        return

    if not results:
        reporter.console.print("[dim]No matching conversations found[/dim]")
        return

    reporter.console.print(create_snapshot_table(results))
    reporter.console.print(f"\n[bold]Summary:[/bold] {format_status_summary(results)}")


@app.command()
def discover():
    """Print the conversation ids linked from workspace files."""
    config = Settings()
    for document_id in sorted(ConversationSync(config).discover()):
        typer.echo(document_id)


if __name__ == "__main__":
    app()
