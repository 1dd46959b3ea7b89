"""Reporter for sync output and progress tracking."""

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)

from conversation_archive.domain.models import ReconciliationResult, SyncResult


class Reporter:
    """Sync reporter with rich progress bars and formatted output."""

    CHANGE_PREVIEW_LIMIT = 10

    def __init__(self, silent: bool = False) -> None:
        """Initialize reporter.

        Args:
            silent: If True, suppress all output (for testing/automation).
        """
        self.silent = silent
        self.console = Console(quiet=silent)
        self._capture_progress: Progress | None = None
        self._capture_task_id: int | None = None

    def report_plan(self, plan: ReconciliationResult, desired: int, archived: int) -> None:
        """Report what the run is going to change."""
        if self.silent:
            return

        self.console.print(
            f"Found {desired} linked conversations, {archived} already archived"
        )
        if not plan.has_changes:
            self.console.print("[dim]Archive is up to date[/dim]")
            return

        self._render_id_list("To archive", plan.sorted_to_add, "green", "✓")
        self._render_id_list("To delete", plan.sorted_to_remove, "red", "✗")

    def report_deleted(self, document_id: str, filename: str, removed: bool) -> None:
        """Report the deletion of a stale snapshot."""
        if self.silent:
            return

        if removed:
            self.console.print(f"[red]Deleted[/red] {filename}")
        else:
            self.report_warning(f"Snapshot for {document_id} was already gone: {filename}")

    def capture_context(self, total: int):
        """Context manager for capture progress display."""
        if self.silent:

            class NoOpContext:
                def __enter__(self):
                    return self

                def __exit__(self, *args):
                    pass

            return NoOpContext()

        class CaptureContext:
            def __init__(ctx_self, reporter):
                ctx_self.reporter = reporter

            def __enter__(ctx_self):
                progress = Progress(
                    TextColumn("{task.description}"),
                    BarColumn(),
                    MofNCompleteColumn(),
                    TextColumn("•"),
                    TextColumn("[red]{task.fields[failed]} failed"),
                    TimeElapsedColumn(),
                    console=ctx_self.reporter.console,
                )
                progress.__enter__()
                ctx_self.reporter._capture_progress = progress
                ctx_self.reporter._capture_task_id = progress.add_task(
                    "Archiving conversations", total=total, failed=0
                )
                return progress

            def __exit__(ctx_self, *args):
                if ctx_self.reporter._capture_progress:
                    ctx_self.reporter._capture_progress.__exit__(*args)
                    ctx_self.reporter._capture_progress = None
                    ctx_self.reporter._capture_task_id = None

        return CaptureContext(self)

    def create_capture_progress_hook(self):
        """Create a progress hook advancing the capture bar per finished job."""
        if self.silent:

            def hook(document_id: str, succeeded: bool) -> None:
                pass

            return hook

        if self._capture_progress is None:
            raise RuntimeError("Must be called within capture_context")

        failed = 0

        def hook(document_id: str, succeeded: bool) -> None:
            nonlocal failed
            if self._capture_progress is None or self._capture_task_id is None:
                return

            if not succeeded:
                failed += 1
            self._capture_progress.update(self._capture_task_id, advance=1, failed=failed)

        return hook

    def report_summary(self, result: SyncResult) -> None:
        """Report the outcome of a run."""
        if self.silent:
            return

        if result.dry_run:
            self.console.print("\n[yellow]Dry run, no files were changed[/yellow]")
            return

        self.console.print("\n[bold]Archive updated[/bold]")
        self._render_id_list("Added", result.added, "green", "✓")
        self._render_id_list("Deleted", result.removed, "red", "✗")

        if result.failed:
            self._render_id_list(
                "Failed",
                [f"{document_id}: {reason}" for document_id, reason in sorted(result.failed.items())],
                "yellow",
                "⚡",
            )

        if not (result.added or result.removed or result.failed):
            self.console.print("  [dim]No changes[/dim]")

    def report_warning(self, message: str) -> None:
        """Report a warning message."""
        if not self.silent:
            self.console.print(f"\n[yellow]Warning:[/yellow] {message}")

    def report_error(self, message: str) -> None:
        """Report an error message."""
        if not self.silent:
            self.console.print(f"\n[red]Error:[/red] {message}")

    def _render_id_list(
        self,
        label: str,
        items: list[str],
        color: str,
        glyph: str,
    ) -> None:
        """Pretty-print a short list of conversations for the given bucket."""
        if not items:
            return

        count = len(items)
        preview = items[: self.CHANGE_PREVIEW_LIMIT]
        self.console.print(f"  [{color}]{glyph} {label}: {count}[/{color}]")
        for item in preview:
            self.console.print(f"      {item}")

        remaining = count - len(preview)
        if remaining > 0:
            self.console.print(f"      ... (+{remaining} more)")
