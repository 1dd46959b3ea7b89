"""Conversation synchronization orchestrator.

Coordinates the complete end-to-end archive synchronization workflow.
"""

import asyncio
import logging

from atomicwrites import atomic_write

from conversation_archive.config import Settings
from conversation_archive.domain.models import ExecutionResult, ReconciliationResult, SyncResult
from conversation_archive.domain.services import ReconciliationService, ReportBuilder
from conversation_archive.operations.archive_store import ArchiveStore
from conversation_archive.operations.discovery import find_document_ids
from conversation_archive.operations.executor import run_all
from conversation_archive.operations.scripts import load_script_bundle
from conversation_archive.operations.snapshot import SnapshotPipeline, browser_session
from conversation_archive.ui import Reporter

logger = logging.getLogger(__name__)


class ConversationSync:
    """Orchestrates the complete archive synchronization workflow.

    This orchestrator coordinates the entire run:
    1. Discover conversations linked from workspace files
    2. Index the archive directory
    3. Reconcile desired and archived conversations
    4. Delete stale snapshots
    5. Capture new snapshots concurrently
    6. Write the change report
    """

    def __init__(self, config: Settings | None = None):
        """Initialize the sync orchestrator.

        Args:
            config: Archive configuration. If None, creates new Settings() from environment.
        """
        self.config = config if config is not None else Settings()
        self.store = ArchiveStore(self.config.archive_dir)
        self.reconciliation_service = ReconciliationService()

    def discover(self) -> set[str]:
        """Return the conversation ids linked from the workspace."""
        return find_document_ids(
            self.config.workspace_root,
            self.config.source_glob,
            exclude=[self.config.archive_dir],
        )

    def plan(self) -> tuple[set[str], dict[str, str], ReconciliationResult]:
        """Compute the reconciliation without touching the archive.

        Returns:
            Tuple of (desired ids, archive index, reconciliation)
        """
        desired = self.discover()
        archived = self.store.list_snapshots()
        plan = self.reconciliation_service.reconcile(desired, archived.keys())
        logger.info(f"Reconciled {len(desired)} desired with {len(archived)} archived: {plan!r}")
        return desired, archived, plan

    def sync(self, reporter: Reporter | None = None, dry_run: bool = False) -> SyncResult:
        """Run the complete synchronization workflow.

        Args:
            reporter: Optional reporter for progress. Defaults to Reporter().
            dry_run: Only report what would change, without touching any file.

        Returns:
            SyncResult describing added, removed, and failed conversations
        """
        if reporter is None:
            reporter = Reporter()

        # Step 1-3: Discover, index, reconcile
        desired, archived, plan = self.plan()
        reporter.report_plan(plan, desired=len(desired), archived=len(archived))

        if dry_run:
            return SyncResult(
                added=plan.sorted_to_add,
                removed=plan.sorted_to_remove,
                report=ReportBuilder.build(plan.sorted_to_add, plan.sorted_to_remove),
                dry_run=True,
            )

        # Step 4: Delete stale snapshots
        self.store.create_directory()
        removed = self._delete_stale(plan, archived, reporter)

        # Step 5: Capture new snapshots
        execution = ExecutionResult()
        if plan.to_add:
            execution = asyncio.run(self._capture(plan.sorted_to_add, reporter))

        # Step 6: Report
        added = sorted(execution.succeeded)
        report = ReportBuilder.build(added, removed)
        self._write_report(report)

        result = SyncResult(added=added, removed=removed, failed=execution.failures, report=report)
        reporter.report_summary(result)
        return result

    def _delete_stale(
        self,
        plan: ReconciliationResult,
        archived: dict[str, str],
        reporter: Reporter,
    ) -> list[str]:
        """Delete snapshots of conversations no longer linked anywhere.

        Returns:
            Sorted ids of the stale conversations
        """
        removed = []
        for document_id in plan.sorted_to_remove:
            filename = archived[document_id]
            was_present = self.store.delete(filename)
            reporter.report_deleted(document_id, filename, was_present)
            removed.append(document_id)
        return removed

    async def _capture(self, document_ids: list[str], reporter: Reporter) -> ExecutionResult:
        """Capture snapshots with a shared browser and progress tracking.

        Args:
            document_ids: Conversations to capture
            reporter: Progress reporter
        """
        scripts = load_script_bundle(self.config)

        async with browser_session(self.config) as browser:
            pipeline = SnapshotPipeline(browser, scripts, self.config)

            with reporter.capture_context(len(document_ids)):
                return await run_all(
                    document_ids,
                    pipeline.capture,
                    self.config.max_capture_concurrency,
                    self.store.save_snapshot,
                    progress_hook=reporter.create_capture_progress_hook(),
                )

    def _write_report(self, report: str) -> None:
        """Write the change report for the calling workflow."""
        path = self.config.report_file
        path.parent.mkdir(parents=True, exist_ok=True)
        with atomic_write(path, mode="w", encoding="utf-8", overwrite=True) as f:
            f.write(report)
        logger.debug(f"Wrote change report to {path}")
