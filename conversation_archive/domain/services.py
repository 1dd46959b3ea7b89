"""Business logic services for the archive."""

from collections.abc import Iterable, Sequence

from conversation_archive.domain.models import ReconciliationResult, SnapshotEntry

REPORT_HEADER = "chore: Automatic conversation archive\n"


class ReconciliationService:
    """Service for determining which snapshots need creating or removing."""

    @staticmethod
    def reconcile(desired: Iterable[str], archived: Iterable[str]) -> ReconciliationResult:
        """Compare desired document ids against archived ones.

        Args:
            desired: Document ids referenced by the workspace
            archived: Document ids that already have a snapshot

        Returns:
            ReconciliationResult with ids to add (desired but not archived)
            and ids to remove (archived but no longer desired)
        """
        desired_ids = frozenset(desired)
        archived_ids = frozenset(archived)

        return ReconciliationResult(
            to_add=desired_ids - archived_ids,
            to_remove=archived_ids - desired_ids,
        )


class ReportBuilder:
    """Service for composing the change summary of a run."""

    @staticmethod
    def build(added: Sequence[str], removed: Sequence[str]) -> str:
        """Build the commit message describing added and deleted snapshots.

        Args:
            added: Document ids that were archived during the run
            removed: Document ids whose snapshots were deleted

        Returns:
            Message with a fixed header, followed by one line per non-empty group
        """
        message = REPORT_HEADER

        if added:
            message += f"\nAdded conversations: {', '.join(added)}"
        if removed:
            message += f"\nDeleted conversations: {', '.join(removed)}"

        return message


class ArchiveQueryService:
    """Service for querying the archive against the desired documents."""

    @staticmethod
    def get_entries_by_status(
        entries: list[SnapshotEntry],
        desired: set[str] | None = None,
        status: str | None = None,
    ) -> list[dict]:
        """List archive entries with their tracking status.

        Args:
            entries: Snapshot files found in the archive
            desired: Document ids referenced by the workspace. If None, every
                entry is reported as tracked.
            status: Filter by status (tracked, stale, or missing)

        Returns:
            List of dictionaries with document_id, title, filename, size, status.
            Desired ids without a snapshot are reported as missing.
        """
        results = []
        archived_ids = set()

        for entry in entries:
            archived_ids.add(entry.document_id)
            entry_status = "tracked" if desired is None or entry.document_id in desired else "stale"
            results.append(
                {
                    "document_id": entry.document_id,
                    "title": entry.title,
                    "filename": entry.filename,
                    "size": entry.size,
                    "status": entry_status,
                }
            )

        for document_id in sorted((desired or set()) - archived_ids):
            results.append(
                {
                    "document_id": document_id,
                    "title": "",
                    "filename": None,
                    "size": 0,
                    "status": "missing",
                }
            )

        if status:
            results = [r for r in results if r["status"] == status]

        return results
